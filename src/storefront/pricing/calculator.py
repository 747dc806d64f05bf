"""Order pricing: shipping, tax and grand total from a subtotal.

The same `calculate` is used by the cart summary, the checkout summary and
order placement, so the three can never disagree.
"""

from dataclasses import dataclass

FREE_SHIPPING_THRESHOLD = 50.0
FLAT_SHIPPING_RATE = 5.0
TAX_RATE = 0.10


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: float
    shipping: float
    tax: float
    total: float

    @property
    def free_shipping(self) -> bool:
        return self.shipping == 0

    def as_display(self) -> dict[str, str]:
        return {
            "subtotal": format_amount(self.subtotal),
            "shipping": format_shipping(self.shipping),
            "tax": format_amount(self.tax),
            "total": format_amount(self.total),
        }


def calculate(subtotal: float) -> PriceBreakdown:
    shipping = 0.0 if subtotal >= FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_RATE
    tax = subtotal * TAX_RATE
    return PriceBreakdown(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=subtotal + shipping + tax,
    )


def format_amount(amount: float) -> str:
    return f"{amount:.2f}"


def format_shipping(amount: float) -> str:
    return "Free" if amount == 0 else format_amount(amount)

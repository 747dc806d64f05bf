"""Checkout flow for one shopper.

    Collecting → Submitting → Complete
                     ↓
                  Failed → Collecting

A failure of any kind is reported with the same message; nothing from the
attempt is kept, so the shopper simply submits again.
"""

import json
from dataclasses import dataclass
from enum import Enum

from protean.utils.globals import current_domain

from storefront.auth.session import AuthSession
from storefront.cart.store import CartStore
from storefront.checkout.form import ShippingForm
from storefront.checkout.placement import PlaceOrder
from storefront.pricing.calculator import PriceBreakdown, calculate
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

FAILURE_MESSAGE = "Failed to place order. Please try again."
CART_PATH = "/cart"
ORDERS_PATH = "/dashboard"


class CheckoutState(Enum):
    COLLECTING = "collecting"
    SUBMITTING = "submitting"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass(frozen=True)
class CheckoutOutcome:
    state: CheckoutState
    redirect_to: str | None = None
    message: str | None = None
    order_id: str | None = None
    order_number: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.state == CheckoutState.COMPLETE


class CheckoutOrchestrator:
    def __init__(self, session: AuthSession, cart: CartStore):
        self.session = session
        self.cart = cart
        self.state = CheckoutState.COLLECTING
        self.error: str | None = None

    def enter(self) -> str | None:
        """Where to send the shopper instead of checkout, if anywhere."""
        if self.cart.is_empty:
            return CART_PATH
        return None

    def summary(self) -> PriceBreakdown:
        return calculate(self.cart.total)

    def submit(self, form: ShippingForm) -> CheckoutOutcome:
        if self.cart.is_empty:
            return CheckoutOutcome(state=self.state, redirect_to=CART_PATH)

        self.state = CheckoutState.SUBMITTING
        self.error = None

        try:
            user_id = self.session.require_user()
            placed = current_domain.process(
                PlaceOrder(user_id=user_id, shipping_address=json.dumps(form.to_address())),
                asynchronous=False,
            )
        except Exception as exc:
            logger.error("checkout.failed", user_id=self.session.user_id, error=str(exc), exc_info=True)
            self.error = FAILURE_MESSAGE
            self.state = CheckoutState.COLLECTING
            return CheckoutOutcome(state=CheckoutState.FAILED, message=FAILURE_MESSAGE)

        self.state = CheckoutState.COMPLETE
        self.cart.fetch()

        return CheckoutOutcome(
            state=CheckoutState.COMPLETE,
            redirect_to=ORDERS_PATH,
            message=f"Order placed successfully! Order number: {placed['order_number']}",
            order_id=placed["order_id"],
            order_number=placed["order_number"],
        )

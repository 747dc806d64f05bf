"""Order aggregate: the immutable record of a checkout.

An order snapshots the shipping address, the purchased lines and the price
breakdown at the moment of placement. Only its status moves afterwards:

    pending → processing → shipped → delivered
    pending | processing → cancelled
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from storefront.domain import storefront
from storefront.order.events import OrderPlaced, OrderStatusChanged

# Totals must reconcile to within a thousandth of a cent
AMOUNT_TOLERANCE = 0.00001


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class Address:
    """Where an order ships to (and is billed to), as entered at checkout."""

    full_name = String(required=True, max_length=255)
    phone = String(required=True, max_length=50)
    address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A purchased line, denormalized so later catalog edits leave it untouched."""

    product_id = Identifier(required=True)
    product_title = String(required=True, max_length=255)
    product_image = String(max_length=500)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    total_price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    order_number = String(required=True, max_length=50, unique=True)
    user_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    payment_method = String(max_length=50, default="card")
    items = HasMany(OrderItem)
    shipping_address = ValueObject(Address)
    billing_address = ValueObject(Address)
    subtotal = Float(default=0.0)
    discount_amount = Float(default=0.0)
    tax_amount = Float(default=0.0)
    shipping_amount = Float(default=0.0)
    total_amount = Float(default=0.0)
    notes = Text()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def totals_must_reconcile(self):
        line_sum = sum(item.total_price for item in self.items)
        expected = line_sum - (self.discount_amount or 0.0) + (self.tax_amount or 0.0) + (self.shipping_amount or 0.0)
        if abs(expected - (self.total_amount or 0.0)) > AMOUNT_TOLERANCE:
            raise ValidationError(
                {"total_amount": [f"Order total {self.total_amount} does not match its lines and charges ({expected})"]}
            )

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, order_number, user_id, address, lines, pricing, discount_amount=0.0, notes=None):
        """Create a pending order from checkout data.

        Args:
            order_number: Human-readable number issued for this order.
            user_id: The customer placing the order.
            address: Dict with the `Address` fields; used for shipping and billing.
            lines: List of dicts with product_id, product_title, product_image,
                   unit_price and quantity.
            pricing: `PriceBreakdown` computed from the lines' subtotal.
        """
        now = datetime.now(UTC)
        order = cls(
            order_number=order_number,
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
            payment_method="card",
            shipping_address=Address(**address),
            billing_address=Address(**address),
            notes=notes,
            created_at=now,
            updated_at=now,
        )

        with atomic_change(order):
            for line in lines:
                order.add_items(
                    OrderItem(
                        product_id=line["product_id"],
                        product_title=line["product_title"],
                        product_image=line.get("product_image"),
                        unit_price=line["unit_price"],
                        quantity=line["quantity"],
                        total_price=line["unit_price"] * line["quantity"],
                    )
                )
            order.subtotal = pricing.subtotal
            order.discount_amount = discount_amount
            order.tax_amount = pricing.tax
            order.shipping_amount = pricing.shipping
            order.total_amount = pricing.total - discount_amount

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                user_id=str(user_id),
                item_count=sum(line["quantity"] for line in lines),
                subtotal=order.subtotal,
                total_amount=order.total_amount,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status lifecycle
    # -------------------------------------------------------------------
    def _transition_to(self, target):
        current = OrderStatus(self.status)
        if target not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )

    def start_processing(self):
        self._transition_to(OrderStatus.PROCESSING)

    def ship(self):
        self._transition_to(OrderStatus.SHIPPED)

    def deliver(self):
        self._transition_to(OrderStatus.DELIVERED)

    def cancel(self):
        self._transition_to(OrderStatus.CANCELLED)

"""Order placement: turns a customer's cart into an order.

The handler runs in a single unit of work: issuing the order number, saving
the order with its lines, and emptying the cart either all commit or none do.
Lines and pricing are recomputed from the persisted cart and current product
prices, never from what the client last saw.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalog.product import Product
from storefront.domain import storefront
from storefront.order.numbering import get_generator
from storefront.order.order import Order
from storefront.pricing.calculator import calculate
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    shipping_address = Text(required=True)  # JSON: Address fields
    notes = Text()


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        address = (
            json.loads(command.shipping_address)
            if isinstance(command.shipping_address, str)
            else command.shipping_address
        )

        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.for_customer(command.user_id)
        if cart is None or not cart.items:
            raise ValidationError({"cart": ["Cannot place an order from an empty cart"]})

        product_repo = current_domain.repository_for(Product)
        lines = []
        for item in sorted(cart.items, key=lambda i: i.added_at):
            product = product_repo.get(item.product_id)
            lines.append(
                {
                    "product_id": str(product.id),
                    "product_title": product.title,
                    "product_image": product.primary_image,
                    "unit_price": product.price,
                    "quantity": item.quantity,
                }
            )

        pricing = calculate(sum(line["unit_price"] * line["quantity"] for line in lines))
        order_number = get_generator().generate()
        order_repo = current_domain.repository_for(Order)
        if order_repo.find_by_number(order_number) is not None:
            raise ValidationError({"order_number": [f"Order number {order_number} has already been issued"]})

        order = Order.place(
            order_number=order_number,
            user_id=command.user_id,
            address=address,
            lines=lines,
            pricing=pricing,
            notes=command.notes,
        )
        order_repo.add(order)

        cart.clear()
        cart_repo.add(cart)

        logger.info(
            "checkout.order_placed",
            order_id=str(order.id),
            order_number=order_number,
            user_id=command.user_id,
            total=order.total_amount,
        )
        return {"order_id": str(order.id), "order_number": order_number}

"""Cart item management: commands and handler.

Every command is addressed by customer rather than by cart id; the first
add for a customer starts their cart.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalog.product import Product
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)


@storefront.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    """Overwrite a line's quantity; zero or less removes the line."""

    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    customer_id = Identifier(required=True)


def _existing_cart(customer_id) -> ShoppingCart:
    cart = current_domain.repository_for(ShoppingCart).for_customer(customer_id)
    if cart is None:
        raise ValidationError({"customer_id": ["No cart found for customer"]})
    return cart


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        # Raises ObjectNotFoundError for unknown products
        current_domain.repository_for(Product).get(command.product_id)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        if cart is None:
            cart = ShoppingCart.create(customer_id=command.customer_id)

        item = cart.add_item(product_id=command.product_id, quantity=command.quantity or 1)
        repo.add(cart)

        logger.info(
            "cart.item_added",
            customer_id=command.customer_id,
            product_id=command.product_id,
            quantity=item.quantity,
        )
        return str(item.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        cart = _existing_cart(command.customer_id)
        cart.update_item_quantity(item_id=command.item_id, new_quantity=command.quantity)
        current_domain.repository_for(ShoppingCart).add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = _existing_cart(command.customer_id)
        cart.remove_item(item_id=command.item_id)
        current_domain.repository_for(ShoppingCart).add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        if cart is None:
            return

        cart.clear()
        repo.add(cart)
        logger.info("cart.cleared", customer_id=command.customer_id)

from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront


@storefront.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def for_customer(self, customer_id: str) -> ShoppingCart | None:
        """The customer's cart, if one has been started."""
        carts = self._dao.query.filter(customer_id=customer_id).all().items
        return carts[0] if carts else None

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_for_user(self, user_id: str) -> list[Order]:
        """The user's orders, newest first."""
        orders = self._dao.query.filter(user_id=user_id).all().items
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def find_by_number(self, order_number: str) -> Order | None:
        matches = self._dao.query.filter(order_number=order_number).all().items
        return matches[0] if matches else None

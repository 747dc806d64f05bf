"""The signed-in customer's past orders."""

from protean.utils.globals import current_domain

from storefront.auth.session import AuthSession
from storefront.order.order import Order
from storefront.shared.errors import Unauthenticated
from storefront.shared.result import Err, ErrorKind, Ok, Result
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderHistory:
    def __init__(self, session: AuthSession):
        self.session = session

    def list_orders(self) -> Result[list[Order]]:
        """Orders with their items, newest first."""
        if not self.session.is_authenticated:
            return Err.from_exception(Unauthenticated("Please sign in to view your orders"))

        try:
            orders = current_domain.repository_for(Order).find_for_user(self.session.user_id)
        except Exception as exc:
            logger.error("orders.list_failed", user_id=self.session.user_id, error=str(exc), exc_info=True)
            return Err(ErrorKind.BACKEND, str(exc))

        return Ok(orders)

"""Order status back-office: admin commands and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class StartProcessing:
    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class ShipOrder:
    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class DeliverOrder:
    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class ManageOrderStatusHandler:
    def _advance(self, order_id, transition):
        repo = current_domain.repository_for(Order)
        order = repo.get(order_id)
        previous = order.status
        transition(order)
        repo.add(order)
        logger.info("order.status_changed", order_id=order_id, previous=previous, status=order.status)
        return order.status

    @handle(StartProcessing)
    def start_processing(self, command):
        return self._advance(command.order_id, Order.start_processing)

    @handle(ShipOrder)
    def ship_order(self, command):
        return self._advance(command.order_id, Order.ship)

    @handle(DeliverOrder)
    def deliver_order(self, command):
        return self._advance(command.order_id, Order.deliver)

    @handle(CancelOrder)
    def cancel_order(self, command):
        return self._advance(command.order_id, Order.cancel)

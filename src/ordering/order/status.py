"""Order status management — back-office command, handler and delivery notification."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.handoff import get_channel
from ordering.handoff.templates import OrderDeliveredTemplate
from ordering.order.events import OrderDelivered
from ordering.order.order import Order, OrderStatus


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, choices=OrderStatus)


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.change_status(command.status)
        repo.add(order)
        logger.info("Order status updated", order_id=str(order.id), status=order.status)


@ordering.event_handler(part_of=Order)
class OrderDeliveredNotifier:
    """Tells the customer over chat that their order has arrived."""

    @handle(OrderDelivered)
    def notify_customer(self, event: OrderDelivered) -> None:
        if not event.customer_phone:
            logger.info(
                "No phone number for customer, delivery notification skipped",
                order_id=str(event.order_id),
            )
            return

        body = OrderDeliveredTemplate.render({"customer_name": event.customer_name})
        result = get_channel().send(event.customer_phone, body)
        if result.get("status") == "sent":
            logger.info("Delivery notification handed off", order_id=str(event.order_id))
        else:
            logger.warning(
                "Delivery notification failed",
                order_id=str(event.order_id),
                error=result.get("error"),
            )

"""Order placement — command and handler."""

import json

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class PlaceOrder:
    customer_name = String(required=True, max_length=100)
    customer_id = Identifier()
    customer_phone = String(max_length=20)
    items = Text(required=True)  # JSON: list of line dicts
    total_amount = Integer(required=True, min_value=0)
    special_request = Text()


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items

        order = Order.place(
            customer_name=command.customer_name,
            customer_id=command.customer_id,
            customer_phone=command.customer_phone,
            items_data=items_data,
            total_amount=command.total_amount,
            special_request=command.special_request,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)

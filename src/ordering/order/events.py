"""Domain events for the Order aggregate.

All events are versioned, immutable facts. They feed the ``OrderSummary``
projection and the delivery notification handler.
"""

from protean.fields import DateTime, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A shopper's cart was recorded as an order at checkout."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_name = String(required=True)
    customer_id = Identifier()
    customer_phone = String()
    items = Text(required=True)  # JSON: list of line dicts
    item_count = Integer(required=True)
    total_amount = Integer(required=True)
    special_request = Text()
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderDelivered:
    """The order reached the customer. Triggers the delivery notification."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_name = String(required=True)
    customer_phone = String()
    delivered_at = DateTime(required=True)

"""Order aggregate — the durable record of a checkout.

An order is written once, with all of its lines, in a single unit of work.
After that only its status moves, and only forward:

    SENT → CONFIRMED → DELIVERED
    SENT → DELIVERED

Orders are never deleted.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from ordering.domain import ordering
from ordering.order.events import OrderDelivered, OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    SENT = "sent"
    CONFIRMED = "confirmed"
    DELIVERED = "delivered"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.SENT: {OrderStatus.CONFIRMED, OrderStatus.DELIVERED},
    OrderStatus.CONFIRMED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
}


@ordering.entity(part_of="Order")
class OrderItem:
    """One cart line frozen at submission time."""

    product_id = String(max_length=255)
    product_name = String(required=True, max_length=255)
    product_brand = String(max_length=100)
    product_unit = String(max_length=50)
    product_image = String(max_length=500)
    quantity = Integer(required=True, min_value=1)
    unit_price = Integer(required=True, min_value=0)
    subtotal = Integer(required=True, min_value=0)


@ordering.aggregate
class Order:
    customer_name = String(required=True, max_length=100)
    customer_id = Identifier()
    customer_phone = String(max_length=20)
    items = HasMany(OrderItem)
    total_amount = Integer(required=True, min_value=0)
    special_request = Text()
    status = String(choices=OrderStatus, default=OrderStatus.SENT.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def order_must_have_items(self):
        if not self.items:
            raise ValidationError({"items": ["Order must contain at least one item"]})

    @invariant.post
    def special_request_is_bounded(self):
        if self.special_request and len(self.special_request) > 500:
            raise ValidationError({"special_request": ["Special request cannot exceed 500 characters"]})

    @classmethod
    def place(
        cls,
        customer_name,
        items_data,
        total_amount,
        customer_id=None,
        customer_phone=None,
        special_request=None,
    ):
        """Build the order header and its lines in one step.

        ``items_data`` is a list of dicts with ``product_id``, ``product_name``,
        ``product_brand``, ``product_unit``, ``product_image``, ``quantity``,
        ``unit_price`` and ``subtotal``.
        """
        now = datetime.now(UTC)
        items = [
            OrderItem(
                product_id=line.get("product_id"),
                product_name=line["product_name"],
                product_brand=line.get("product_brand"),
                product_unit=line.get("product_unit"),
                product_image=line.get("product_image"),
                quantity=line["quantity"],
                unit_price=line["unit_price"],
                subtotal=line["subtotal"],
            )
            for line in items_data
        ]

        order = cls(
            customer_name=customer_name.strip(),
            customer_id=customer_id,
            customer_phone=customer_phone,
            items=items,
            total_amount=total_amount,
            special_request=special_request or None,
            status=OrderStatus.SENT.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                customer_name=order.customer_name,
                customer_id=customer_id,
                customer_phone=customer_phone,
                items=json.dumps(items_data),
                item_count=sum(line["quantity"] for line in items_data),
                total_amount=total_amount,
                special_request=order.special_request,
                placed_at=now,
            )
        )
        return order

    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def _assert_can_transition(self, target):
        current = OrderStatus(self.status)
        if target not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

    def change_status(self, new_status):
        """Move the order forward. Re-applying the current status is a no-op."""
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status '{new_status}'"]}) from None
        if target.value == self.status:
            return
        self._assert_can_transition(target)

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )
        if target == OrderStatus.DELIVERED:
            self.raise_(
                OrderDelivered(
                    order_id=self.id,
                    customer_name=self.customer_name,
                    customer_phone=self.customer_phone,
                    delivered_at=now,
                )
            )

    def confirm(self):
        self.change_status(OrderStatus.CONFIRMED.value)

    def mark_delivered(self):
        self.change_status(OrderStatus.DELIVERED.value)

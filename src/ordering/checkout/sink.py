"""Order sink — the durable write behind checkout.

Provides get_sink() / set_sink() to swap implementations:
- RepositoryOrderSink (default) records the order through the ``PlaceOrder`` command
- FakeOrderSink records submissions in memory and can be told to fail
"""

import json
from abc import ABC, abstractmethod
from uuid import uuid4

from protean.utils.globals import current_domain

from ordering.order.creation import PlaceOrder


class OrderSinkError(Exception):
    """The order could not be recorded."""


class OrderSink(ABC):
    @abstractmethod
    def record(self, order_data: dict) -> str:
        """Persist one order header with its lines and return the new order id.

        Raises:
            OrderSinkError: when nothing was recorded
        """
        ...


class RepositoryOrderSink(OrderSink):
    """Writes header and lines together as one Order aggregate."""

    def record(self, order_data: dict) -> str:
        try:
            command = PlaceOrder(
                customer_name=order_data["customer_name"],
                customer_id=order_data.get("customer_id"),
                customer_phone=order_data.get("customer_phone"),
                items=json.dumps(order_data["items"]),
                total_amount=order_data["total_amount"],
                special_request=order_data.get("special_request"),
            )
            return current_domain.process(command, asynchronous=False)
        except Exception as exc:
            raise OrderSinkError(str(exc)) from exc


class FakeOrderSink(OrderSink):
    """Sink that records submissions in memory for test assertions."""

    def __init__(self):
        self.recorded: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Order store unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Order store unavailable"):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def record(self, order_data: dict) -> str:
        if not self.should_succeed:
            raise OrderSinkError(self.failure_reason)
        order_id = str(uuid4())
        self.recorded.append({"order_id": order_id, **order_data})
        return order_id

    def reset(self):
        self.recorded.clear()
        self.should_succeed = True
        self.failure_reason = "Order store unavailable"


_current_sink: OrderSink | None = None


def get_sink() -> OrderSink:
    """Return the current order sink. Defaults to RepositoryOrderSink."""
    global _current_sink
    if _current_sink is None:
        _current_sink = RepositoryOrderSink()
    return _current_sink


def set_sink(sink: OrderSink) -> None:
    """Override the active order sink (useful for tests)."""
    global _current_sink
    _current_sink = sink


def reset_sink() -> None:
    """Reset to the default sink."""
    global _current_sink
    _current_sink = None

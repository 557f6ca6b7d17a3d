"""Application tests for back-office status updates and the delivered notification."""

import json

import pytest
from ordering.order.creation import PlaceOrder
from ordering.order.order import Order, OrderStatus
from ordering.order.status import UpdateOrderStatus
from protean import current_domain
from protean.exceptions import ValidationError


def _place_order(customer_phone=None, customer_name="Hotel Shanti"):
    items = [
        {
            "product_id": "prod-a",
            "product_name": "Salted Butter",
            "product_brand": "Amul",
            "product_unit": "500 g",
            "quantity": 2,
            "unit_price": 50,
            "subtotal": 100,
        }
    ]
    return current_domain.process(
        PlaceOrder(
            customer_name=customer_name,
            customer_phone=customer_phone,
            items=json.dumps(items),
            total_amount=100,
        ),
        asynchronous=False,
    )


def _update(order_id, status):
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)


def _status_of(order_id):
    return current_domain.repository_for(Order).get(order_id).status


class TestUpdateOrderStatus:
    def test_confirm_order(self):
        order_id = _place_order()
        _update(order_id, OrderStatus.CONFIRMED.value)
        assert _status_of(order_id) == "confirmed"

    def test_confirm_then_deliver(self):
        order_id = _place_order()
        _update(order_id, "confirmed")
        _update(order_id, "delivered")
        assert _status_of(order_id) == "delivered"

    def test_deliver_straight_from_sent(self):
        order_id = _place_order()
        _update(order_id, "delivered")
        assert _status_of(order_id) == "delivered"

    def test_moving_backwards_is_rejected(self):
        order_id = _place_order()
        _update(order_id, "delivered")
        with pytest.raises(ValidationError):
            _update(order_id, "confirmed")
        assert _status_of(order_id) == "delivered"

    def test_repeating_the_current_status_is_a_no_op(self):
        order_id = _place_order()
        _update(order_id, "confirmed")
        _update(order_id, "confirmed")
        assert _status_of(order_id) == "confirmed"

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValidationError):
            UpdateOrderStatus(order_id="some-order", status="shipped")


class TestDeliveredNotification:
    def test_customer_with_phone_is_notified(self, chat):
        order_id = _place_order(customer_phone="98290 12345")
        _update(order_id, "delivered")

        [sent] = chat.sent_messages
        assert sent["to"] == "98290 12345"
        assert sent["body"].startswith("Hi Hotel Shanti! 🎉")
        assert "*delivered*" in sent["body"]

    def test_store_name_comes_from_environment(self, chat, monkeypatch):
        monkeypatch.setenv("STORE_NAME", "Corner Shop")
        order_id = _place_order(customer_phone="9829012345")
        _update(order_id, "delivered")
        assert "Thank you for ordering from Corner Shop!" in chat.sent_messages[0]["body"]

    def test_customer_without_phone_is_skipped(self, chat):
        order_id = _place_order()
        _update(order_id, "delivered")
        assert chat.sent_messages == []

    def test_confirmation_alone_sends_nothing(self, chat):
        order_id = _place_order(customer_phone="9829012345")
        _update(order_id, "confirmed")
        assert chat.sent_messages == []

    def test_failed_notification_keeps_delivered_status(self, chat):
        chat.configure(should_succeed=False)
        order_id = _place_order(customer_phone="9829012345")
        _update(order_id, "delivered")
        assert _status_of(order_id) == "delivered"

"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.cart import ShoppingCart
from ordering.order.events import OrderDelivered, OrderStatusChanged
from ordering.order.order import Order
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

# Map event name strings to classes for dynamic lookup in Then steps
_ORDER_EVENT_CLASSES = {
    "OrderStatusChanged": OrderStatusChanged,
    "OrderDelivered": OrderDelivered,
}

CATALOGUE = {
    "Salted Butter": {"product_id": "prod-butter", "brand": "Amul", "unit": "500 g"},
    "Tomato Ketchup": {"product_id": "prod-ketchup", "brand": "Kissan", "unit": "1 kg"},
    "Basmati Rice": {"product_id": "prod-rice", "brand": "India Gate", "unit": "5 kg"},
}


def _product(name, price):
    return {"name": name, "price": price, **CATALOGUE[name]}


@pytest.fixture()
def make_product():
    """Build a catalogue row for one of the known products."""
    return _product


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def _():
    return ShoppingCart.create(session_id="bdd-session")


@given(parsers.cfparse('the cart holds {qty:d} x "{name}" at ₹{price:d}'))
def cart_holds(cart, qty, name, price):
    for _ in range(qty):
        cart.add_item(_product(name, price))


@given(parsers.cfparse('an order was placed by "{customer}"'), target_fixture="order")
def _(customer):
    return Order.place(
        customer_name=customer,
        customer_phone="9829012345",
        items_data=[
            {
                "product_id": "prod-butter",
                "product_name": "Salted Butter",
                "quantity": 1,
                "unit_price": 50,
                "subtotal": 50,
            }
        ],
        total_amount=50,
    )


@given(parsers.cfparse('the order was moved to "{status}"'), target_fixture="order")
def _(order, status):
    order.change_status(status)
    order._events.clear()
    return order


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then("the order action fails with a validation error")
def order_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("an {event_type} order event is raised"))
def order_event_raised(order, event_type):
    event_cls = _ORDER_EVENT_CLASSES[event_type]
    assert any(isinstance(e, event_cls) for e in order._events)


@then("no order event is raised")
def no_order_event(order):
    assert order._events == []

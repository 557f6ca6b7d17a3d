"""Checkout — turns a shopper's cart into a recorded order and a chat handoff.

Steps, in order:

1. Validate the customer name and the cart. Nothing is written on failure.
2. Snapshot the total and the lines from the cart.
3. Record the order through the ``OrderSink``. A sink failure is logged and
   reported, but does not stop step 4.
4. Hand the order summary to the messaging channel.
5. Clear the cart and the special request, only if step 3 succeeded.

There is no idempotency key: submitting twice records two orders.
"""

from dataclasses import dataclass

from protean.exceptions import ValidationError

from ordering.checkout.sink import OrderSinkError, get_sink
from ordering.domain import logger
from ordering.handoff import get_channel, store_number
from ordering.handoff.templates import OrderSummaryTemplate
from ordering.utils.logging import bind_checkout_context, clear_checkout_context

MAX_CUSTOMER_NAME_LENGTH = 100
MAX_SPECIAL_REQUEST_LENGTH = 500
MAX_CUSTOMER_PHONE_LENGTH = 20


@dataclass(frozen=True)
class CheckoutResult:
    """Outcome of one checkout submission."""

    order_id: str | None
    recorded: bool
    handoff: dict
    message: str
    total: int
    error: str | None = None


def validate_submission(customer_name, cart, special_request=None, customer_phone=None) -> str:
    """Return the trimmed customer name, or raise ``ValidationError`` before any I/O."""
    errors = {}
    name = (customer_name or "").strip()
    if not name:
        errors["customer_name"] = ["Please enter your name"]
    elif len(name) > MAX_CUSTOMER_NAME_LENGTH:
        errors["customer_name"] = [f"Name cannot exceed {MAX_CUSTOMER_NAME_LENGTH} characters"]
    if cart.is_empty:
        errors["cart"] = ["Your cart is empty"]
    if special_request and len(special_request) > MAX_SPECIAL_REQUEST_LENGTH:
        errors["special_request"] = [f"Special request cannot exceed {MAX_SPECIAL_REQUEST_LENGTH} characters"]
    if customer_phone and len(customer_phone) > MAX_CUSTOMER_PHONE_LENGTH:
        errors["customer_phone"] = [f"Phone number cannot exceed {MAX_CUSTOMER_PHONE_LENGTH} characters"]
    if errors:
        raise ValidationError(errors)
    return name


def build_order_data(customer_name, cart, customer_id=None, customer_phone=None, special_request=None) -> dict:
    """The order header and one line per cart item, priced at the snapshot base price."""
    return {
        "customer_name": customer_name,
        "customer_id": customer_id,
        "customer_phone": customer_phone,
        "total_amount": cart.get_total(),
        "special_request": special_request or None,
        "status": "sent",
        "items": [
            {
                "product_id": line["product_id"],
                "product_name": line["name"],
                "product_brand": line["brand"],
                "product_unit": line["unit"],
                "product_image": line["image_url"],
                "quantity": line["quantity"],
                "unit_price": line["price"],
                "subtotal": line["subtotal"],
            }
            for line in cart.lines()
        ],
    }


class Checkout:
    """Submits a ``ShopperSession``'s cart. Sink and channel default to the configured singletons."""

    def __init__(self, sink=None, channel=None):
        self.sink = sink
        self.channel = channel

    def submit(self, session, customer_name) -> CheckoutResult:
        cart = session.cart
        special_request = (session.special_request or "").strip() or None
        name = validate_submission(customer_name, cart, special_request, session.customer_phone)

        sink = self.sink or get_sink()
        channel = self.channel or get_channel()

        bind_checkout_context(session.session_id, name)
        try:
            order_data = build_order_data(
                name,
                cart,
                customer_id=session.customer_id,
                customer_phone=session.customer_phone,
                special_request=special_request,
            )
            total = order_data["total_amount"]
            logger.info("Checkout submitted", total=total, line_count=len(order_data["items"]))

            order_id = None
            error = None
            try:
                order_id = str(sink.record(order_data))
                logger.info("Order recorded", order_id=order_id, total=total)
            except OrderSinkError as exc:
                error = str(exc)
                logger.warning("Order could not be recorded, handing off anyway", error=error)

            message = OrderSummaryTemplate.render(
                {
                    "customer_name": name,
                    "lines": cart.lines(),
                    "total": total,
                    "special_request": special_request,
                    "order_id": order_id,
                }
            )
            handoff = channel.send(store_number(), message)
            if handoff.get("status") == "sent":
                logger.info("Order handed off", order_id=order_id)
            else:
                logger.warning("Order handoff failed", order_id=order_id, error=handoff.get("error"))

            recorded = order_id is not None
            if recorded:
                cart.clear()
                session.reset_note()

            return CheckoutResult(
                order_id=order_id,
                recorded=recorded,
                handoff=handoff,
                message=message,
                total=total,
                error=error,
            )
        finally:
            clear_checkout_context()

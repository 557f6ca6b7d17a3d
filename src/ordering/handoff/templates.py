"""Message templates for the chat handoff."""

import os

DEFAULT_STORE_NAME = "KARNANI MINIMART"
DEFAULT_DELIVERY_CITY = "Jaipur"


class OrderSummaryTemplate:
    """The checkout message a shopper sends to the store."""

    @staticmethod
    def render(context: dict) -> str:
        lines = [
            f"*Order from {context['customer_name']}*",
            "",
        ]
        for line in context["lines"]:
            lines.append(
                f"• {line['name']} ({line['brand']}, {line['unit']}) x {line['quantity']} = ₹{line['subtotal']}"
            )
        lines += [
            "",
            f"*Total: ₹{context['total']}*",
            "",
            f"📍 Delivery: {os.getenv('STORE_DELIVERY_CITY', DEFAULT_DELIVERY_CITY)}",
            "⏰ Requested: Next-day delivery",
        ]
        if context.get("special_request"):
            lines += ["", f"📝 Special request: {context['special_request']}"]
        if context.get("order_id"):
            lines += ["", f"Order ref: {context['order_id']}"]
        return "\n".join(lines)


class OrderDeliveredTemplate:
    @staticmethod
    def render(context: dict) -> str:
        store_name = os.getenv("STORE_NAME", DEFAULT_STORE_NAME)
        return (
            f"Hi {context['customer_name']}! 🎉 Your order has been *delivered* successfully. "
            f"Thank you for ordering from {store_name}! 🙏"
        )

"""Order history queries — the shopper's past orders and the back-office list."""

from datetime import UTC, datetime

from protean.utils.globals import current_domain

from ordering.order.order import Order
from ordering.projections.order_summary import OrderSummary


def list_orders(status=None, search=None, customer_id=None):
    """Order summaries, newest first.

    ``status`` is an exact match (``"all"`` means no filter). ``search``
    matches the customer name case-insensitively or an order id prefix.
    """
    summaries = current_domain.repository_for(OrderSummary)._dao.query.all().items

    if status and status != "all":
        summaries = [s for s in summaries if s.status == status]
    if customer_id:
        summaries = [s for s in summaries if str(s.customer_id) == str(customer_id)]
    if search:
        needle = search.strip().lower()
        summaries = [
            s for s in summaries if needle in s.customer_name.lower() or str(s.order_id).lower().startswith(needle)
        ]

    return sorted(summaries, key=lambda s: s.created_at or datetime.min.replace(tzinfo=UTC), reverse=True)


def get_order(order_id) -> Order:
    return current_domain.repository_for(Order).get(order_id)


def order_lines(order) -> list[dict]:
    """The order's lines in the shape ``ShoppingCart.reorder`` accepts."""
    return [
        {
            "id": str(item.id),
            "product_id": item.product_id,
            "product_name": item.product_name,
            "product_brand": item.product_brand,
            "product_unit": item.product_unit,
            "product_image": item.product_image,
            "quantity": item.quantity,
            "unit_price": item.unit_price,
            "subtotal": item.subtotal,
        }
        for item in order.items
    ]

"""FastAPI routes for the Ordering domain — cart quotes, checkout and orders."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    CartQuoteRequest,
    CartResponse,
    CheckoutRequest,
    CheckoutResponse,
    OrderDetailResponse,
    OrderItemResponse,
    OrderSummaryResponse,
    ReorderRequest,
    StatusResponse,
    UpdateOrderStatusRequest,
)
from ordering.cart.cart import ProductSnapshot
from ordering.checkout.checkout import Checkout
from ordering.history import get_order, list_orders, order_lines
from ordering.order.status import UpdateOrderStatus
from ordering.session import ShopperSession


def session_from_lines(lines, customer_id=None, customer_phone=None) -> ShopperSession:
    """Rebuild a shopper's cart from the lines the client holds."""
    session = ShopperSession(customer_id=customer_id, customer_phone=customer_phone)
    for line in lines:
        snapshot = ProductSnapshot(
            product_id=line.product_id,
            name=line.name,
            brand=line.brand,
            unit=line.unit,
            price=line.price,
            image_url=line.image_url,
        )
        session.cart.add_item(snapshot)
        for _ in range(line.quantity - 1):
            session.cart.increase_quantity(snapshot.product_id)
    return session


def _cart_response(cart) -> CartResponse:
    return CartResponse(items=cart.lines(), total=cart.get_total(), item_count=cart.get_item_count())


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("/quote", response_model=CartResponse)
async def quote_cart(body: CartQuoteRequest) -> CartResponse:
    return _cart_response(session_from_lines(body.items).cart)


@cart_router.post("/checkout", status_code=201, response_model=CheckoutResponse)
async def checkout(body: CheckoutRequest) -> CheckoutResponse:
    session = session_from_lines(body.items, customer_id=body.customer_id, customer_phone=body.customer_phone)
    session.special_request = body.special_request or ""

    result = Checkout().submit(session, body.customer_name)
    return CheckoutResponse(
        order_id=result.order_id,
        recorded=result.recorded,
        handoff_status=result.handoff.get("status"),
        handoff_link=result.handoff.get("link"),
        message=result.message,
        total=result.total,
        error=result.error,
    )


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderSummaryResponse])
async def get_orders(
    status: str | None = None,
    search: str | None = None,
    customer_id: str | None = None,
) -> list[OrderSummaryResponse]:
    return [
        OrderSummaryResponse(
            order_id=str(summary.order_id),
            customer_name=summary.customer_name,
            status=summary.status,
            item_count=summary.item_count or 0,
            total_amount=summary.total_amount or 0,
            special_request=summary.special_request,
            created_at=summary.created_at,
        )
        for summary in list_orders(status=status, search=search, customer_id=customer_id)
    ]


@order_router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_order_detail(order_id: str) -> OrderDetailResponse:
    order = get_order(order_id)
    return OrderDetailResponse(
        order_id=str(order.id),
        customer_name=order.customer_name,
        customer_id=str(order.customer_id) if order.customer_id else None,
        status=order.status,
        item_count=order.item_count(),
        total_amount=order.total_amount,
        special_request=order.special_request,
        created_at=order.created_at,
        items=[OrderItemResponse(**line) for line in order_lines(order)],
    )


@order_router.put("/{order_id}/status", response_model=StatusResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> StatusResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.post("/{order_id}/reorder", response_model=CartResponse)
async def reorder(order_id: str, body: ReorderRequest | None = None) -> CartResponse:
    """Merge a past order's lines into the cart the client sends (or an empty one)."""
    session = session_from_lines(body.items if body else [])
    session.cart.reorder(order_lines(get_order(order_id)))
    return _cart_response(session.cart)

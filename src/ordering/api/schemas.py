"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands. The cart itself lives on the client; requests
carry its lines as product snapshots.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CartLineSchema(BaseModel):
    product_id: str
    name: str
    brand: str | None = None
    unit: str | None = None
    price: int = Field(ge=0)
    image_url: str | None = None
    quantity: int = Field(1, ge=1)


class CartLineResponse(CartLineSchema):
    subtotal: int


# ---------------------------------------------------------------------------
# Cart Schemas
# ---------------------------------------------------------------------------
class CartQuoteRequest(BaseModel):
    items: list[CartLineSchema] = Field(default_factory=list)


class CartResponse(BaseModel):
    items: list[CartLineResponse]
    total: int
    item_count: int


class ReorderRequest(BaseModel):
    items: list[CartLineSchema] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Checkout Schemas
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_name": "Hotel Shanti",
                    "customer_phone": "98290 12345",
                    "special_request": "Deliver before 10 AM",
                    "items": [
                        {
                            "product_id": "0f6b9a1e-5d4c-4a43-9c55-0d6f6e1b2a10",
                            "name": "Mozzarella Cheese Block",
                            "brand": "Amul",
                            "unit": "1 kg",
                            "price": 420,
                            "quantity": 2,
                        }
                    ],
                }
            ]
        }
    }

    customer_name: str
    customer_id: str | None = None
    customer_phone: str | None = Field(None, max_length=20)
    special_request: str | None = None
    items: list[CartLineSchema] = Field(default_factory=list)


class CheckoutResponse(BaseModel):
    order_id: str | None = None
    recorded: bool
    handoff_status: str | None = None
    handoff_link: str | None = None
    message: str
    total: int
    error: str | None = None


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------
class UpdateOrderStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "confirmed"}]}}

    status: str


class OrderSummaryResponse(BaseModel):
    order_id: str
    customer_name: str
    status: str
    item_count: int
    total_amount: int
    special_request: str | None = None
    created_at: datetime | None = None


class OrderItemResponse(BaseModel):
    product_id: str | None = None
    product_name: str
    product_brand: str | None = None
    product_unit: str | None = None
    product_image: str | None = None
    quantity: int
    unit_price: int
    subtotal: int


class OrderDetailResponse(OrderSummaryResponse):
    customer_id: str | None = None
    items: list[OrderItemResponse]


class StatusResponse(BaseModel):
    status: str = "ok"

"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Product Request Schemas ---


class AddProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Mozzarella Cheese Block",
                    "brand": "Amul",
                    "category": "Cheese",
                    "price": 420,
                    "mrp": 480,
                    "unit": "1 kg",
                    "description": "Stretchy pizza cheese for the commercial kitchen.",
                    "image_url": "https://cdn.example.com/products/amul-mozzarella.jpg",
                    "images": ["https://cdn.example.com/products/amul-mozzarella-back.jpg"],
                    "is_trending": True,
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    brand: str = Field(..., max_length=100)
    category: str = Field(..., max_length=50)
    price: int = Field(..., ge=1)
    mrp: int | None = Field(None, ge=1)
    unit: str = Field(..., max_length=50)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)
    video_url: str | None = Field(None, max_length=500)
    images: list[str] | None = None
    is_trending: bool = False


class UpdateProductDetailsRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Mozzarella Cheese Block (Diced)",
                    "unit": "2 kg",
                }
            ]
        }
    }

    name: str | None = Field(None, max_length=255)
    brand: str | None = Field(None, max_length=100)
    category: str | None = Field(None, max_length=50)
    unit: str | None = Field(None, max_length=50)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)
    video_url: str | None = Field(None, max_length=500)
    images: list[str] | None = None


class RepriceProductRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"price": 399, "mrp": 480}]}}

    price: int = Field(..., ge=1)
    mrp: int | None = Field(None, ge=1)


class MarkTrendingRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"is_trending": True}]}}

    is_trending: bool


# --- Offer Request Schemas ---


class CreateOfferRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Monsoon Cheese Fest",
                    "description": "10% off every cheese block this week.",
                    "discount_type": "percentage",
                    "discount_value": 10,
                    "start_date": "2026-07-01T00:00:00Z",
                    "end_date": "2026-07-07T23:59:59Z",
                    "product_ids": ["0f6b9a1e-5d4c-4a43-9c55-0d6f6e1b2a10"],
                    "max_qty_per_order": 5,
                }
            ]
        }
    }

    title: str = Field(..., max_length=255)
    description: str | None = None
    discount_type: str = Field(..., max_length=20)
    discount_value: float = Field(..., ge=0)
    start_date: datetime
    end_date: datetime
    product_ids: list[str] = Field(default_factory=list)
    max_qty_per_order: int | None = Field(None, ge=1)
    is_active: bool = True


class ReviseOfferRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"discount_value": 15, "end_date": "2026-07-10T23:59:59Z"}]}}

    title: str | None = Field(None, max_length=255)
    description: str | None = None
    discount_type: str | None = Field(None, max_length=20)
    discount_value: float | None = Field(None, ge=0)
    start_date: datetime | None = None
    end_date: datetime | None = None
    product_ids: list[str] | None = None
    max_qty_per_order: int | None = Field(None, ge=1)


# --- Response Schemas ---


class ProductIdResponse(BaseModel):
    product_id: str


class OfferIdResponse(BaseModel):
    offer_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class OfferResponse(BaseModel):
    offer_id: str
    title: str
    description: str | None = None
    discount_type: str
    discount_value: float
    start_date: datetime
    end_date: datetime
    product_ids: list[str]
    max_qty_per_order: int | None = None
    is_active: bool


class StorefrontItem(BaseModel):
    product_id: str
    name: str
    brand: str
    category: str
    unit: str
    image_url: str | None = None
    is_trending: bool
    price: int
    mrp: int | None = None
    discount_percent: int
    display_price: int
    offer_id: str | None = None
    offer_title: str | None = None
    max_qty_per_order: int | None = None

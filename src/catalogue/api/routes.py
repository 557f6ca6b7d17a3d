"""FastAPI endpoints for the Catalogue domain."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    AddProductRequest,
    CreateOfferRequest,
    MarkTrendingRequest,
    OfferIdResponse,
    OfferResponse,
    ProductIdResponse,
    RepriceProductRequest,
    ReviseOfferRequest,
    StatusResponse,
    StorefrontItem,
    UpdateProductDetailsRequest,
)
from catalogue.listing import list_brands, list_offers, storefront_listing
from catalogue.offer.management import (
    ActivateOffer,
    CreateOffer,
    DeactivateOffer,
    ReviseOffer,
    WithdrawOffer,
)
from catalogue.product.creation import AddProduct
from catalogue.product.details import RepriceProduct, UpdateProductDetails
from catalogue.product.lifecycle import ActivateProduct, DeactivateProduct, MarkTrending, RemoveProduct

product_router = APIRouter(prefix="/products", tags=["products"])
offer_router = APIRouter(prefix="/offers", tags=["offers"])
storefront_router = APIRouter(prefix="/storefront", tags=["storefront"])


def _json_list(values):
    return json.dumps(values) if values is not None else None


# --- Product endpoints ---


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        brand=body.brand,
        category=body.category,
        price=body.price,
        mrp=body.mrp,
        unit=body.unit,
        description=body.description,
        image_url=body.image_url,
        video_url=body.video_url,
        images=_json_list(body.images),
        is_trending=body.is_trending,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}/details", response_model=StatusResponse)
async def update_product_details(product_id: str, body: UpdateProductDetailsRequest) -> StatusResponse:
    command = UpdateProductDetails(
        product_id=product_id,
        name=body.name,
        brand=body.brand,
        category=body.category,
        unit=body.unit,
        description=body.description,
        image_url=body.image_url,
        video_url=body.video_url,
        images=_json_list(body.images),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/price", response_model=StatusResponse)
async def reprice_product(product_id: str, body: RepriceProductRequest) -> StatusResponse:
    command = RepriceProduct(product_id=product_id, price=body.price, mrp=body.mrp)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/trending", response_model=StatusResponse)
async def mark_trending(product_id: str, body: MarkTrendingRequest) -> StatusResponse:
    command = MarkTrending(product_id=product_id, is_trending=body.is_trending)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/activate", response_model=StatusResponse)
async def activate_product(product_id: str) -> StatusResponse:
    command = ActivateProduct(product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/deactivate", response_model=StatusResponse)
async def deactivate_product(product_id: str) -> StatusResponse:
    command = DeactivateProduct(product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def remove_product(product_id: str) -> StatusResponse:
    command = RemoveProduct(product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# --- Offer endpoints ---


@offer_router.get("", response_model=list[OfferResponse])
async def get_offers() -> list[OfferResponse]:
    return [
        OfferResponse(
            offer_id=str(offer.id),
            title=offer.title,
            description=offer.description,
            discount_type=offer.discount_type,
            discount_value=offer.discount_value,
            start_date=offer.start_date,
            end_date=offer.end_date,
            product_ids=offer.applicable_product_ids,
            max_qty_per_order=offer.max_qty_per_order,
            is_active=bool(offer.is_active),
        )
        for offer in list_offers()
    ]


@offer_router.post("", status_code=201, response_model=OfferIdResponse)
async def create_offer(body: CreateOfferRequest) -> OfferIdResponse:
    command = CreateOffer(
        title=body.title,
        description=body.description,
        discount_type=body.discount_type,
        discount_value=body.discount_value,
        start_date=body.start_date,
        end_date=body.end_date,
        product_ids=_json_list(body.product_ids),
        max_qty_per_order=body.max_qty_per_order,
        is_active=body.is_active,
    )
    result = current_domain.process(command, asynchronous=False)
    return OfferIdResponse(offer_id=result)


@offer_router.put("/{offer_id}", response_model=StatusResponse)
async def revise_offer(offer_id: str, body: ReviseOfferRequest) -> StatusResponse:
    command = ReviseOffer(
        offer_id=offer_id,
        title=body.title,
        description=body.description,
        discount_type=body.discount_type,
        discount_value=body.discount_value,
        start_date=body.start_date,
        end_date=body.end_date,
        product_ids=_json_list(body.product_ids),
        max_qty_per_order=body.max_qty_per_order,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@offer_router.put("/{offer_id}/activate", response_model=StatusResponse)
async def activate_offer(offer_id: str) -> StatusResponse:
    current_domain.process(ActivateOffer(offer_id=offer_id), asynchronous=False)
    return StatusResponse()


@offer_router.put("/{offer_id}/deactivate", response_model=StatusResponse)
async def deactivate_offer(offer_id: str) -> StatusResponse:
    current_domain.process(DeactivateOffer(offer_id=offer_id), asynchronous=False)
    return StatusResponse()


@offer_router.delete("/{offer_id}", response_model=StatusResponse)
async def withdraw_offer(offer_id: str) -> StatusResponse:
    current_domain.process(WithdrawOffer(offer_id=offer_id), asynchronous=False)
    return StatusResponse()


# --- Storefront endpoints ---


@storefront_router.get("", response_model=list[StorefrontItem])
async def get_storefront(
    search: str | None = None,
    category: str | None = None,
    brand: str | None = None,
    trending: bool = False,
) -> list[StorefrontItem]:
    listing = storefront_listing(search=search, category=category, brand=brand, trending_only=trending)
    return [StorefrontItem(**entry) for entry in listing]


@storefront_router.get("/brands", response_model=list[str])
async def get_brands() -> list[str]:
    return list_brands()

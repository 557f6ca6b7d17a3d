"""Catalogue domain API package."""

from catalogue.api.routes import offer_router, product_router, storefront_router

__all__ = ["product_router", "offer_router", "storefront_router"]

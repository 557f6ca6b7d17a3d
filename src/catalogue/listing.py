"""Storefront queries — product cards, offers and resolved display prices.

These are the read side the shop front and the ordering context consume:
the catalogue query (all, active-only or trending-only products, optionally
filtered) and the offers query (every offer; live-window filtering is left to
the resolver).
"""

from datetime import UTC, datetime

from protean.utils.globals import current_domain

from catalogue.domain import logger
from catalogue.offer import resolver
from catalogue.offer.offer import Offer
from catalogue.product.product import mrp_discount_percent
from catalogue.projections.product_card import ProductCard


def list_products(active_only=True, trending_only=False, search=None, category=None, brand=None):
    """Product cards sorted by brand (trending listings by name).

    ``search`` matches name or brand case-insensitively; ``category`` and
    ``brand`` are exact matches, with ``"all"`` meaning no filter.
    """
    cards = current_domain.repository_for(ProductCard)._dao.query.all().items

    if active_only:
        cards = [c for c in cards if c.is_active]
    if trending_only:
        cards = [c for c in cards if c.is_trending]
    if search:
        needle = search.lower()
        cards = [c for c in cards if needle in c.name.lower() or needle in c.brand.lower()]
    if category and category != "all":
        cards = [c for c in cards if c.category == category]
    if brand and brand != "all":
        cards = [c for c in cards if c.brand == brand]

    if trending_only:
        return sorted(cards, key=lambda c: c.name)
    return sorted(cards, key=lambda c: (c.brand, c.name))


def list_brands():
    cards = current_domain.repository_for(ProductCard)._dao.query.all().items
    return sorted({c.brand for c in cards if c.is_active})


def list_offers():
    """Every offer, newest first. Callers must not assume these are live."""
    offers = current_domain.repository_for(Offer)._dao.query.all().items
    return sorted(offers, key=lambda o: o.created_at or datetime.min.replace(tzinfo=UTC), reverse=True)


def storefront_listing(now=None, offers=None, **filters):
    """Cards with their promotional price resolved at ``now``.

    Each entry is a plain dict ready to serialise: the card's fields plus
    ``display_price``, the winning ``offer_id``/``offer_title`` (or ``None``)
    and the MRP ``discount_percent`` badge.
    """
    now = now or datetime.now(UTC)
    offers = list_offers() if offers is None else offers
    # cosmetic pre-filter, resolve_best_offer re-checks the window per product
    offers = resolver.live_offers(offers, now)

    listing = []
    for card in list_products(**filters):
        display_price, offer = resolver.effective_price(card, offers, now)
        listing.append(
            {
                "product_id": str(card.product_id),
                "name": card.name,
                "brand": card.brand,
                "category": card.category,
                "unit": card.unit,
                "image_url": card.image_url,
                "is_trending": bool(card.is_trending),
                "price": card.price,
                "mrp": card.mrp,
                "discount_percent": mrp_discount_percent(card.price, card.mrp),
                "display_price": display_price,
                "offer_id": str(offer.id) if offer is not None else None,
                "offer_title": offer.title if offer is not None else None,
                "max_qty_per_order": offer.max_qty_per_order if offer is not None else None,
            }
        )

    logger.debug(
        "Resolved storefront prices",
        product_count=len(listing),
        discounted_count=sum(1 for entry in listing if entry["offer_id"]),
    )
    return listing

"""Offer resolution — which promotion applies to a product right now, and at what price.

Everything here is a pure function of its arguments: no repository access,
no clock reads unless ``now`` is omitted, no shared state. Offer records may be
``Offer`` aggregates, projection rows or plain dicts (e.g. straight from an API
payload); anything malformed is treated as "not applicable" rather than raised.
"""

import json
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import structlog

logger = structlog.get_logger(__name__)

PERCENTAGE = "percentage"
FIXED = "fixed"
DISCOUNT_TYPES = frozenset({PERCENTAGE, FIXED})


def _read(offer, name):
    if isinstance(offer, Mapping):
        return offer.get(name)
    return getattr(offer, name, None)


def as_utc(value):
    """Coerce ISO strings and naive datetimes to aware UTC datetimes; ``None`` if unusable."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def product_ids_of(offer) -> list[str]:
    """The product ids an offer targets, whether stored as a JSON array or a list."""
    raw = _read(offer, "product_ids")
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            return []
    if not isinstance(raw, list | tuple | set | frozenset):
        return []
    return [str(product_id) for product_id in raw]


def discount_value_of(offer):
    value = _read(offer, "discount_value")
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value


def is_live(offer, now=None) -> bool:
    """An offer is live when it is active and ``start_date <= now <= end_date``."""
    if _read(offer, "is_active") is not True:
        return False

    start = as_utc(_read(offer, "start_date"))
    end = as_utc(_read(offer, "end_date"))
    current = as_utc(now or datetime.now(UTC))
    if start is None or end is None or current is None:
        return False

    return start <= current <= end


def _is_applicable(offer, product_id, now) -> bool:
    return (
        _read(offer, "discount_type") in DISCOUNT_TYPES
        and discount_value_of(offer) is not None
        and is_live(offer, now)
        and str(product_id) in product_ids_of(offer)
    )


def live_offers(offers: Iterable, now=None) -> list:
    """Offers whose window contains ``now``. Cosmetic pre-filter for listings."""
    return [offer for offer in offers if is_live(offer, now)]


def resolve_best_offer(product_id, offers: Iterable, now=None):
    """Return the live offer with the largest ``discount_value`` for ``product_id``, or ``None``.

    Values are compared as raw numbers regardless of discount type, so a 50%
    offer and a ₹50-off offer rank equally. Ties go to the offer seen first.
    """
    now = now or datetime.now(UTC)
    best = None
    for offer in offers or ():
        if not _is_applicable(offer, product_id, now):
            continue
        if best is None or discount_value_of(offer) > discount_value_of(best):
            best = offer
    return best


def round_half_up(amount) -> int:
    """Round to the nearest whole rupee, halves away from zero."""
    try:
        return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return 0


def apply_discount(base_price, offer) -> int:
    """Price of one unit after ``offer``; never negative, ``base_price`` if the offer is unusable."""
    if offer is None:
        return base_price

    kind = _read(offer, "discount_type")
    value = discount_value_of(offer)
    if kind not in DISCOUNT_TYPES or value is None:
        logger.debug("Ignoring malformed offer", offer_id=str(_read(offer, "id")), discount_type=kind)
        return base_price

    if kind == PERCENTAGE:
        discounted = round_half_up(Decimal(str(base_price)) * (1 - Decimal(str(value)) / 100))
    else:
        discounted = round_half_up(Decimal(str(base_price)) - Decimal(str(value)))

    return max(0, discounted)


def effective_price(product, offers: Iterable, now=None) -> tuple[int, object]:
    """The storefront display price of ``product`` and the offer that produced it."""
    product_id = _read(product, "id") or _read(product, "product_id")
    offer = resolve_best_offer(product_id, offers, now)
    base_price = _read(product, "price")
    if offer is None:
        return base_price, None
    return apply_discount(base_price, offer), offer

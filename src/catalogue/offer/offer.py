"""Offer aggregate — a time-boxed promotional discount on a set of products."""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from catalogue.domain import catalogue
from catalogue.offer import resolver


class DiscountType(Enum):
    PERCENTAGE = resolver.PERCENTAGE
    FIXED = resolver.FIXED


@catalogue.aggregate
class Offer:
    """A promotion that discounts the listed products between two instants.

    ``discount_value`` is a percentage (conventionally 0-100, not enforced) or
    a flat rupee amount depending on ``discount_type``. ``max_qty_per_order``
    is shown to shoppers but not enforced by the cart.
    """

    title: String(required=True, max_length=255)
    description: Text()
    discount_type: String(required=True, choices=DiscountType)
    discount_value: Float(required=True, min_value=0.0)
    start_date: DateTime(required=True)
    end_date: DateTime(required=True)
    product_ids: Text(default="[]")  # JSON array of product ids
    max_qty_per_order: Integer(min_value=1)
    is_active: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def window_must_not_end_before_it_starts(self):
        start, end = resolver.as_utc(self.start_date), resolver.as_utc(self.end_date)
        if start and end and end < start:
            raise ValidationError({"end_date": ["Offer cannot end before it starts"]})

    @invariant.post
    def product_ids_must_be_a_json_list(self):
        try:
            ids = json.loads(self.product_ids or "[]")
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"product_ids": ["Product ids must be valid JSON"]}) from None
        if not isinstance(ids, list):
            raise ValidationError({"product_ids": ["Product ids must be a JSON array"]})

    @classmethod
    def create(
        cls,
        title,
        discount_type,
        discount_value,
        start_date,
        end_date,
        product_ids=None,
        description=None,
        max_qty_per_order=None,
        is_active=True,
    ):
        from catalogue.offer.events import OfferCreated

        now = datetime.now(UTC)
        ids_json = _ids_to_json(product_ids)

        offer = cls(
            title=title,
            description=description,
            discount_type=discount_type,
            discount_value=discount_value,
            start_date=start_date,
            end_date=end_date,
            product_ids=ids_json,
            max_qty_per_order=max_qty_per_order,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        offer.raise_(
            OfferCreated(
                offer_id=offer.id,
                title=title,
                discount_type=discount_type,
                discount_value=discount_value,
                start_date=start_date,
                end_date=end_date,
                product_ids=ids_json,
                is_active=is_active,
            )
        )
        return offer

    @property
    def applicable_product_ids(self) -> list[str]:
        return resolver.product_ids_of(self)

    def is_live(self, now=None) -> bool:
        return resolver.is_live(self, now)

    def applies_to(self, product_id, now=None) -> bool:
        return self.is_live(now) and str(product_id) in self.applicable_product_ids

    def revise(
        self,
        title=None,
        description=None,
        discount_type=None,
        discount_value=None,
        start_date=None,
        end_date=None,
        product_ids=None,
        max_qty_per_order=None,
    ):
        """Edit the offer. Window bounds are validated together, after both are applied."""
        from catalogue.offer.events import OfferRevised

        with atomic_change(self):
            if title is not None:
                self.title = title
            if description is not None:
                self.description = description
            if discount_type is not None:
                self.discount_type = discount_type
            if discount_value is not None:
                self.discount_value = discount_value
            if start_date is not None:
                self.start_date = start_date
            if end_date is not None:
                self.end_date = end_date
            if product_ids is not None:
                self.product_ids = _ids_to_json(product_ids)
            if max_qty_per_order is not None:
                self.max_qty_per_order = max_qty_per_order

        self.updated_at = datetime.now(UTC)

        self.raise_(
            OfferRevised(
                offer_id=self.id,
                title=self.title,
                discount_type=self.discount_type,
                discount_value=self.discount_value,
                start_date=self.start_date,
                end_date=self.end_date,
                product_ids=self.product_ids,
            )
        )

    def activate(self):
        from catalogue.offer.events import OfferActivated

        if self.is_active:
            raise ValidationError({"is_active": ["Offer is already active"]})
        self.is_active = True
        self.updated_at = datetime.now(UTC)
        self.raise_(OfferActivated(offer_id=self.id))

    def deactivate(self):
        from catalogue.offer.events import OfferDeactivated

        if not self.is_active:
            raise ValidationError({"is_active": ["Offer is already inactive"]})
        self.is_active = False
        self.updated_at = datetime.now(UTC)
        self.raise_(OfferDeactivated(offer_id=self.id))

    def withdraw(self):
        from catalogue.offer.events import OfferWithdrawn

        self.raise_(OfferWithdrawn(offer_id=self.id, withdrawn_at=datetime.now(UTC)))


def _ids_to_json(product_ids):
    if product_ids is None:
        return "[]"
    if isinstance(product_ids, str):
        return product_ids
    return json.dumps([str(product_id) for product_id in product_ids])

"""Product aggregate root — one sellable catalogue item with its base price."""

import json
from datetime import datetime
from decimal import Decimal
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text

from catalogue.domain import catalogue
from catalogue.offer.resolver import round_half_up


class ProductCategory(Enum):
    """The fixed set of shelves the storefront is organised by."""

    CHEESE = "Cheese"
    BUTTER = "Butter"
    KETCHUP = "Ketchup"
    SEASONING = "Seasoning"
    MAYONNAISE = "Mayonnaise"
    SAUCES = "Sauces"
    SYRUP = "Syrup"
    BREAD_CRUMB = "Bread Crumb"
    PREMIX = "Premix"
    PURREE = "Purree"
    CREAM = "Cream"
    INSTANT_COFFEE = "Instant Coffee"
    FROZEN_SNACKS = "Frozen snacks"


def mrp_discount_percent(price, mrp) -> int:
    """Whole-number percentage saved against MRP, 0 when there is no MRP markdown."""
    if not mrp or mrp <= price:
        return 0
    return round_half_up((Decimal(mrp) - Decimal(price)) / Decimal(mrp) * 100)


@catalogue.aggregate
class Product:
    """A catalogue item sold at an integer rupee ``price`` per ``unit``.

    ``mrp`` is the printed list price. It is never charged; it only drives the
    "percent off" badge on the storefront and must not be below ``price``.
    """

    name: String(required=True, max_length=255)
    brand: String(required=True, max_length=100)
    category: String(required=True, choices=ProductCategory)
    price: Integer(required=True, min_value=1)
    mrp: Integer(min_value=1)
    unit: String(required=True, max_length=50)
    description: Text()
    image_url: String(max_length=500)
    video_url: String(max_length=500)
    images: Text()  # JSON array of additional media URLs
    is_trending: Boolean(default=False)
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def mrp_cannot_be_below_price(self):
        if self.mrp is not None and self.price is not None and self.mrp < self.price:
            raise ValidationError({"mrp": [f"MRP ({self.mrp}) cannot be less than the selling price ({self.price})"]})

    @invariant.post
    def images_must_be_a_json_list(self):
        if not self.images:
            return
        try:
            urls = json.loads(self.images)
        except (json.JSONDecodeError, TypeError):
            raise ValidationError({"images": ["Images must be valid JSON"]}) from None
        if not isinstance(urls, list):
            raise ValidationError({"images": ["Images must be a JSON array of URLs"]})

    @classmethod
    def create(
        cls,
        name,
        brand,
        category,
        price,
        unit,
        mrp=None,
        description=None,
        image_url=None,
        video_url=None,
        images=None,
        is_trending=False,
    ):
        from catalogue.product.events import ProductAdded

        now = datetime.now()
        images_json = json.dumps(images) if isinstance(images, list) else images

        product = cls(
            name=name,
            brand=brand,
            category=category,
            price=price,
            mrp=mrp,
            unit=unit,
            description=description,
            image_url=image_url,
            video_url=video_url,
            images=images_json,
            is_trending=is_trending,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=name,
                brand=brand,
                category=category,
                price=price,
                mrp=mrp,
                unit=unit,
                image_url=image_url,
                is_trending=is_trending,
                added_at=now,
            )
        )
        return product

    @property
    def media_urls(self) -> list[str]:
        """Primary image first, followed by the additional media."""
        urls = [self.image_url] if self.image_url else []
        if self.images:
            urls.extend(json.loads(self.images))
        return urls

    def discount_percent(self) -> int:
        return mrp_discount_percent(self.price, self.mrp)

    def update_details(
        self,
        name=None,
        brand=None,
        category=None,
        unit=None,
        description=None,
        image_url=None,
        video_url=None,
        images=None,
    ):
        from catalogue.product.events import ProductDetailsUpdated

        if name is not None:
            self.name = name
        if brand is not None:
            self.brand = brand
        if category is not None:
            self.category = category
        if unit is not None:
            self.unit = unit
        if description is not None:
            self.description = description
        if image_url is not None:
            self.image_url = image_url
        if video_url is not None:
            self.video_url = video_url
        if images is not None:
            self.images = json.dumps(images) if isinstance(images, list) else images

        self.updated_at = datetime.now()

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                brand=self.brand,
                category=self.category,
                unit=self.unit,
                image_url=self.image_url,
            )
        )

    def reprice(self, price, mrp=None):
        """Change the selling price (and optionally the MRP) in one step."""
        from catalogue.product.events import ProductRepriced

        previous_price = self.price
        with atomic_change(self):
            self.price = price
            if mrp is not None:
                self.mrp = mrp
        self.updated_at = datetime.now()

        self.raise_(
            ProductRepriced(
                product_id=self.id,
                previous_price=previous_price,
                new_price=self.price,
                mrp=self.mrp,
            )
        )

    def mark_trending(self, is_trending):
        from catalogue.product.events import ProductTrendingChanged

        self.is_trending = bool(is_trending)
        self.updated_at = datetime.now()

        self.raise_(
            ProductTrendingChanged(
                product_id=self.id,
                is_trending=self.is_trending,
            )
        )

    def activate(self):
        from catalogue.product.events import ProductActivated

        if self.is_active:
            raise ValidationError({"is_active": ["Product is already active"]})

        self.is_active = True
        self.updated_at = datetime.now()
        self.raise_(ProductActivated(product_id=self.id))

    def deactivate(self):
        from catalogue.product.events import ProductDeactivated

        if not self.is_active:
            raise ValidationError({"is_active": ["Product is already inactive"]})

        self.is_active = False
        self.updated_at = datetime.now()
        self.raise_(ProductDeactivated(product_id=self.id))

    def remove(self):
        """Record the product's removal from the catalogue; the handler deletes the record."""
        from catalogue.product.events import ProductRemoved

        self.raise_(ProductRemoved(product_id=self.id, removed_at=datetime.now()))

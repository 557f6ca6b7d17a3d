"""Product card — lightweight storefront listing projection.

Cards carry the base price and MRP only. The promotional price depends on
the moment the shopper looks, so it is resolved at read time by
``catalogue.listing`` instead of being projected.
"""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.events import (
    ProductActivated,
    ProductAdded,
    ProductDeactivated,
    ProductDetailsUpdated,
    ProductRemoved,
    ProductRepriced,
    ProductTrendingChanged,
)
from catalogue.product.product import Product


@catalogue.projection
class ProductCard:
    product_id: Identifier(identifier=True, required=True)
    name: String(required=True, max_length=255)
    brand: String(required=True, max_length=100)
    category: String(required=True, max_length=50)
    price: Integer(required=True)
    mrp: Integer()
    unit: String(max_length=50)
    image_url: String(max_length=500)
    is_trending: Boolean(default=False)
    is_active: Boolean(default=True)
    added_at: DateTime()


@catalogue.projector(projector_for=ProductCard, aggregates=[Product])
class ProductCardProjector:
    @on(ProductAdded)
    def on_product_added(self, event):
        current_domain.repository_for(ProductCard).add(
            ProductCard(
                product_id=event.product_id,
                name=event.name,
                brand=event.brand,
                category=event.category,
                price=event.price,
                mrp=event.mrp,
                unit=event.unit,
                image_url=event.image_url,
                is_trending=event.is_trending or False,
                is_active=True,
                added_at=event.added_at,
            )
        )

    @on(ProductDetailsUpdated)
    def on_details_updated(self, event):
        repo = current_domain.repository_for(ProductCard)
        card = repo.get(event.product_id)
        card.name = event.name
        card.brand = event.brand
        card.category = event.category
        card.unit = event.unit
        card.image_url = event.image_url
        repo.add(card)

    @on(ProductRepriced)
    def on_repriced(self, event):
        repo = current_domain.repository_for(ProductCard)
        card = repo.get(event.product_id)
        card.price = event.new_price
        card.mrp = event.mrp
        repo.add(card)

    @on(ProductTrendingChanged)
    def on_trending_changed(self, event):
        repo = current_domain.repository_for(ProductCard)
        card = repo.get(event.product_id)
        card.is_trending = event.is_trending
        repo.add(card)

    @on(ProductActivated)
    def on_activated(self, event):
        repo = current_domain.repository_for(ProductCard)
        card = repo.get(event.product_id)
        card.is_active = True
        repo.add(card)

    @on(ProductDeactivated)
    def on_deactivated(self, event):
        repo = current_domain.repository_for(ProductCard)
        card = repo.get(event.product_id)
        card.is_active = False
        repo.add(card)

    @on(ProductRemoved)
    def on_removed(self, event):
        repo = current_domain.repository_for(ProductCard)
        try:
            card = repo.get(event.product_id)
        except ObjectNotFoundError:
            return
        repo._dao.delete(card)

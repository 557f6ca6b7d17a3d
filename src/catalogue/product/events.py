"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    brand: String(required=True)
    category: String(required=True)
    price: Integer(required=True)
    mrp: Integer()
    unit: String(required=True)
    image_url: String()
    is_trending: Boolean(default=False)
    added_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductDetailsUpdated:
    """Descriptive fields (name, brand, shelf, unit, media) of a product changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    brand: String(required=True)
    category: String(required=True)
    unit: String(required=True)
    image_url: String()


@catalogue.event(part_of="Product")
class ProductRepriced:
    """A product's selling price or MRP changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_price: Integer(required=True)
    new_price: Integer(required=True)
    mrp: Integer()


@catalogue.event(part_of="Product")
class ProductTrendingChanged:
    __version__ = 1

    product_id: Identifier(required=True)
    is_trending: Boolean(default=False)


@catalogue.event(part_of="Product")
class ProductActivated:
    __version__ = 1

    product_id: Identifier(required=True)


@catalogue.event(part_of="Product")
class ProductDeactivated:
    """A product was hidden from the storefront without being deleted."""

    __version__ = 1

    product_id: Identifier(required=True)


@catalogue.event(part_of="Product")
class ProductRemoved:
    """A product was deleted from the catalogue by an administrator."""

    __version__ = 1

    product_id: Identifier(required=True)
    removed_at: DateTime(required=True)

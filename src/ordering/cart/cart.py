"""Shopping Cart aggregate — the shopper's in-session basket of product snapshots.

The cart is never persisted and raises no events. It lives on a
``ShopperSession`` for as long as the shopper is browsing and is turned into
an Order at checkout. Every mutation is a plain in-memory change that cannot
fail: unknown product ids are ignored and quantities never drop below one.

Totals are derived on access from each line's snapshot ``price``, which is the
catalogue's base price. Promotional offers only change what the storefront
displays.
"""

from collections.abc import Mapping
from datetime import UTC, datetime

from protean.fields import DateTime, HasMany, Integer, String, ValueObject

from ordering.domain import logger, ordering


def _read(source, name):
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


@ordering.value_object(part_of="ShoppingCart")
class ProductSnapshot:
    """The product as the shopper saw it when it went into the cart."""

    product_id = String(required=True, max_length=255)
    name = String(required=True, max_length=255)
    brand = String(max_length=100)
    unit = String(max_length=50)
    price = Integer(required=True, min_value=0)
    image_url = String(max_length=500)

    @classmethod
    def of(cls, product):
        """Snapshot a ``Product``, a ``ProductCard`` row or a plain dict."""
        product_id = _read(product, "product_id") or _read(product, "id")
        return cls(
            product_id=str(product_id),
            name=_read(product, "name"),
            brand=_read(product, "brand"),
            unit=_read(product, "unit"),
            price=int(_read(product, "price") or 0),
            image_url=_read(product, "image_url"),
        )


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product = ValueObject(ProductSnapshot, required=True)
    quantity = Integer(min_value=1, default=1)
    added_at = DateTime()

    @property
    def product_id(self):
        return self.product.product_id

    @property
    def subtotal(self):
        return self.product.price * self.quantity


@ordering.aggregate
class ShoppingCart:
    session_id = String(max_length=255)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, session_id=None):
        now = datetime.now(UTC)
        return cls(session_id=session_id, created_at=now, updated_at=now)

    def _find(self, product_id):
        return next((i for i in self.items if i.product_id == str(product_id)), None)

    def _touch(self):
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product):
        """Add one unit of ``product``, appending a new line the first time it is seen."""
        snapshot = product if isinstance(product, ProductSnapshot) else ProductSnapshot.of(product)

        existing = self._find(snapshot.product_id)
        if existing:
            existing.quantity += 1
        else:
            self.add_items(CartItem(product=snapshot, quantity=1, added_at=datetime.now(UTC)))
        self._touch()

    def remove_item(self, product_id):
        item = self._find(product_id)
        if item is None:
            return
        self.remove_items(item)
        self._touch()

    def increase_quantity(self, product_id):
        item = self._find(product_id)
        if item is None:
            return
        item.quantity += 1
        self._touch()

    def decrease_quantity(self, product_id):
        """Take one unit off a line. A line at quantity 1 stays at 1; use ``remove_item`` to drop it."""
        item = self._find(product_id)
        if item is None or item.quantity <= 1:
            return
        item.quantity -= 1
        self._touch()

    def clear(self):
        if self.items:
            self.remove_items(list(self.items))
        self._touch()

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    def get_total(self) -> int:
        return sum(item.product.price * item.quantity for item in self.items)

    def get_item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def line_subtotal(self, item) -> int:
        return item.product.price * item.quantity

    def lines(self) -> list[dict]:
        """Cart lines in insertion order, ready for display or checkout."""
        return [
            {
                "product_id": item.product_id,
                "name": item.product.name,
                "brand": item.product.brand,
                "unit": item.product.unit,
                "image_url": item.product.image_url,
                "price": item.product.price,
                "quantity": item.quantity,
                "subtotal": self.line_subtotal(item),
            }
            for item in self.items
        ]

    @property
    def is_empty(self) -> bool:
        return not self.items

    # -------------------------------------------------------------------
    # Catalogue sync
    # -------------------------------------------------------------------
    def reprice(self, products) -> list[str]:
        """Refresh snapshots from a fresh catalogue listing.

        Lines whose product is missing from ``products`` keep their old
        snapshot. Returns the ids of lines whose price changed.
        """
        fresh = {}
        for product in products:
            snapshot = ProductSnapshot.of(product)
            fresh[snapshot.product_id] = snapshot

        changed = []
        for item in self.items:
            snapshot = fresh.get(item.product_id)
            if snapshot is None:
                continue
            if snapshot.price != item.product.price:
                changed.append(item.product_id)
            item.product = snapshot

        if changed:
            logger.info("Cart repriced", session_id=self.session_id, changed_product_ids=changed)
        self._touch()
        return changed

    def reorder(self, order_items):
        """Put the lines of a past order back into the cart at their original quantities."""
        for line in order_items:
            snapshot = ProductSnapshot(
                product_id=str(_read(line, "product_id") or _read(line, "id")),
                name=_read(line, "product_name"),
                brand=_read(line, "product_brand"),
                unit=_read(line, "product_unit"),
                price=int(_read(line, "unit_price") or 0),
                image_url=_read(line, "product_image"),
            )
            for _ in range(int(_read(line, "quantity") or 0)):
                self.add_item(snapshot)

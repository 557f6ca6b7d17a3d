"""Application tests for product administration handlers."""

import json

import pytest
from catalogue.product.creation import AddProduct
from catalogue.product.details import RepriceProduct, UpdateProductDetails
from catalogue.product.lifecycle import ActivateProduct, DeactivateProduct, MarkTrending, RemoveProduct
from catalogue.product.product import Product
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain


def _add_product(**overrides):
    defaults = {
        "name": "Tomato Ketchup",
        "brand": "Kissan",
        "category": "Ketchup",
        "price": 180,
        "mrp": 200,
        "unit": "1 kg",
    }
    defaults.update(overrides)
    return current_domain.process(AddProduct(**defaults), asynchronous=False)


class TestAddProductHandler:
    def test_add_product_returns_id(self):
        product_id = _add_product()
        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Tomato Ketchup"
        assert product.mrp == 200

    def test_add_product_with_media(self):
        product_id = _add_product(images=json.dumps(["https://cdn/back.jpg"]), video_url="https://cdn/demo.mp4")
        product = current_domain.repository_for(Product).get(product_id)
        assert product.media_urls == ["https://cdn/back.jpg"]
        assert product.video_url == "https://cdn/demo.mp4"

    def test_add_product_rejects_mrp_below_price(self):
        with pytest.raises(ValidationError):
            _add_product(price=250, mrp=200)


class TestProductDetailsHandler:
    def test_update_details(self):
        product_id = _add_product()
        current_domain.process(
            UpdateProductDetails(product_id=product_id, name="Tomato Ketchup Pouch", unit="950 g"),
            asynchronous=False,
        )
        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Tomato Ketchup Pouch"
        assert product.unit == "950 g"
        assert product.brand == "Kissan"

    def test_reprice(self):
        product_id = _add_product()
        current_domain.process(RepriceProduct(product_id=product_id, price=170), asynchronous=False)
        assert current_domain.repository_for(Product).get(product_id).price == 170

    def test_reprice_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(RepriceProduct(product_id="missing", price=170), asynchronous=False)


class TestLifecycleHandler:
    def test_deactivate_then_activate(self):
        product_id = _add_product()
        repo = current_domain.repository_for(Product)

        current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
        assert repo.get(product_id).is_active is False

        current_domain.process(ActivateProduct(product_id=product_id), asynchronous=False)
        assert repo.get(product_id).is_active is True

    def test_mark_trending(self):
        product_id = _add_product()
        current_domain.process(MarkTrending(product_id=product_id, is_trending=True), asynchronous=False)
        assert current_domain.repository_for(Product).get(product_id).is_trending is True

    def test_remove_product_deletes_it(self):
        product_id = _add_product()
        current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Product).get(product_id)

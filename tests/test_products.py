"""Tests for the product catalog."""

import pytest
from pydantic import ValidationError

from storefront.database.products import ProductDatabase
from storefront.models.cart import CartLineItem
from storefront.models.product import (
    PLACEHOLDER_IMAGE,
    ProductCreate,
    ProductUpdate,
    normalize_product,
    normalize_product_id,
)


@pytest.fixture()
def product_db():
    return ProductDatabase()


class TestNormalization:
    def test_defaults_applied_once(self):
        product = normalize_product(
            {"id": 42, "name": "Lamp", "price": 19.5, "category": "Home", "seller": "LightCo"}
        )
        assert product.id == "42"
        assert product.image == PLACEHOLDER_IMAGE
        assert product.rating == 5
        assert product.reviews == 0
        assert product.stock == 10

    def test_blank_image_gets_placeholder(self):
        product = normalize_product(
            {"id": "1", "name": "Lamp", "price": 1, "category": "Home", "seller": "X", "image": ""}
        )
        assert product.image == PLACEHOLDER_IMAGE

    @pytest.mark.parametrize("raw, expected", [(1, "1"), ("1", "1"), (2.0, "2"), ("abc", "abc")])
    def test_product_id_normalization(self, raw, expected):
        assert normalize_product_id(raw) == expected


class TestProductDatabase:
    def test_seed_catalog(self, product_db):
        assert [p.id for p in product_db.search_products()] == ["1", "2", "3"]

    def test_get_by_numeric_id(self, product_db):
        assert product_db.get_product(2).name == "Wooden Dining Table"

    def test_search_by_query_and_category(self, product_db):
        assert [p.id for p in product_db.search_products(query="chair")] == ["3"]
        assert [p.id for p in product_db.search_products(query="woodworks")] == ["2"]
        assert len(product_db.search_products(category="home")) == 3
        assert product_db.search_products(category="Garden") == []

    def test_create_product(self, product_db):
        product = product_db.create_product(
            ProductCreate(name="Rug", price=49.99, category="Home", seller="Tapis")
        )
        assert product_db.get_product(product.id) == product
        assert product.stock == 10

    def test_created_ids_are_unique(self, product_db):
        request = ProductCreate(name="Rug", price=49.99, category="Home", seller="Tapis")
        ids = {product_db.create_product(request).id for _ in range(10)}
        assert len(ids) == 10

    def test_create_requires_positive_price(self):
        with pytest.raises(ValidationError):
            ProductCreate(name="Rug", price=0, category="Home", seller="Tapis")

    def test_update_keeps_omitted_fields(self, product_db):
        updated = product_db.update_product("1", ProductUpdate(price=99.0))
        assert updated.price == 99.0
        assert updated.name == "Modern Sofa"
        assert updated.stock == 15

    def test_update_missing_product(self, product_db):
        assert product_db.update_product("404", ProductUpdate(price=1.0)) is None

    def test_delete_product(self, product_db):
        assert product_db.delete_product("1")
        assert product_db.get_product("1") is None
        assert not product_db.delete_product("1")

    def test_cart_price_captured_by_value(self, product_db, cart_store):
        cart_store.add_item(CartLineItem.from_product(product_db.get_product("1"), 2))
        product_db.update_product("1", ProductUpdate(price=1.0))
        assert cart_store.items[0].price == 129.99

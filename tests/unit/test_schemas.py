"""
Unit tests for request coercion done by the pydantic schemas.
"""

import pydantic
import pytest

from boutique.db.models import MAX_PRICE, MAX_QUANTITY, MAX_STOCK
from boutique.db.schemas import CartItemAdd, OrderCreate, ProductCreate, ProductUpdate, UserCreate


class TestCartItemAdd:

    @pytest.mark.parametrize("raw, expected", [
        (3, 3),
        ("4", 4),
        (None, None),
        (0, None),
        (-2, None),
        ("abc", None),
    ])
    def test_quantity_coercion(self, raw, expected):
        item = CartItemAdd.model_validate({"productId": "p1", "quantity": raw})
        assert item.quantity == expected

    def test_oversized_quantity_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            CartItemAdd.model_validate({"productId": "p1", "quantity": MAX_QUANTITY + 1})
        with pytest.raises(pydantic.ValidationError):
            CartItemAdd.model_validate({"productId": "p1", "quantity": 10**20})

    def test_quantity_may_be_omitted(self):
        assert CartItemAdd.model_validate({"productId": "p1"}).quantity is None

    def test_snake_case_field_names_accepted(self):
        assert CartItemAdd.model_validate({"product_id": "p1"}).product_id == "p1"


class TestProductCreate:

    def test_numeric_and_boolean_strings_are_coerced(self):
        product = ProductCreate.model_validate({
            "name": "Robe",
            "price": "65000",
            "stock": "12",
            "category": "vetements",
            "featured": "true",
        })
        assert product.price == 65000
        assert product.stock == 12
        assert product.featured is True

    def test_defaults(self):
        product = ProductCreate.model_validate({"name": "Robe", "price": 1, "category": "vetements"})
        assert product.stock == 0
        assert product.featured is False
        assert product.description == ""

    @pytest.mark.parametrize("field", ["price", "stock"])
    def test_negative_numbers_rejected(self, field):
        payload = {"name": "Robe", "price": 10, "stock": 1, "category": "vetements", field: -1}
        with pytest.raises(pydantic.ValidationError):
            ProductCreate.model_validate(payload)

    @pytest.mark.parametrize("field, limit", [("price", MAX_PRICE), ("stock", MAX_STOCK)])
    def test_oversized_numbers_rejected(self, field, limit):
        payload = {"name": "Robe", "price": 10, "stock": 1, "category": "vetements", field: limit + 1}
        with pytest.raises(pydantic.ValidationError):
            ProductCreate.model_validate(payload)
        with pytest.raises(pydantic.ValidationError):
            ProductUpdate.model_validate({field: limit + 1})
        assert ProductUpdate.model_validate({field: limit}).model_dump(exclude_unset=True) == {field: limit}

    def test_update_only_reports_sent_fields(self):
        update = ProductUpdate.model_validate({"price": 500})
        assert update.model_dump(exclude_unset=True) == {"price": 500}


def test_register_requires_valid_email():
    with pytest.raises(pydantic.ValidationError):
        UserCreate.model_validate({"name": "A", "email": "not-an-email", "password": "pw"})


def test_order_payload_uses_camel_case():
    order = OrderCreate.model_validate({
        "shippingAddress": {"street": "1 rue du Port", "city": "Dakar", "postalCode": "10000"},
        "paymentMethod": "cash",
    })
    assert order.shipping_address.postal_code == "10000"
    assert order.payment_method == "cash"
    assert order.shipping_address.model_dump(by_alias=True, exclude_none=True) == {
        "street": "1 rue du Port", "city": "Dakar", "postalCode": "10000",
    }

"""
Tests for domain entities
"""

import dataclasses
from decimal import Decimal

import pytest

from storefront.domain.entities import CartItem, Product, User


class TestProduct:
    """Tests for Product value object."""

    def test_create_sanitizes_script_tags(self):
        product = Product.create(999, "<script>alert('XSS')</script>Malicious", Decimal("1.00"), "Test")

        assert "<script>" not in product.name
        assert "&lt;script&gt;" in product.name
        assert product.is_valid()

    def test_create_trims_and_blanks(self):
        product = Product.create(1, "  Laptop  ", "10", "   ", description="   ")

        assert product.name == "Laptop"
        assert product.category == ""
        assert product.description == ""

    def test_price_currency_precision(self):
        product = Product.create(1, "Pen", 1.5, "Office")
        assert product.price == Decimal("1.50")

    def test_invalid_price_rejected_at_construction(self):
        with pytest.raises(ValueError):
            Product.create(1, "Pen", "abc", "Office")

    @pytest.mark.parametrize(
        "name,price,category",
        [
            ("", Decimal("10"), "Electronics"),
            ("Laptop", Decimal("0"), "Electronics"),
            ("Laptop", Decimal("-5"), "Electronics"),
            ("Laptop", Decimal("10"), "  "),
        ],
    )
    def test_is_valid_rejects(self, name, price, category):
        assert not Product.create(1, name, price, category).is_valid()

    def test_is_immutable(self, laptop):
        with pytest.raises(dataclasses.FrozenInstanceError):
            laptop.price = Decimal("1.00")

    def test_formatted_details(self, laptop):
        assert laptop.formatted_details() == "Product: Laptop | Price: $999.99 | Category: Electronics"
        assert str(laptop) == laptop.formatted_details()

    def test_from_dict_does_not_double_encode(self):
        product = Product.create(3, "Tom & Jerry", "5", "Kids")
        restored = Product.from_dict(product.to_dict())

        assert restored == product
        assert restored.name == "Tom &amp; Jerry"


class TestCartItem:
    def test_subtotal(self, laptop):
        item = CartItem(product=laptop, quantity=3)
        assert item.subtotal == Decimal("2999.97")
        assert item.product_id == 1

    def test_from_dict(self, laptop):
        item = CartItem.from_dict({"product": laptop.to_dict(), "quantity": "2"})
        assert item.quantity == 2
        assert item.product == laptop


class TestUser:
    def test_valid_user(self):
        assert User(username="alice", email="alice@example.com").is_valid()

    def test_email_without_at_is_invalid(self):
        assert not User(username="alice", email="alice.example.com").is_valid()

    def test_blank_username_is_invalid(self):
        assert not User(username=" ", email="a@b.c").is_valid()

    def test_defaults(self):
        user = User(username="alice", email="a@b.c")
        assert user.is_active is True
        assert user.created_at is not None

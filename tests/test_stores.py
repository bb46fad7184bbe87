"""Tests for the SQL cart/catalog stores (in-memory SQLite)"""
from decimal import Decimal
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from storefront.data.models.product import ProductModel
from storefront.data.seed import SAMPLE_PRODUCTS, seed
from storefront.data.stores import SqlCartStore, SqlCatalogStore
from storefront.repos.product_repo import ProductRepo
from storefront.services.cart_engine import CartEngine


@pytest.fixture
def products(session_factory):
    db = session_factory()
    repo = ProductRepo(db)
    laptop = repo.create_product(ProductModel(name="Laptop", price=Decimal("999.99"), category="Electronics", stock_quantity=10))
    mouse = repo.create_product(ProductModel(name="Mouse", price=Decimal("29.99"), category="Electronics", stock_quantity=5))
    ids = (laptop.id, mouse.id)
    db.close()
    return ids


@pytest.fixture
def cart_store(session_factory):
    return SqlCartStore(session_factory)


@pytest.fixture
def catalog_store(session_factory):
    return SqlCatalogStore(session_factory)


def broken_session_factory():
    session = Mock()
    error = OperationalError("SELECT", {}, Exception("db down"))
    session.execute.side_effect = error
    session.get.side_effect = error
    session.get_bind.return_value.dialect.name = "sqlite"
    return session


class TestSqlCartStore:
    @pytest.mark.asyncio
    async def test_duplicate_insert_merges_quantity(self, cart_store, products):
        laptop_id, _ = products

        assert await cart_store.add_cart_item("u1", laptop_id, 1)
        assert await cart_store.add_cart_item("u1", laptop_id, 2)

        items = await cart_store.get_cart_items("u1")
        assert len(items) == 1
        assert items[0].quantity == 3
        assert items[0].product.name == "Laptop"
        assert items[0].product.price == Decimal("999.99")

    @pytest.mark.asyncio
    async def test_update_is_absolute_and_noop_when_missing(self, cart_store, products):
        laptop_id, mouse_id = products
        await cart_store.add_cart_item("u1", laptop_id, 2)

        assert await cart_store.update_cart_item("u1", laptop_id, 7)
        assert await cart_store.update_cart_item("u1", mouse_id, 4)

        items = await cart_store.get_cart_items("u1")
        assert [(i.product_id, i.quantity) for i in items] == [(laptop_id, 7)]

    @pytest.mark.asyncio
    async def test_remove_and_clear_are_scoped_by_user(self, cart_store, products):
        laptop_id, mouse_id = products
        await cart_store.add_cart_item("u1", laptop_id, 1)
        await cart_store.add_cart_item("u1", mouse_id, 1)
        await cart_store.add_cart_item("u2", laptop_id, 1)

        assert await cart_store.remove_cart_item("u1", laptop_id)
        assert [i.product_id for i in await cart_store.get_cart_items("u1")] == [mouse_id]

        assert await cart_store.clear_cart("u1")
        assert await cart_store.get_cart_items("u1") == []
        assert len(await cart_store.get_cart_items("u2")) == 1

    @pytest.mark.asyncio
    async def test_deleting_product_cascades_to_cart_rows(self, cart_store, products, session_factory):
        laptop_id, _ = products
        await cart_store.add_cart_item("u1", laptop_id, 1)

        db = session_factory()
        db.delete(db.get(ProductModel, laptop_id))
        db.commit()
        db.close()

        assert await cart_store.get_cart_items("u1") == []

    @pytest.mark.asyncio
    async def test_db_failure_reported_as_false(self):
        store = SqlCartStore(broken_session_factory)

        assert await store.add_cart_item("u1", 1, 1) is False
        assert await store.update_cart_item("u1", 1, 2) is False
        assert await store.remove_cart_item("u1", 1) is False
        assert await store.clear_cart("u1") is False
        assert await store.get_cart_items("u1") == []

    @pytest.mark.asyncio
    async def test_engine_round_trip(self, cart_store, catalog_store, products):
        laptop_id, _ = products
        laptop = await catalog_store.get_product_by_id(laptop_id)
        engine = CartEngine(cart_store, "u1")

        await engine.add_product(laptop)
        await engine.add_product(laptop)
        reloaded = CartEngine(cart_store, "u1")
        await reloaded.load_from_store()
        assert reloaded.get_item_count() == 2

        await engine.clear_cart()
        await reloaded.load_from_store()
        assert reloaded.items == ()


class TestSqlCatalogStore:
    @pytest.mark.asyncio
    async def test_get_all_and_by_id(self, catalog_store, products):
        laptop_id, _ = products

        everything = await catalog_store.get_all_products()
        laptop = await catalog_store.get_product_by_id(laptop_id)

        assert [p.name for p in everything] == ["Laptop", "Mouse"]
        assert laptop.stock_quantity == 10
        assert laptop.is_valid()

    @pytest.mark.asyncio
    async def test_missing_product_is_none(self, catalog_store, products):
        assert await catalog_store.get_product_by_id(12345) is None

    @pytest.mark.asyncio
    async def test_db_failure_is_empty(self):
        store = SqlCatalogStore(broken_session_factory)

        assert await store.get_all_products() == []
        assert await store.get_product_by_id(1) is None


def test_seed_only_when_empty(session_factory):
    assert seed(session_factory) == len(SAMPLE_PRODUCTS)
    assert seed(session_factory) == 0

    db = session_factory()
    assert ProductRepo(db).count() == len(SAMPLE_PRODUCTS)
    db.close()

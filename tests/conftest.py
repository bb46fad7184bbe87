"""Pytest configuration and fixtures"""
import os

# Set test environment variables before storefront modules read them
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test_secret")
os.environ.setdefault("SEED_SAMPLE_PRODUCTS", "false")

from decimal import Decimal
from typing import Dict, List, Optional, Tuple

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.data.database import Base, enable_sqlite_foreign_keys
import storefront.data.models  # noqa: F401
from storefront.domain.entities import CartItem, Product


class FakeCartStore:
    """In-memory CartStore with the same upsert / absolute-set semantics as the SQL one."""

    def __init__(self, catalog: "FakeCatalog"):
        self.catalog = catalog
        self.rows: Dict[Tuple[str, int], int] = {}
        self.fail = False
        self.calls: List[tuple] = []

    async def add_cart_item(self, user_id, product_id, quantity):
        self.calls.append(("add", user_id, product_id, quantity))
        if self.fail:
            return False
        key = (user_id, product_id)
        self.rows[key] = self.rows.get(key, 0) + quantity
        return True

    async def update_cart_item(self, user_id, product_id, quantity):
        self.calls.append(("update", user_id, product_id, quantity))
        if self.fail:
            return False
        key = (user_id, product_id)
        if key in self.rows:
            self.rows[key] = quantity
        return True

    async def remove_cart_item(self, user_id, product_id):
        self.calls.append(("remove", user_id, product_id))
        if self.fail:
            return False
        self.rows.pop((user_id, product_id), None)
        return True

    async def get_cart_items(self, user_id):
        items = []
        for (uid, pid), qty in self.rows.items():
            product = self.catalog.products.get(pid)
            if uid == user_id and product is not None:
                items.append(CartItem(product=product, quantity=qty))
        return items

    async def clear_cart(self, user_id):
        self.calls.append(("clear", user_id))
        if self.fail:
            return False
        for key in [k for k in self.rows if k[0] == user_id]:
            del self.rows[key]
        return True


class FakeCatalog:
    def __init__(self, products: List[Product]):
        self.products = {p.product_id: p for p in products}

    async def get_all_products(self):
        return list(self.products.values())

    async def get_product_by_id(self, product_id):
        return self.products.get(product_id)


class FakeMirror:
    def __init__(self):
        self.data: Dict[str, List[CartItem]] = {}
        self.set_calls = 0

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, items):
        self.set_calls += 1
        self.data[key] = list(items)


class StaticAuthProvider:
    def __init__(self, identity: Optional[str] = None):
        self.identity = identity
        self.calls = 0

    async def get_current_identity(self):
        self.calls += 1
        return self.identity


@pytest.fixture
def laptop():
    return Product.create(1, "Laptop", Decimal("999.99"), "Electronics", "High-performance laptop")


@pytest.fixture
def mouse():
    return Product.create(2, "Wireless Mouse", Decimal("29.99"), "Electronics")


@pytest.fixture
def cable():
    return Product.create(5, "USB-C Cable", Decimal("12.99"), "Accessories")


@pytest.fixture
def catalog(laptop, mouse, cable):
    return FakeCatalog([laptop, mouse, cable])


@pytest.fixture
def cart_store(catalog):
    return FakeCartStore(catalog)


@pytest.fixture
def mirror():
    return FakeMirror()


@pytest.fixture
def session_factory():
    """In-memory SQLite shared across threads"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()

# storefront/data/stores.py
"""
Async adaptery SQL dla CartStore i CatalogStore.

Kazde wywolanie otwiera wlasna sesje (jak taski w tle), blokujace
zapytania SQLAlchemy ida przez threadpool. Bledy bazy sa lapane tutaj,
logowane i zamieniane na False / pusty wynik / None.
"""
from typing import Callable, List, Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.entities import CartItem, Product
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SessionFactory = Callable[[], Session]


def product_from_model(model: ProductModel) -> Product:
    return Product(
        product_id=model.id,
        name=model.name,
        price=model.price,
        category=model.category,
        description=model.description or "",
        image_url=model.image_url or "",
        stock_quantity=model.stock_quantity or 0,
    )


class SqlCartStore:
    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def _write(self, action: str, op: Callable[[CartRepo], object]) -> bool:
        db = self.session_factory()
        repo = CartRepo(db)
        try:
            op(repo)
            repo.commit()
            return True
        except SQLAlchemyError as e:
            logger.error(f"Error {action}: {e}")
            repo.rollback()
            return False
        finally:
            db.close()

    async def add_cart_item(self, user_id: str, product_id: int, quantity: int) -> bool:
        return await run_in_threadpool(
            self._write,
            "adding cart item",
            lambda repo: repo.upsert_cart_item(user_id, product_id, quantity),
        )

    async def update_cart_item(self, user_id: str, product_id: int, quantity: int) -> bool:
        return await run_in_threadpool(
            self._write,
            "updating cart item",
            lambda repo: repo.set_quantity(user_id, product_id, quantity),
        )

    async def remove_cart_item(self, user_id: str, product_id: int) -> bool:
        return await run_in_threadpool(
            self._write,
            "removing cart item",
            lambda repo: repo.delete_cart_item(user_id, product_id),
        )

    async def clear_cart(self, user_id: str) -> bool:
        return await run_in_threadpool(
            self._write,
            "clearing cart",
            lambda repo: repo.clear_cart(user_id),
        )

    def _get_cart_items(self, user_id: str) -> List[CartItem]:
        db = self.session_factory()
        try:
            rows = CartRepo(db).get_cart_items(user_id)
            return [
                CartItem(product=product_from_model(product), quantity=item.quantity)
                for item, product in rows
            ]
        except SQLAlchemyError as e:
            logger.error(f"Error fetching cart items for {user_id}: {e}")
            return []
        finally:
            db.close()

    async def get_cart_items(self, user_id: str) -> List[CartItem]:
        return await run_in_threadpool(self._get_cart_items, user_id)


class SqlCatalogStore:
    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def _get_all_products(self) -> List[Product]:
        db = self.session_factory()
        try:
            return [product_from_model(p) for p in ProductRepo(db).get_all()]
        except SQLAlchemyError as e:
            logger.error(f"Error fetching products: {e}")
            return []
        finally:
            db.close()

    def _get_product_by_id(self, product_id: int) -> Optional[Product]:
        db = self.session_factory()
        try:
            model = ProductRepo(db).get_product(product_id)
            return product_from_model(model) if model else None
        except SQLAlchemyError as e:
            logger.error(f"Error fetching product {product_id}: {e}")
            return None
        finally:
            db.close()

    async def get_all_products(self) -> List[Product]:
        return await run_in_threadpool(self._get_all_products)

    async def get_product_by_id(self, product_id: int) -> Optional[Product]:
        return await run_in_threadpool(self._get_product_by_id, product_id)

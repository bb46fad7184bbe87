# storefront/repos/cart_repo.py
from typing import List, Tuple

from sqlalchemy import select, update, delete
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.product import ProductModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def upsert_cart_item(self, user_id: str, product_id: int, quantity: int) -> None:
        """
        INSERT albo zwieksz ilosc o quantity gdy (user_id, product_id) juz jest.
        Atomowe po stronie bazy, unique constraint rozstrzyga konflikt.
        """
        values = {"user_id": user_id, "product_id": product_id, "quantity": quantity}
        dialect = self.db.get_bind().dialect.name

        if dialect == "mysql":
            stmt = mysql.insert(CartItemModel).values(**values)
            stmt = stmt.on_duplicate_key_update(
                quantity=CartItemModel.quantity + stmt.inserted.quantity,
            )
        else:
            insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
            stmt = insert(CartItemModel).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id", "product_id"],
                set_={"quantity": CartItemModel.quantity + stmt.excluded.quantity},
            )

        self.db.execute(stmt)

    def set_quantity(self, user_id: str, product_id: int, quantity: int) -> int:
        res = self.db.execute(
            update(CartItemModel)
            .where(CartItemModel.user_id == user_id, CartItemModel.product_id == product_id)
            .values(quantity=quantity)
        )
        return res.rowcount

    def get_cart_items(self, user_id: str) -> List[Tuple[CartItemModel, ProductModel]]:
        #join z aktualnymi danymi produktu, kolejnosc dodania
        rows = self.db.execute(
            select(CartItemModel, ProductModel)
            .join(ProductModel, CartItemModel.product_id == ProductModel.id)
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.id)
        ).all()
        return [(item, product) for item, product in rows]

    def delete_cart_item(self, user_id: str, product_id: int) -> int:
        res = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
        )
        return res.rowcount

    def clear_cart(self, user_id: str) -> int:
        res = self.db.execute(delete(CartItemModel).where(CartItemModel.user_id == user_id))
        return res.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

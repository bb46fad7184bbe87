# storefront/domain/contracts.py
"""
Waskie interfejsy wspolpracownikow koszyka, wstrzykiwane przez konstruktor.
"""
from typing import List, Optional, Protocol

from storefront.domain.entities import CartItem, Product


class CartStore(Protocol):
    async def add_cart_item(self, user_id: str, product_id: int, quantity: int) -> bool:
        """Upsert: insert albo dodaj quantity do istniejacego wiersza."""
        ...

    async def update_cart_item(self, user_id: str, product_id: int, quantity: int) -> bool:
        """Ustawia ilosc bezwzglednie, no-op gdy wiersza nie ma."""
        ...

    async def remove_cart_item(self, user_id: str, product_id: int) -> bool: ...

    async def get_cart_items(self, user_id: str) -> List[CartItem]: ...

    async def clear_cart(self, user_id: str) -> bool: ...


class CatalogStore(Protocol):
    async def get_all_products(self) -> List[Product]: ...

    async def get_product_by_id(self, product_id: int) -> Optional[Product]: ...


class AuthProvider(Protocol):
    async def get_current_identity(self) -> Optional[str]:
        """None oznacza niezalogowanego (guest)."""
        ...


class ClientMirror(Protocol):
    async def get(self, key: str) -> Optional[List[CartItem]]: ...

    async def set(self, key: str, items: List[CartItem]) -> None: ...

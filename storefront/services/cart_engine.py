# storefront/services/cart_engine.py
import asyncio
import dataclasses
from decimal import Decimal
from typing import List, Optional, Tuple

from storefront.domain.contracts import CartStore
from storefront.domain.entities import CartItem, Product
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartEngine:
    """
    Koszyk jednego uzytkownika w pamieci, zsynchronizowany z CartStore.

    - kazda mutacja najpierw zapisuje do store, dopiero po sukcesie zmienia
      stan w pamieci, wiec pamiec i baza sie nie rozjezdzaja
    - mutacje serializowane przez asyncio.Lock na instancje
    - "nie znaleziono" to zwykly wynik False, nie wyjatek
    """

    def __init__(self, store: CartStore, user_id: str):
        self.store = store
        self.user_id = user_id
        self._items: List[CartItem] = []
        self._lock = asyncio.Lock()

    @property
    def items(self) -> Tuple[CartItem, ...]:
        #kopie, zeby nikt nie edytowal koszyka z pominieciem silnika
        return tuple(dataclasses.replace(item) for item in self._items)

    def _find(self, product_id: int) -> Optional[CartItem]:
        return next((i for i in self._items if i.product_id == product_id), None)

    #commands
    async def add_product(self, product: Optional[Product]) -> bool:
        if product is None or not product.is_valid():
            logger.warning(f"Invalid product, not added to cart of {self.user_id}")
            return False

        async with self._lock:
            existing = self._find(product.product_id)

            if existing:
                new_quantity = existing.quantity + 1
                if not await self.store.update_cart_item(self.user_id, product.product_id, new_quantity):
                    return False
                existing.quantity = new_quantity
            else:
                if not await self.store.add_cart_item(self.user_id, product.product_id, 1):
                    return False
                self._items.append(CartItem(product=product, quantity=1))

        logger.info(f"Added product {product.product_id} to cart of {self.user_id}")
        return True

    async def remove_product(self, product_id: int) -> bool:
        async with self._lock:
            return await self._remove(product_id)

    async def _remove(self, product_id: int) -> bool:
        item = self._find(product_id)

        if item is None:
            logger.info(f"Product {product_id} not found in cart of {self.user_id}")
            return False

        if not await self.store.remove_cart_item(self.user_id, product_id):
            return False

        self._items.remove(item)
        logger.info(f"Removed product {product_id} from cart of {self.user_id}")
        return True

    async def update_quantity(self, product_id: int, quantity: int) -> bool:
        async with self._lock:
            if quantity <= 0:
                return await self._remove(product_id)

            item = self._find(product_id)
            if item is None:
                return False

            # ustawienie bezwzgledne, bez ponownej walidacji produktu
            if not await self.store.update_cart_item(self.user_id, product_id, quantity):
                return False

            item.quantity = quantity
            return True

    async def clear_cart(self) -> bool:
        async with self._lock:
            if not await self.store.clear_cart(self.user_id):
                return False
            self._items.clear()

        logger.info(f"Cart of {self.user_id} cleared")
        return True

    async def load_from_store(self) -> None:
        """Nadpisuje caly stan w pamieci tym co jest w store, bez mergowania."""
        async with self._lock:
            self._items = list(await self.store.get_cart_items(self.user_id))

    #query
    def calculate_total(self) -> Decimal:
        return sum((i.subtotal for i in self._items), Decimal("0.00"))

    def get_item_count(self) -> int:
        return sum(i.quantity for i in self._items)

# storefront/services/catalog_service.py
from typing import List, Optional

from storefront.domain.contracts import CatalogStore
from storefront.domain.entities import Product

ALL_CATEGORIES = "All"


class CatalogService:
    def __init__(self, store: CatalogStore):
        self.store = store

    async def get_all_products(self) -> List[Product]:
        return await self.store.get_all_products()

    async def get_product_by_id(self, product_id: int) -> Optional[Product]:
        return await self.store.get_product_by_id(product_id)

    async def get_products_by_category(self, category: str | None) -> List[Product]:
        products = await self.store.get_all_products()

        if not category or not category.strip() or category == ALL_CATEGORIES:
            return products

        wanted = category.casefold()
        return [p for p in products if p.category.casefold() == wanted]

    async def get_categories(self) -> List[str]:
        products = await self.store.get_all_products()
        return [ALL_CATEGORIES] + sorted({p.category for p in products})

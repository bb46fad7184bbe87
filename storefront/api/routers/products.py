# storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.api.deps import get_catalog_service
from storefront.domain.schemas import ProductOut
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/", response_model=List[ProductOut])
async def list_products(
    category: str | None = Query(None),
    svc: CatalogService = Depends(get_catalog_service),
):
    return await svc.get_products_by_category(category)


@router.get("/categories", response_model=List[str])
async def list_categories(svc: CatalogService = Depends(get_catalog_service)):
    return await svc.get_categories()


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: int, svc: CatalogService = Depends(get_catalog_service)):
    product = await svc.get_product_by_id(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

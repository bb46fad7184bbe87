# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException

from storefront.api.deps import get_cart_session, get_catalog_service
from storefront.domain.schemas import CartOut, ItemIn, QuantityIn
from storefront.services.cart_sync import CartSynchronizer
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/cart", tags=["cart"])


async def cart_view(session: CartSynchronizer) -> dict:
    cart = await session.get_cart()
    return {
        "user_id": cart.user_id,
        "items": [
            {
                "product_id": i.product_id,
                "name": i.product.name,
                "price": i.product.price,
                "quantity": i.quantity,
                "subtotal": i.subtotal,
            }
            for i in cart.items
        ],
        "item_count": cart.get_item_count(),
        "total": cart.calculate_total(),
    }


@router.get("/", response_model=CartOut)
async def get_cart(session: CartSynchronizer = Depends(get_cart_session)):
    return await cart_view(session)


@router.post("/items", response_model=CartOut)
async def add_item(
    payload: ItemIn,
    session: CartSynchronizer = Depends(get_cart_session),
    catalog: CatalogService = Depends(get_catalog_service),
):
    product = await catalog.get_product_by_id(payload.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    if not await session.add_to_cart(product):
        raise HTTPException(status_code=400, detail="Product could not be added to cart")
    return await cart_view(session)


@router.put("/items/{product_id}", response_model=CartOut)
async def update_item(
    product_id: int,
    payload: QuantityIn,
    session: CartSynchronizer = Depends(get_cart_session),
):
    if not await session.update_quantity(product_id, payload.quantity):
        raise HTTPException(status_code=404, detail="Product not in cart")
    return await cart_view(session)


@router.delete("/items/{product_id}", response_model=CartOut)
async def remove_item(product_id: int, session: CartSynchronizer = Depends(get_cart_session)):
    if not await session.remove_from_cart(product_id):
        raise HTTPException(status_code=404, detail="Product not in cart")
    return await cart_view(session)


@router.delete("/", response_model=CartOut)
async def clear_cart(session: CartSynchronizer = Depends(get_cart_session)):
    if not await session.clear_cart():
        raise HTTPException(status_code=400, detail="Cart could not be cleared")
    return await cart_view(session)

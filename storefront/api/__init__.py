# storefront/api/__init__.py
from fastapi import APIRouter

from storefront.api.routers import auth, carts, health, products, users

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(products.router)
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(carts.router)

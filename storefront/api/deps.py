# storefront/api/deps.py
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from storefront.data.database import SessionLocal, get_db
from storefront.data.stores import SqlCartStore, SqlCatalogStore
from storefront.services.auth_service import AuthService, TokenAuthProvider
from storefront.services.cart_mirror import RedisCartMirror
from storefront.services.cart_sync import CartSessionRegistry, CartSynchronizer
from storefront.services.catalog_service import CatalogService
from storefront.services.user_service import UserService

bearer = HTTPBearer(auto_error=False)

_catalog_store = SqlCatalogStore(SessionLocal)
_registry: CartSessionRegistry | None = None


def get_catalog_service() -> CatalogService:
    return CatalogService(_catalog_store)


def get_cart_sessions() -> CartSessionRegistry:
    #leniwie, zeby import nie laczyl sie z Redisem
    global _registry
    if _registry is None:
        _registry = CartSessionRegistry(
            cart_store=SqlCartStore(SessionLocal),
            catalog=_catalog_store,
            mirror=RedisCartMirror(),
        )
    return _registry


def get_auth_provider(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> TokenAuthProvider:
    return TokenAuthProvider(credentials.credentials if credentials else None)


async def get_cart_session(
    auth: TokenAuthProvider = Depends(get_auth_provider),
    sessions: CartSessionRegistry = Depends(get_cart_sessions),
) -> CartSynchronizer:
    return await sessions.session_for(auth)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_auth_service(users: UserService = Depends(get_user_service)) -> AuthService:
    return AuthService(users)

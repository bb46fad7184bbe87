# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException

from storefront.api.deps import get_auth_provider, get_auth_service, get_cart_sessions, get_user_service
from storefront.domain.schemas import RegisterIn, LoginIn, TokenOut
from storefront.services.auth_service import AuthService, TokenAuthProvider
from storefront.services.cart_sync import CartSessionRegistry
from storefront.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=201)
def register(payload: RegisterIn, users: UserService = Depends(get_user_service)):
    if not users.register(payload.username, payload.email, payload.password):
        raise HTTPException(status_code=400, detail="Registration failed")
    return {"registered": True}


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, auth: AuthService = Depends(get_auth_service)):
    token = auth.login(payload.username, payload.password)
    if not token:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    return TokenOut(access_token=token)


@router.post("/logout")
async def logout(
    auth: TokenAuthProvider = Depends(get_auth_provider),
    sessions: CartSessionRegistry = Depends(get_cart_sessions),
):
    username = await auth.get_current_identity()
    if username is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    sessions.end_session(username)
    return {"logged_out": True}

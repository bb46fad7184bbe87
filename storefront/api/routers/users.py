from fastapi import APIRouter, Depends, HTTPException

from storefront.api.deps import get_auth_provider, get_user_service
from storefront.domain.schemas import UserRead
from storefront.services.auth_service import TokenAuthProvider
from storefront.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])

@router.get("/me", response_model=UserRead)
async def get_me(
    auth: TokenAuthProvider = Depends(get_auth_provider),
    users: UserService = Depends(get_user_service),
):
    username = await auth.get_current_identity()
    if username is None:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = users.get_user(username)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user

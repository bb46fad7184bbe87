# storefront/services/auth_service.py
from typing import Optional

from storefront.services.user_service import UserService
from storefront.utils.security import create_access_token, decode_access_token, sanitize_text
from storefront.utils.settings import GUEST_USER_ID
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class TokenAuthProvider:
    """AuthProvider oparty o token sesji wydany przy logowaniu."""

    def __init__(self, token: str | None):
        self.token = token

    async def get_current_identity(self) -> Optional[str]:
        if not self.token:
            return None
        identity = decode_access_token(self.token)
        if identity and identity.lower() == GUEST_USER_ID.lower():
            logger.warning("Token carries the reserved guest identity, ignored")
            return None
        return identity


class AuthService:
    def __init__(self, users: UserService):
        self.users = users

    def login(self, username: str, password: str) -> Optional[str]:
        """Zwraca token sesji albo None."""
        username = sanitize_text(username)

        if not self.users.validate_user(username, password):
            logger.info(f"Failed login for {username}")
            return None

        logger.info(f"User {username} logged in")
        return create_access_token(username)

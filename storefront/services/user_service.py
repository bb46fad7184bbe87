from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.entities import User
from storefront.repos.user_repo import UserRepo
from storefront.utils.security import get_password_hash, verify_password, sanitize_text
from storefront.utils.settings import GUEST_USER_ID
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def user_from_model(model: UserModel) -> User:
    return User(
        user_id=model.id,
        username=model.username,
        email=model.email,
        password_hash=model.password_hash,
        created_at=model.created_at,
        is_active=model.is_active,
    )


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, username: str, email: str, password: str) -> bool:
        """Rejestracja. False dla niepoprawnych danych albo zajetego username/email."""
        user = User(username=sanitize_text(username), email=sanitize_text(email))

        if not user.is_valid() or not password or not password.strip():
            logger.info("Registration rejected: invalid input")
            return False

        # limity kolumn sprawdzane po kodowaniu HTML
        if (
            len(user.username) > UserModel.__table__.c.username.type.length
            or len(user.email) > UserModel.__table__.c.email.type.length
        ):
            logger.info("Registration rejected: username or email too long")
            return False

        if user.username.lower() == GUEST_USER_ID.lower():
            logger.info(f"Registration rejected: {user.username} is reserved")
            return False

        if self.repo.get_by_username(user.username) or self.repo.get_by_email(user.email):
            logger.info(f"Registration rejected: {user.username} already exists")
            return False

        try:
            self.repo.create_user(
                UserModel(
                    username=user.username,
                    email=user.email,
                    password_hash=get_password_hash(password),
                    is_active=True,
                )
            )
        except SQLAlchemyError as e:
            logger.error(f"Error creating user {user.username}: {e}")
            self.repo.db.rollback()
            return False

        logger.info(f"User {user.username} registered")
        return True

    def get_user(self, username: str) -> User | None:
        model = self.repo.get_by_username(username)
        return user_from_model(model) if model else None

    def validate_user(self, username: str, password: str) -> bool:
        user = self.get_user(username)
        if user is None or not user.is_active:
            return False
        return verify_password(password, user.password_hash)

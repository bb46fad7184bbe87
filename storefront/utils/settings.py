# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CART_MIRROR_TTL_SECONDS = int(os.getenv("CART_MIRROR_TTL_SECONDS", 7 * 24 * 60 * 60))

SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 24 * 60))
CART_SESSION_IDLE_SECONDS = int(os.getenv("CART_SESSION_IDLE_SECONDS", ACCESS_TOKEN_EXPIRE_MINUTES * 60))

GUEST_USER_ID = os.getenv("GUEST_USER_ID", "guest")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SEED_SAMPLE_PRODUCTS = os.getenv("SEED_SAMPLE_PRODUCTS", "true").lower() == "true"

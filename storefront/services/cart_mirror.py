# storefront/services/cart_mirror.py
import json
from typing import List, Optional

import redis.asyncio as redis

from storefront.domain.entities import CartItem
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, CART_MIRROR_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def mirror_key(user_id: str) -> str:
    return f"cart_{user_id}"


def dump_items(items: List[CartItem]) -> str:
    return json.dumps([item.to_dict() for item in items])


def load_items(raw: str) -> List[CartItem]:
    """Rzuca ValueError/KeyError/TypeError dla uszkodzonych danych."""
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError("Mirrored cart must be a list")
    return [CartItem.from_dict(entry) for entry in data]


class RedisCartMirror:
    """
    Lustro koszyka w Redis (klucz cart_<user_id>, JSON, TTL).
    Zapis zawsze nadpisuje cala liste.
    """

    def __init__(self, url: str | None = None, ttl: int = CART_MIRROR_TTL_SECONDS):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl

    @redis_retry()
    async def get(self, key: str) -> Optional[List[CartItem]]:
        raw = await self.redis.get(key)
        if raw is None:
            return None
        return load_items(raw)

    @redis_retry()
    async def set(self, key: str, items: List[CartItem]) -> None:
        logger.debug(f"Mirror SET {key} ({len(items)} items)")
        await self.redis.set(key, dump_items(items), ex=self.ttl)

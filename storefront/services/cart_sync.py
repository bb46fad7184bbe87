# storefront/services/cart_sync.py
import asyncio
import time
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Tuple

from storefront.domain.contracts import AuthProvider, CartStore, CatalogStore, ClientMirror
from storefront.domain.entities import Product
from storefront.services.cart_engine import CartEngine
from storefront.services.cart_mirror import mirror_key
from storefront.utils.settings import CART_SESSION_IDLE_SECONDS, GUEST_USER_ID
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CartObserver = Callable[[], None]


class CartSynchronizer:
    """
    Sesja koszyka: wiaze CartEngine z tozsamoscia i uzgadnia stan
    z bazy ze snapshotem w lustrze.

    Inicjalizacja (raz, przy pierwszym dostepie):
    1. tozsamosc z AuthProvider, brak -> "guest"
    2. CartEngine + load_from_store()
    3. replay lustra: kazdy produkt pobrany ponownie z katalogu,
       add_product() tyle razy ile wynosi quantity

    Kazda mutacja: silnik -> pelny zapis lustra -> powiadomienie obserwatorow.
    """

    def __init__(
        self,
        cart_store: CartStore,
        catalog: CatalogStore,
        mirror: ClientMirror,
        auth_provider: AuthProvider,
    ):
        self.cart_store = cart_store
        self.catalog = catalog
        self.mirror = mirror
        self.auth_provider = auth_provider

        self._cart: Optional[CartEngine] = None
        self._user_id: Optional[str] = None
        self._observers: List[CartObserver] = []
        self._lock = asyncio.Lock()

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    @property
    def is_ready(self) -> bool:
        return self._cart is not None

    #observers
    def subscribe(self, observer: CartObserver) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: CartObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self) -> None:
        for observer in list(self._observers):
            try:
                observer()
            except Exception as e:
                logger.error(f"Cart observer {observer!r} failed: {e}")

    #inicjalizacja
    async def _ensure_cart(self) -> CartEngine:
        if self._cart is None:
            await self._initialize()
        return self._cart

    async def _initialize(self) -> None:
        identity = await self.auth_provider.get_current_identity()
        self._user_id = identity or GUEST_USER_ID

        cart = CartEngine(self.cart_store, self._user_id)
        await cart.load_from_store()
        logger.info(f"Loaded cart of {self._user_id} from store ({cart.get_item_count()} items)")

        await self._replay_mirror(cart)
        self._cart = cart

    async def _replay_mirror(self, cart: CartEngine) -> None:
        try:
            mirrored = await self.mirror.get(mirror_key(self._user_id))
            if not mirrored:
                return

            for item in mirrored:
                # dane z lustra moga byc nieaktualne albo podmienione
                product = await self.catalog.get_product_by_id(item.product_id)
                if product is None:
                    logger.info(f"Mirrored product {item.product_id} no longer exists, dropped")
                    continue

                for _ in range(item.quantity):
                    await cart.add_product(product)
        except Exception as e:
            logger.error(f"Error loading mirrored cart of {self._user_id}: {e}")

    async def _save_mirror(self) -> None:
        try:
            await self.mirror.set(mirror_key(self._user_id), list(self._cart.items))
        except Exception as e:
            logger.error(f"Error saving mirrored cart of {self._user_id}: {e}")

    async def _after_mutation(self) -> None:
        await self._save_mirror()
        self._notify()

    #query
    async def get_cart(self) -> CartEngine:
        async with self._lock:
            return await self._ensure_cart()

    async def get_cart_item_count(self) -> int:
        cart = await self.get_cart()
        return cart.get_item_count()

    async def get_cart_total(self) -> Decimal:
        cart = await self.get_cart()
        return cart.calculate_total()

    #commands
    async def add_to_cart(self, product: Optional[Product]) -> bool:
        async with self._lock:
            cart = await self._ensure_cart()
            ok = await cart.add_product(product)
            await self._after_mutation()
            return ok

    async def remove_from_cart(self, product_id: int) -> bool:
        async with self._lock:
            cart = await self._ensure_cart()
            ok = await cart.remove_product(product_id)
            await self._after_mutation()
            return ok

    async def update_quantity(self, product_id: int, quantity: int) -> bool:
        async with self._lock:
            cart = await self._ensure_cart()
            ok = await cart.update_quantity(product_id, quantity)
            await self._after_mutation()
            return ok

    async def clear_cart(self) -> bool:
        async with self._lock:
            cart = await self._ensure_cart()
            ok = await cart.clear_cart()
            await self._after_mutation()
            return ok


class CartSessionRegistry:
    """
    Jedna sesja koszyka na tozsamosc w obrebie procesu.

    Sesje nieuzywane dluzej niz idle_ttl sekund sa usuwane przy kolejnym
    dostepie do rejestru, nastepne uzycie tozsamosci inicjalizuje je od nowa.
    """

    def __init__(
        self,
        cart_store: CartStore,
        catalog: CatalogStore,
        mirror: ClientMirror,
        idle_ttl: float = CART_SESSION_IDLE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.cart_store = cart_store
        self.catalog = catalog
        self.mirror = mirror
        self.idle_ttl = idle_ttl
        self._clock = clock
        # user_id -> (sesja, ostatni dostep)
        self._sessions: Dict[str, Tuple[CartSynchronizer, float]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._sessions

    def _evict_idle(self, now: float) -> None:
        expired = [
            user_id
            for user_id, (_, last_seen) in self._sessions.items()
            if now - last_seen > self.idle_ttl
        ]
        for user_id in expired:
            del self._sessions[user_id]
        if expired:
            logger.info(f"Evicted {len(expired)} idle cart sessions")

    async def session_for(self, auth_provider: AuthProvider) -> CartSynchronizer:
        user_id = await auth_provider.get_current_identity() or GUEST_USER_ID
        now = self._clock()
        self._evict_idle(now)

        entry = self._sessions.get(user_id)
        session = entry[0] if entry else CartSynchronizer(
            self.cart_store, self.catalog, self.mirror, auth_provider
        )
        self._sessions[user_id] = (session, now)
        return session

    def end_session(self, user_id: str) -> bool:
        return self._sessions.pop(user_id, None) is not None

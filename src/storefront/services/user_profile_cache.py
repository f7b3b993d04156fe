"""Durable cache of the signed-in user's profile fields."""

import asyncio
import logging
from typing import Optional

from storefront.core.clock import Clock, SystemClock
from storefront.domain.models import UserCacheData
from storefront.domain.views import SmartLoadResult
from storefront.providers.remote_gateway import RemoteDataGateway
from storefront.repositories.protocols import KeyValueStore
from storefront.services.auth_state import AuthState

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DURATION_MS = 24 * 60 * 60 * 1000

NAME_KEY = "cached_user_name"
PHONE_KEY = "cached_user_phone"
EMAIL_KEY = "cached_user_email"
VERIFIED_KEY = "cached_user_verified"
TIMESTAMP_KEY = "cache_timestamp"

CACHE_KEYS: tuple[str, ...] = (NAME_KEY, PHONE_KEY, EMAIL_KEY, VERIFIED_KEY, TIMESTAMP_KEY)


class UserProfileCache:
    """
    Best-effort local copy of the user's name, phone, e-mail and verified flag.

    The five slots are always written and removed as one batch. Every method
    degrades to "no cached data" instead of raising: the profile cache is an
    optimisation the UI must never fail on.
    """

    def __init__(
        self,
        gateway: RemoteDataGateway,
        store: KeyValueStore,
        auth: Optional[AuthState] = None,
        clock: Optional[Clock] = None,
        cache_duration_ms: int = DEFAULT_CACHE_DURATION_MS,
    ):
        self._gateway = gateway
        self._store = store
        self._auth = auth or AuthState(store)
        self._clock = clock or SystemClock()
        self._cache_duration_ms = cache_duration_ms
        self._background: set[asyncio.Task[Optional[UserCacheData]]] = set()

    async def cache_user_data(self, user_data: Optional[UserCacheData]) -> None:
        """Write all fields and a new timestamp in a single batch."""
        data = user_data or UserCacheData()
        try:
            await self._store.multi_set(
                {
                    NAME_KEY: data.full_name or "",
                    PHONE_KEY: data.phone or "",
                    EMAIL_KEY: data.email or "",
                    VERIFIED_KEY: "true" if data.is_verified else "false",
                    TIMESTAMP_KEY: str(self._clock.now_ms()),
                }
            )
            logger.info("User data cached successfully")
        except Exception as exc:
            logger.error("Error caching user data: %s", exc)

    async def load_cached_user_data(self) -> Optional[UserCacheData]:
        """
        Return cached fields if the cache is fresh and holds something.

        A cache with empty name, phone and e-mail is not a hit.
        """
        try:
            values = await self._store.multi_get(CACHE_KEYS)
        except Exception as exc:
            logger.error("Error loading cached data: %s", exc)
            return None

        if not self._timestamp_is_fresh(values[TIMESTAMP_KEY]):
            logger.info("Cache is stale, will fetch fresh data")
            return None

        cached = UserCacheData(
            full_name=values[NAME_KEY] or "",
            phone=values[PHONE_KEY] or "",
            email=values[EMAIL_KEY] or "",
            is_verified=values[VERIFIED_KEY] == "true",
        )
        if not cached.has_content:
            return None

        logger.debug("Loaded cached user data: %s", cached.masked())
        return cached

    async def fetch_and_cache_user_data(self) -> Optional[UserCacheData]:
        """Fetch the profile from the backend and write it through to the cache."""
        try:
            credentials = await self._auth.credentials()
        except Exception as exc:
            logger.error("Error reading user credentials: %s", exc)
            return None
        if credentials is None:
            logger.warning("No user credentials found")
            return None

        user_id, token = credentials
        try:
            profile = await self._gateway.fetch_user_profile(user_id, token)
        except Exception as exc:
            logger.error("Error fetching user data: %s", exc)
            return None

        logger.info("Fresh user profile fetched")
        fresh = UserCacheData.from_profile(profile)
        await self.cache_user_data(fresh)
        return fresh

    async def smart_load_user_data(self) -> SmartLoadResult:
        """
        Return the cached profile now and start a background refresh.

        Must be called from a running event loop. The refresh runs to
        completion even if the caller drops the result.
        """
        cached = await self.load_cached_user_data()
        fresh = asyncio.get_running_loop().create_task(self.fetch_and_cache_user_data())
        self._background.add(fresh)
        fresh.add_done_callback(self._background.discard)
        return SmartLoadResult(cached=cached, fresh=fresh)

    async def clear_cache(self) -> None:
        """Remove every cached slot (used on logout)."""
        try:
            await self._store.multi_remove(CACHE_KEYS)
            logger.info("User cache cleared")
        except Exception as exc:
            logger.error("Error clearing cache: %s", exc)

    async def is_cache_valid(self) -> bool:
        """Return True if a fresh timestamp exists. Field content is not checked."""
        try:
            raw = await self._store.get_item(TIMESTAMP_KEY)
        except Exception:
            return False
        return self._timestamp_is_fresh(raw)

    def _timestamp_is_fresh(self, raw: Optional[str]) -> bool:
        if not raw:
            return False
        try:
            timestamp = int(raw)
        except ValueError:
            return False
        return self._clock.now_ms() - timestamp < self._cache_duration_ms

"""Home page data cache."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from storefront.core import storage_keys
from storefront.core.clock import Clock, SystemClock
from storefront.domain.models import CacheEntry, GeoPoint
from storefront.domain.views import SectionPage
from storefront.providers.remote_gateway import RemoteDataGateway, SearchQuery
from storefront.repositories.protocols import KeyValueStore
from storefront.schemas import Category, HomePageData

logger = logging.getLogger(__name__)

T = TypeVar("T")

HOME_PAGE_DATA_KEY = "homePageData"
CATEGORIES_KEY = "categories"

DEFAULT_CACHE_DURATION_MS = 5 * 60 * 1000
DEFAULT_SECTION_LIMIT = 6


class HomeDataCache:
    """
    Read-through, fail-open cache for home screen data.

    Wraps the gateway with an in-memory entry per resource:
    - a fresh entry is served without touching the network
    - a stale or missing entry is refetched
    - when the fetch fails, the last entry of any age is served, or an
      empty default when there has never been one

    None of the public methods raise.

    Entries are keyed by resource only. The home page request carries the
    device location, but a location change does not invalidate the entry.
    """

    def __init__(
        self,
        gateway: RemoteDataGateway,
        store: KeyValueStore,
        clock: Optional[Clock] = None,
        cache_duration_ms: int = DEFAULT_CACHE_DURATION_MS,
        section_limit: int = DEFAULT_SECTION_LIMIT,
    ):
        self._gateway = gateway
        self._store = store
        self._clock = clock or SystemClock()
        self._cache_duration_ms = cache_duration_ms
        self._section_limit = section_limit

        self._entries: dict[str, CacheEntry[Any]] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        # Request numbering per key; responses below the floor are not cached
        self._issued: dict[str, int] = {}
        self._floor: dict[str, int] = {}
        self._background: set[asyncio.Task[None]] = set()

    # Cached resources

    async def get_home_page_data(self) -> HomePageData:
        """
        Return home page data, from cache when fresh.

        Falls back to the last cached value (any age) or to the all-empty
        structure when the backend cannot be reached.
        """
        return await self._read_through(
            HOME_PAGE_DATA_KEY,
            self._fetch_home_page_data,
            HomePageData.empty,
        )

    async def get_categories(self) -> list[Category]:
        """Return categories, with the same policy as the home page data."""
        return await self._read_through(
            CATEGORIES_KEY,
            self._gateway.fetch_categories,
            list,
        )

    # Uncached listings

    async def get_more_section_items(
        self,
        subcategory_id: str,
        page: int = 1,
        limit: int = 10,
    ) -> SectionPage:
        """Fetch one more page of a section. Failure yields an empty final page."""
        try:
            result = await self._gateway.fetch_subcategory_products(subcategory_id, page, limit)
        except Exception as exc:
            logger.error("Section items fetch error for %s: %s", subcategory_id, exc)
            return SectionPage.empty()
        return SectionPage(items=list(result.items), has_more=result.pagination.has_more)

    async def search_products(
        self,
        query: str,
        *,
        category_id: Optional[str] = None,
        subcategory_id: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        page: int = 1,
        limit: int = 20,
    ) -> SectionPage:
        """Search products. Failure yields an empty final page."""
        search = SearchQuery(
            q=query,
            page=page,
            limit=limit,
            category_id=category_id,
            subcategory_id=subcategory_id,
            min_price=min_price,
            max_price=max_price,
        )
        try:
            result = await self._gateway.search_products(search)
        except Exception as exc:
            logger.error("Search error for %r: %s", query, exc)
            return SectionPage.empty()
        return SectionPage(items=list(result.items), has_more=result.pagination.has_more)

    # Cache management

    def get_entry(self, key: str) -> Optional[CacheEntry[Any]]:
        """Return the raw entry stored under key, regardless of age."""
        return self._entries.get(key)

    def clear_cache(self) -> None:
        """
        Drop every entry so the next read refetches.

        Responses to requests issued before the clear are not cached.
        """
        self._entries.clear()
        for key, issued in self._issued.items():
            self._floor[key] = issued + 1

    def preload_critical_data(self) -> "asyncio.Task[None]":
        """
        Warm the home page data and categories in the background.

        Must be called from a running event loop. Callers need not await the
        returned task; it never raises.
        """
        task = asyncio.get_running_loop().create_task(self._preload())
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    # Internals

    async def _preload(self) -> None:
        try:
            await asyncio.gather(self.get_home_page_data(), self.get_categories())
        except Exception:
            logger.info("Preload failed, will load on demand", exc_info=True)

    async def _read_through(
        self,
        key: str,
        fetch: Callable[[], Awaitable[T]],
        fallback: Callable[[], T],
    ) -> T:
        entry = self._fresh_entry(key)
        if entry is not None:
            return entry.data

        async with self._lock_for(key):
            # A concurrent caller may have refreshed the entry while we waited
            entry = self._fresh_entry(key)
            if entry is not None:
                return entry.data

            sequence = self._issue(key)
            try:
                data = await fetch()
            except Exception as exc:
                logger.error("Fetch of %s failed: %s", key, exc)
                stale = self._entries.get(key)
                if stale is not None:
                    logger.warning(
                        "Returning cached %s due to error (age %d ms)",
                        key,
                        stale.age_ms(self._clock.now_ms()),
                    )
                    return stale.data
                return fallback()

            self._store_entry(key, data, sequence)
            return data

    async def _fetch_home_page_data(self) -> HomePageData:
        location = await self._read_location()
        return await self._gateway.fetch_home_data(location, self._section_limit)

    async def _read_location(self) -> Optional[GeoPoint]:
        try:
            raw = await self._store.get_item(storage_keys.USER_LOCATION)
        except Exception as exc:
            logger.info("No saved location found: %s", exc)
            return None
        return GeoPoint.from_json(raw)

    def _fresh_entry(self, key: str) -> Optional[CacheEntry[Any]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not entry.is_fresh(self._clock.now_ms(), self._cache_duration_ms):
            return None
        return entry

    def _store_entry(self, key: str, data: Any, sequence: int) -> None:
        if sequence < self._floor.get(key, 0):
            logger.debug("Discarding %s response #%d issued before clear", key, sequence)
            return
        current = self._entries.get(key)
        if current is not None and current.sequence > sequence:
            logger.debug("Discarding out-of-order %s response #%d", key, sequence)
            return
        self._entries[key] = CacheEntry(
            data=data,
            timestamp=self._clock.now_ms(),
            sequence=sequence,
        )

    def _issue(self, key: str) -> int:
        sequence = self._issued.get(key, 0) + 1
        self._issued[key] = sequence
        return sequence

    def _lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

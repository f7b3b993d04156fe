"""
Unit tests for HomeDataCache.

Tests cover:
- Fresh cache hits without calling the gateway
- Refetch after the cache window
- Fallback to stale data, then to empty data, on gateway failure
- Location parameters read from the store
- Uncached section paging and search
- Clearing, preloading and concurrent misses
"""

import asyncio

import pytest

from storefront.domain.models import GeoPoint
from storefront.schemas import SECTION_NAMES, HomePageData, Pagination, ProductPage
from storefront.services import HomeDataCache
from storefront.services.home_data_cache import CATEGORIES_KEY, HOME_PAGE_DATA_KEY

from tests.conftest import (
    FIVE_MINUTES_MS,
    FIXED_NOW_MS,
    FakeGateway,
    make_home_data,
    make_product,
)


# =============================================================================
# FRESHNESS
# =============================================================================


class TestCacheFreshness:
    """Tests for serving fresh entries."""

    async def test_first_call_fetches_and_caches(self, home_cache, gateway):
        """
        GIVEN an empty cache
        WHEN I call get_home_page_data
        THEN the gateway is called once and the entry is stored with the current time
        """
        data = await home_cache.get_home_page_data()

        assert data is gateway.home_data
        assert gateway.count("fetch_home_data") == 1
        entry = home_cache.get_entry(HOME_PAGE_DATA_KEY)
        assert entry is not None
        assert entry.timestamp == FIXED_NOW_MS

    @pytest.mark.parametrize("elapsed_ms", [0, 1, 60_000, FIVE_MINUTES_MS - 1])
    async def test_within_window_returns_identical_object(
        self, home_cache, gateway, clock, elapsed_ms
    ):
        """
        GIVEN a successful fetch at t0
        WHEN I call again at t0 + t with t < 5 minutes
        THEN the same object is returned and the gateway is not called again
        """
        first = await home_cache.get_home_page_data()
        gateway.home_data = make_home_data("v2")
        clock.advance(elapsed_ms)

        second = await home_cache.get_home_page_data()

        assert second is first
        assert gateway.count("fetch_home_data") == 1

    async def test_at_window_boundary_refetches(self, home_cache, gateway, clock):
        """
        GIVEN a successful fetch at t0
        WHEN exactly 5 minutes have passed
        THEN the data is refetched
        """
        await home_cache.get_home_page_data()
        fresh_payload = make_home_data("v2")
        gateway.home_data = fresh_payload
        clock.advance(FIVE_MINUTES_MS)

        data = await home_cache.get_home_page_data()

        assert data is fresh_payload
        assert gateway.count("fetch_home_data") == 2
        assert home_cache.get_entry(HOME_PAGE_DATA_KEY).timestamp == FIXED_NOW_MS + FIVE_MINUTES_MS

    async def test_refetch_replaces_entry_wholesale(self, home_cache, gateway, clock):
        """
        GIVEN a cached entry
        WHEN a refetch succeeds
        THEN a new entry object replaces the old one
        """
        await home_cache.get_home_page_data()
        old_entry = home_cache.get_entry(HOME_PAGE_DATA_KEY)
        clock.advance(FIVE_MINUTES_MS + 1)

        await home_cache.get_home_page_data()

        new_entry = home_cache.get_entry(HOME_PAGE_DATA_KEY)
        assert new_entry is not old_entry
        assert old_entry.timestamp == FIXED_NOW_MS

    async def test_custom_cache_duration(self, gateway, store, clock):
        """
        GIVEN a cache with a 1 second window
        WHEN 1 second passes
        THEN the data is refetched
        """
        cache = HomeDataCache(gateway=gateway, store=store, clock=clock, cache_duration_ms=1000)

        await cache.get_home_page_data()
        clock.advance(1000)
        await cache.get_home_page_data()

        assert gateway.count("fetch_home_data") == 2


# =============================================================================
# FAIL-OPEN FALLBACK
# =============================================================================


class TestGracefulDegradation:
    """Tests for stale and empty fallbacks."""

    async def test_stale_entry_returned_on_failure(self, home_cache, gateway, clock):
        """
        GIVEN a cached entry older than the window
        AND the gateway is now failing
        WHEN I call get_home_page_data
        THEN exactly the prior data is returned
        """
        prior = await home_cache.get_home_page_data()
        clock.advance(FIVE_MINUTES_MS * 10)
        gateway.fail = True

        data = await home_cache.get_home_page_data()

        assert data is prior
        assert data == make_home_data()
        assert gateway.count("fetch_home_data") == 2

    async def test_stale_entry_kept_after_failure(self, home_cache, gateway, clock):
        """
        GIVEN a failed refetch served stale data
        WHEN the gateway recovers
        THEN the next call fetches again and stores the new data
        """
        await home_cache.get_home_page_data()
        clock.advance(FIVE_MINUTES_MS)
        gateway.fail = True
        await home_cache.get_home_page_data()

        gateway.fail = False
        recovered = make_home_data("v2")
        gateway.home_data = recovered
        data = await home_cache.get_home_page_data()

        assert data is recovered

    async def test_cold_failure_returns_empty_structure(self, home_cache, gateway):
        """
        GIVEN no cached entry
        AND the gateway is failing
        WHEN I call get_home_page_data
        THEN every list and section is empty and nothing is raised
        """
        gateway.fail = True

        data = await home_cache.get_home_page_data()

        assert data == HomePageData.empty()
        assert data.categories == []
        assert data.nearby_restaurants == []
        assert data.nearby_shops == []
        assert data.advertisements == []
        assert set(SECTION_NAMES) <= set(data.sections)
        assert all(items == [] for items in data.sections.values())
        assert home_cache.get_entry(HOME_PAGE_DATA_KEY) is None

    async def test_unexpected_exception_is_absorbed(self, store, clock):
        """
        GIVEN a gateway raising a non-gateway exception
        WHEN I call get_categories
        THEN an empty list is returned
        """

        class BrokenGateway(FakeGateway):
            async def fetch_categories(self):
                raise RuntimeError("boom")

        cache = HomeDataCache(gateway=BrokenGateway(), store=store, clock=clock)

        assert await cache.get_categories() == []


# =============================================================================
# CATEGORIES
# =============================================================================


class TestCategories:
    """Tests for the independent categories entry."""

    async def test_categories_cached_under_own_key(self, home_cache, gateway):
        categories = await home_cache.get_categories()
        again = await home_cache.get_categories()

        assert again is categories
        assert gateway.count("fetch_categories") == 1
        assert home_cache.get_entry(CATEGORIES_KEY) is not None
        assert home_cache.get_entry(HOME_PAGE_DATA_KEY) is None

    async def test_categories_stale_fallback(self, home_cache, gateway, clock):
        prior = await home_cache.get_categories()
        clock.advance(FIVE_MINUTES_MS + 1)
        gateway.fail = True

        assert await home_cache.get_categories() is prior

    async def test_categories_cold_failure_returns_empty_list(self, home_cache, gateway):
        gateway.fail = True

        assert await home_cache.get_categories() == []


# =============================================================================
# LOCATION
# =============================================================================


class TestLocationParameters:
    """Tests for the location and limit sent with the home request."""

    async def test_saved_location_is_sent(self, home_cache, gateway, store):
        """
        GIVEN a saved device location
        WHEN home data is fetched
        THEN the location and the per-section limit are passed to the gateway
        """
        await store.set_item("userLocation", GeoPoint(lat=13.4549, lng=-16.5790).to_json())

        await home_cache.get_home_page_data()

        _, location, limit = gateway.calls[0]
        assert location == GeoPoint(lat=13.4549, lng=-16.5790)
        assert limit == 6

    async def test_missing_location_is_omitted(self, home_cache, gateway):
        await home_cache.get_home_page_data()

        _, location, _ = gateway.calls[0]
        assert location is None

    async def test_corrupt_location_is_omitted(self, home_cache, gateway, store):
        await store.set_item("userLocation", "not json")

        await home_cache.get_home_page_data()

        _, location, _ = gateway.calls[0]
        assert location is None

    async def test_store_failure_does_not_block_fetch(self, gateway, failing_store, clock):
        cache = HomeDataCache(gateway=gateway, store=failing_store, clock=clock)

        data = await cache.get_home_page_data()

        assert data is gateway.home_data
        _, location, _ = gateway.calls[0]
        assert location is None

    async def test_location_change_does_not_invalidate(self, home_cache, gateway, store):
        """
        GIVEN cached home data
        WHEN the saved location changes within the window
        THEN the cached data is still served
        """
        await home_cache.get_home_page_data()
        await store.set_item("userLocation", GeoPoint(lat=13.0, lng=-16.0).to_json())

        await home_cache.get_home_page_data()

        assert gateway.count("fetch_home_data") == 1


# =============================================================================
# SECTION PAGING AND SEARCH
# =============================================================================


class TestSectionItems:
    """Tests for uncached section paging."""

    @pytest.mark.parametrize(
        ("page", "total_pages", "has_more"),
        [(2, 5, True), (5, 5, False), (1, 1, False), (1, 2, True)],
    )
    async def test_has_more_from_pagination(self, home_cache, gateway, page, total_pages, has_more):
        """
        GIVEN the server reports page/totalPages
        WHEN I fetch more section items
        THEN has_more is page < totalPages
        """
        gateway.pages["sub-1"] = ProductPage(
            items=[make_product("a")],
            pagination=Pagination(page=page, total_pages=total_pages),
        )

        result = await home_cache.get_more_section_items("sub-1", page)

        assert result.has_more is has_more
        assert [p.id for p in result.items] == ["a"]

    async def test_default_page_and_limit(self, home_cache, gateway):
        await home_cache.get_more_section_items("sub-1")

        assert gateway.calls[0] == ("fetch_subcategory_products", "sub-1", 1, 10)

    async def test_never_cached(self, home_cache, gateway):
        await home_cache.get_more_section_items("sub-1", 1)
        await home_cache.get_more_section_items("sub-1", 1)

        assert gateway.count("fetch_subcategory_products") == 2

    async def test_failure_returns_empty_final_page(self, home_cache, gateway):
        gateway.fail = True

        result = await home_cache.get_more_section_items("sub-1", 2)

        assert result.items == []
        assert result.has_more is False


class TestSearch:
    """Tests for product search."""

    async def test_search_passes_filters(self, home_cache, gateway):
        gateway.pages["search:rice"] = ProductPage(
            items=[make_product("rice-25kg", 1500)],
            pagination=Pagination(page=1, total_pages=3),
        )

        result = await home_cache.search_products("rice", category_id="cat-food", max_price=2000)

        query = gateway.calls[0][1]
        assert query.to_params() == {
            "q": "rice",
            "page": "1",
            "limit": "20",
            "categoryId": "cat-food",
            "maxPrice": "2000",
        }
        assert result.has_more is True
        assert result.items[0].id == "rice-25kg"

    async def test_search_failure_returns_empty(self, home_cache, gateway):
        gateway.fail = True

        result = await home_cache.search_products("rice")

        assert result.items == []
        assert result.has_more is False


# =============================================================================
# CLEAR, PRELOAD, CONCURRENCY
# =============================================================================


class TestCacheManagement:
    """Tests for clearing and preloading."""

    async def test_clear_forces_refetch(self, home_cache, gateway):
        """
        GIVEN fresh cached entries
        WHEN I clear the cache
        THEN the next reads go to the gateway
        """
        await home_cache.get_home_page_data()
        await home_cache.get_categories()

        home_cache.clear_cache()
        await home_cache.get_home_page_data()
        await home_cache.get_categories()

        assert gateway.count("fetch_home_data") == 2
        assert gateway.count("fetch_categories") == 2

    async def test_clear_then_failure_returns_empty(self, home_cache, gateway):
        await home_cache.get_home_page_data()
        home_cache.clear_cache()
        gateway.fail = True

        assert await home_cache.get_home_page_data() == HomePageData.empty()

    async def test_preload_warms_both_entries(self, home_cache, gateway):
        task = home_cache.preload_critical_data()
        await task

        assert home_cache.get_entry(HOME_PAGE_DATA_KEY) is not None
        assert home_cache.get_entry(CATEGORIES_KEY) is not None

    async def test_preload_swallows_failures(self, home_cache, gateway):
        gateway.fail = True

        task = home_cache.preload_critical_data()
        await task

        assert task.exception() is None


class TestConcurrency:
    """Tests for concurrent misses and superseded responses."""

    async def test_concurrent_misses_share_one_fetch(self, home_cache, gateway):
        """
        GIVEN an empty cache and a slow gateway
        WHEN three callers ask for home data at once
        THEN only one request is made and all callers get the same data
        """
        gateway.gate = asyncio.Event()

        callers = [asyncio.create_task(home_cache.get_home_page_data()) for _ in range(3)]
        await asyncio.sleep(0)
        gateway.gate.set()
        results = await asyncio.gather(*callers)

        assert gateway.count("fetch_home_data") == 1
        assert all(result is results[0] for result in results)

    async def test_response_issued_before_clear_is_not_cached(self, home_cache, gateway):
        """
        GIVEN a fetch is in flight
        WHEN the cache is cleared before it completes
        THEN its response is returned to its caller but not stored
        """
        gateway.gate = asyncio.Event()
        in_flight = asyncio.create_task(home_cache.get_home_page_data())
        await asyncio.sleep(0)

        home_cache.clear_cache()
        gateway.gate.set()
        data = await in_flight

        assert data is gateway.home_data
        assert home_cache.get_entry(HOME_PAGE_DATA_KEY) is None

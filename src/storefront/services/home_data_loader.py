"""Home screen loading state on top of the home data cache."""

import asyncio
import logging
from typing import Optional

from storefront.core import storage_keys
from storefront.domain.views import HomeScreenState, SectionPage
from storefront.repositories.protocols import KeyValueStore
from storefront.services.home_data_cache import HomeDataCache

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load content. Please try again."

# Backend subcategory behind each home page section
SECTION_SUBCATEGORY_IDS: dict[str, str] = {
    "localDishes": "557e0c1d-4e5f-4c3e-8477-987e5ab07d73",
    "fastFood": "092780fb-8b37-4675-9e49-f4e7a99376a7",
    "beverages": "e5c6f708-f820-4c13-8691-e989ca8720e4",
    "riceGrains": "cca76ff8-bc4e-4544-acc1-872c119943a5",
    "oilsSpices": "6ac60d93-a199-4cc0-a85d-3636dc0c4508",
    "medicines": "f41dd4c6-b7df-4df2-8190-36a02a152006",
    "personalCare": "91769bbc-c354-4b97-ae8f-3b8b27727d57",
    "cleaningSupplies": "b8f9cf07-7875-492d-8269-8ea393515ebe",
    "homeUtilities": "4a72494c-3929-461b-ae0a-1f5f6e4be0fb",
    "toiletries": "d2633442-5433-4001-8611-3ec49c881482",
    "cannedPackaged": "da6110fb-5229-4448-b835-f298d677b764",
    "babyProducts": "f7f6a7aa-d232-4f73-840b-546e2e68db58",
}

# Section names used by older screens
SECTION_ALIASES: dict[str, str] = {
    "snackingCorner": "fastFood",
    "greatForBreakfast": "cannedPackaged",
    "traditionalMeals": "localDishes",
    "localBeverages": "beverages",
    "freshFromFarm": "riceGrains",
    "gadgetTechZone": "homeUtilities",
}


def resolve_section(section_name: str) -> Optional[str]:
    """Return the canonical section name, or None if unknown."""
    canonical = SECTION_ALIASES.get(section_name, section_name)
    return canonical if canonical in SECTION_SUBCATEGORY_IDS else None


class HomeDataLoader:
    """
    Drives the home screen: initial load, pull-to-refresh, and
    "load more" for individual sections.

    The UI reads ``state`` after each call.
    """

    def __init__(self, cache: HomeDataCache, store: KeyValueStore):
        self._cache = cache
        self._store = store
        self.state = HomeScreenState()

    async def load(self, is_refresh: bool = False) -> HomeScreenState:
        """Load home data; a refresh drops the cache first."""
        if is_refresh:
            self.state.refreshing = True
            self._cache.clear_cache()
        else:
            self.state.loading = True
        self.state.error = None

        try:
            self.state.data = await self._cache.get_home_page_data()
        except Exception:
            logger.exception("Failed to load home data")
            self.state.error = LOAD_ERROR_MESSAGE
        finally:
            self.state.loading = False
            self.state.refreshing = False
        return self.state

    async def refresh(self) -> HomeScreenState:
        return await self.load(is_refresh=True)

    async def load_more_section(self, section_name: str, page: int) -> SectionPage:
        """
        Fetch another page of a section and append it to the loaded data.

        Unknown section names are ignored. The cached entry is left as is;
        only ``state.data`` grows.
        """
        section = resolve_section(section_name)
        if section is None:
            logger.debug("No subcategory for section %s", section_name)
            return SectionPage.empty()

        result = await self._cache.get_more_section_items(
            SECTION_SUBCATEGORY_IDS[section], page
        )
        if self.state.data is not None and result.items:
            self.state.data = self.state.data.with_section_items(section, result.items)
        return result

    async def preload_on_first_launch(self) -> Optional["asyncio.Task[None]"]:
        """On the first launch only, warm the cache in the background."""
        try:
            if await self._store.get_item(storage_keys.HAS_LAUNCHED):
                return None
            await self._store.set_item(storage_keys.HAS_LAUNCHED, "true")
        except Exception as exc:
            logger.warning("Could not read launch flag: %s", exc)
            return None
        return self._cache.preload_critical_data()

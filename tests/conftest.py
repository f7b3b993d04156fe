"""
Pytest configuration and fixtures for storefront client tests.

This module provides:
- A manually driven clock
- In-memory, failing and SQLite key/value stores
- A scriptable fake backend gateway
- A recording cart prompter
- Service fixtures and factory helpers
"""

import asyncio
from decimal import Decimal
from typing import Callable, Iterable, Mapping, Optional

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from storefront.config.settings import reset_settings
from storefront.core.clock import FixedClock
from storefront.core.exceptions import GatewayError, StorageError
from storefront.domain.models import CartItem, GeoPoint
from storefront.providers.remote_gateway import SearchQuery
from storefront.repositories.memory import InMemoryKeyValueStore
from storefront.repositories.sqlalchemy import Base, SqlAlchemyKeyValueStore
# Import ORM models to register them with Base before creating tables
from storefront.repositories.sqlalchemy import orm_models  # noqa: F401
from storefront.schemas import (
    Category,
    HomePageData,
    Pagination,
    Product,
    ProductPage,
    UserProfile,
)
from storefront.services import (
    AuthState,
    CartAggregate,
    HomeDataCache,
    HomeDataLoader,
    UserProfileCache,
)


# =============================================================================
# TIME HELPERS
# =============================================================================

# 2024-06-15 14:30:00 UTC
FIXED_NOW_MS = 1_718_461_800_000

FIVE_MINUTES_MS = 5 * 60 * 1000
ONE_DAY_MS = 24 * 60 * 60 * 1000


@pytest.fixture
def clock() -> FixedClock:
    """Clock frozen at a fixed instant; tests advance it explicitly."""
    return FixedClock(start_ms=FIXED_NOW_MS)


@pytest.fixture(autouse=True)
def clean_settings():
    """Reset global settings around every test."""
    reset_settings()
    yield
    reset_settings()


# =============================================================================
# SAMPLE DATA
# =============================================================================


def make_home_data(tag: str = "v1") -> HomePageData:
    """Build a small home payload; ``tag`` makes payloads distinguishable."""
    return HomePageData.model_validate(
        {
            "categories": [
                {"id": "cat-food", "name": "Food & Beverages", "icon": "restaurant", "color": "#F97316"},
            ],
            "nearbyRestaurants": [
                {
                    "id": "rest-1",
                    "name": f"Benachin House {tag}",
                    "rating": 4.5,
                    "deliveryTime": "25-35 min",
                    "address": "Kairaba Avenue, Serrekunda",
                    "distance": 1.2,
                },
            ],
            "nearbyShops": [
                {
                    "id": "shop-1",
                    "name": "Westfield Mini Market",
                    "rating": 4.1,
                    "deliveryTime": "20-30 min",
                    "address": "Westfield Junction",
                },
            ],
            "sections": {
                "localDishes": [
                    {"id": "prod-domoda", "name": "Domoda", "price": 250},
                ],
            },
            "advertisements": [
                {"id": "ad-late", "title": "Free delivery", "image": "ad2.png", "priority": 2},
                {"id": "ad-first", "title": "Tobaski deals", "image": "ad1.png", "priority": 1},
            ],
        }
    )


def make_categories() -> list[Category]:
    return [
        Category(id="cat-food", name="Food & Beverages", icon="restaurant", color="#F97316"),
        Category(id="cat-pharmacy", name="Pharmacy", icon="medical", color="#EF4444"),
    ]


def make_product(product_id: str, price: float = 100.0) -> Product:
    return Product(id=product_id, name=f"Product {product_id}", price=price)


# =============================================================================
# FAKE GATEWAY
# =============================================================================


class FakeGateway:
    """
    Scriptable in-process backend.

    Set ``fail`` to make every call raise GatewayError, or ``gate`` to hold
    calls until the event is set. Every call is recorded in ``calls``.
    """

    def __init__(self):
        self.home_data: HomePageData = make_home_data()
        self.categories: list[Category] = make_categories()
        self.pages: dict[str, ProductPage] = {}
        self.profile = UserProfile(
            id="user-1",
            full_name="Awa Jallow",
            phone="+2207001234",
            email="awa@example.gm",
            is_verified=True,
        )
        self.fail = False
        self.gate: Optional[asyncio.Event] = None
        self.calls: list[tuple] = []

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)

    async def _enter(self, *call: object) -> None:
        self.calls.append(call)
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise GatewayError("Network unavailable")

    async def fetch_home_data(self, location: Optional[GeoPoint], limit: int) -> HomePageData:
        await self._enter("fetch_home_data", location, limit)
        return self.home_data

    async def fetch_categories(self) -> list[Category]:
        await self._enter("fetch_categories")
        return self.categories

    async def fetch_subcategory_products(
        self, subcategory_id: str, page: int, limit: int
    ) -> ProductPage:
        await self._enter("fetch_subcategory_products", subcategory_id, page, limit)
        return self.pages.get(
            subcategory_id,
            ProductPage(items=[], pagination=Pagination(page=page, total_pages=page)),
        )

    async def search_products(self, query: SearchQuery) -> ProductPage:
        await self._enter("search_products", query)
        return self.pages.get(
            f"search:{query.q}",
            ProductPage(items=[], pagination=Pagination(page=query.page, total_pages=query.page)),
        )

    async def fetch_user_profile(self, user_id: str, token: str) -> UserProfile:
        await self._enter("fetch_user_profile", user_id, token)
        return self.profile


@pytest.fixture
def gateway() -> FakeGateway:
    """Provide a fake backend gateway."""
    return FakeGateway()


# =============================================================================
# STORES
# =============================================================================


class FailingKeyValueStore:
    """Store whose every operation raises StorageError."""

    async def get_item(self, key: str) -> Optional[str]:
        raise StorageError("Disk unavailable")

    async def set_item(self, key: str, value: str) -> None:
        raise StorageError("Disk unavailable")

    async def remove_item(self, key: str) -> None:
        raise StorageError("Disk unavailable")

    async def multi_get(self, keys: Iterable[str]) -> dict[str, Optional[str]]:
        raise StorageError("Disk unavailable")

    async def multi_set(self, items: Mapping[str, str]) -> None:
        raise StorageError("Disk unavailable")

    async def multi_remove(self, keys: Iterable[str]) -> None:
        raise StorageError("Disk unavailable")


SIGNED_IN = {"isLoggedIn": "true", "token": "tok-123", "userId": "user-1"}


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    """Provide an empty in-memory store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def signed_in_store() -> InMemoryKeyValueStore:
    """Provide a store holding credentials for a signed-in user."""
    return InMemoryKeyValueStore(SIGNED_IN)


@pytest.fixture
def failing_store() -> FailingKeyValueStore:
    return FailingKeyValueStore()


@pytest.fixture
async def sqlite_store(tmp_path):
    """Provide a SQLite-backed store in a temporary directory."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'kv.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield SqlAlchemyKeyValueStore(session_factory)
    await engine.dispose()


# =============================================================================
# PROMPTER
# =============================================================================


class RecordingPrompter:
    """Cart prompter that answers confirmations with ``answer``."""

    def __init__(self, answer: bool = True):
        self.answer = answer
        self.gate: Optional[asyncio.Event] = None
        self.confirmations: list[tuple[str, str]] = []
        self.login_prompts = 0

    async def confirm(self, title: str, message: str) -> bool:
        self.confirmations.append((title, message))
        if self.gate is not None:
            await self.gate.wait()
        return self.answer

    async def prompt_login(self) -> None:
        self.login_prompts += 1


@pytest.fixture
def prompter() -> RecordingPrompter:
    return RecordingPrompter()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def home_cache(gateway, store, clock) -> HomeDataCache:
    """Provide a HomeDataCache over the fake gateway."""
    return HomeDataCache(gateway=gateway, store=store, clock=clock)


@pytest.fixture
def home_loader(home_cache, store) -> HomeDataLoader:
    return HomeDataLoader(cache=home_cache, store=store)


@pytest.fixture
def user_cache(gateway, signed_in_store, clock) -> UserProfileCache:
    """Provide a UserProfileCache for a signed-in user."""
    return UserProfileCache(gateway=gateway, store=signed_in_store, clock=clock)


@pytest.fixture
def cart(signed_in_store, prompter) -> CartAggregate:
    """Provide an empty cart for a signed-in user."""
    return CartAggregate(auth=AuthState(signed_in_store), prompter=prompter)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def item_factory() -> Callable[..., CartItem]:
    """Factory for cart items."""

    def _create_item(
        item_id: str = "p1",
        vendor_id: str = "v1",
        price: str = "10",
        vendor_name: Optional[str] = None,
    ) -> CartItem:
        return CartItem(
            id=item_id,
            name=f"Item {item_id}",
            price=Decimal(price),
            vendor_id=vendor_id,
            vendor_name=vendor_name or f"Vendor {vendor_id}",
        )

    return _create_item

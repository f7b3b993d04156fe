"""Stub gateway with canned data for offline/demo use."""

from typing import Optional

from storefront.domain.models import GeoPoint
from storefront.providers.remote_gateway import SearchQuery
from storefront.schemas import (
    Category,
    HomePageData,
    Pagination,
    ProductPage,
    UserProfile,
)


# Placeholder categories shown before the backend is reachable
_STUB_CATEGORIES: tuple[Category, ...] = (
    Category(id="1", name="Food & Beverages", icon="restaurant", color="#F97316"),
    Category(id="2", name="Groceries", icon="basket", color="#10B981"),
    Category(id="3", name="Pharmacy", icon="medical", color="#EF4444"),
    Category(id="4", name="Home Essentials", icon="home", color="#3B82F6"),
)


class StubRemoteDataGateway:
    """
    Offline gateway.

    Serves the placeholder categories with empty sections, empty product
    pages, and a test profile for any user id.
    """

    async def fetch_home_data(
        self, location: Optional[GeoPoint], limit: int
    ) -> HomePageData:
        return HomePageData(categories=list(_STUB_CATEGORIES))

    async def fetch_categories(self) -> list[Category]:
        return list(_STUB_CATEGORIES)

    async def fetch_subcategory_products(
        self, subcategory_id: str, page: int, limit: int
    ) -> ProductPage:
        return ProductPage(items=[], pagination=Pagination(page=page, total_pages=page))

    async def search_products(self, query: SearchQuery) -> ProductPage:
        return ProductPage(
            items=[],
            pagination=Pagination(page=query.page, total_pages=query.page),
        )

    async def fetch_user_profile(self, user_id: str, token: str) -> UserProfile:
        return UserProfile(
            id=user_id,
            full_name="Test USER",
            email="testuser@terango.com",
            phone="+2203000000",
            is_verified=True,
            role="USER",
        )

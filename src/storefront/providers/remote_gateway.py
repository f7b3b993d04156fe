"""Remote data gateway protocol and request types."""

from dataclasses import dataclass
from typing import Optional, Protocol

from storefront.domain.models import GeoPoint
from storefront.schemas import Category, HomePageData, ProductPage, UserProfile


@dataclass(frozen=True)
class SearchQuery:
    """Product search request. Unset filters are left out of the query string."""

    q: str
    page: int = 1
    limit: int = 20
    category_id: Optional[str] = None
    subcategory_id: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None

    def to_params(self) -> dict[str, str]:
        params = {"q": self.q, "page": str(self.page), "limit": str(self.limit)}
        if self.category_id:
            params["categoryId"] = self.category_id
        if self.subcategory_id:
            params["subcategoryId"] = self.subcategory_id
        if self.min_price is not None:
            params["minPrice"] = str(self.min_price)
        if self.max_price is not None:
            params["maxPrice"] = str(self.max_price)
        return params


class RemoteDataGateway(Protocol):
    """
    Protocol for the storefront backend.

    Every method raises GatewayError on transport failure, non-2xx status,
    a malformed body or a ``success: false`` envelope.
    """

    async def fetch_home_data(
        self, location: Optional[GeoPoint], limit: int
    ) -> HomePageData:
        """Fetch the aggregated home page payload near ``location``."""
        ...

    async def fetch_categories(self) -> list[Category]:
        """Fetch every top-level category."""
        ...

    async def fetch_subcategory_products(
        self, subcategory_id: str, page: int, limit: int
    ) -> ProductPage:
        """Fetch one page of products in a subcategory."""
        ...

    async def search_products(self, query: SearchQuery) -> ProductPage:
        """Fetch one page of search results."""
        ...

    async def fetch_user_profile(self, user_id: str, token: str) -> UserProfile:
        """Fetch the signed-in user's profile with a bearer token."""
        ...

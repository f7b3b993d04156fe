"""httpx implementation of the remote data gateway."""

from typing import Any, Optional, TypeVar

import httpx
from pydantic import ValidationError as PydanticValidationError

from storefront.config.settings import Settings
from storefront.core.exceptions import GatewayError
from storefront.domain.models import GeoPoint
from storefront.providers.remote_gateway import SearchQuery
from storefront.schemas import (
    ApiEnvelope,
    Category,
    HomePageData,
    Product,
    ProductPage,
    UserProfile,
    UserProfileResponse,
)

T = TypeVar("T")


def _auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class HttpRemoteDataGateway:
    """
    Gateway that talks to the storefront REST API.

    The client is owned by the caller unless built with ``from_settings``.
    """

    def __init__(self, client: httpx.AsyncClient, owns_client: bool = False):
        self._client = client
        self._owns_client = owns_client

    @classmethod
    def from_settings(cls, settings: Settings) -> "HttpRemoteDataGateway":
        client = httpx.AsyncClient(
            base_url=settings.api_url,
            timeout=settings.request_timeout_seconds,
        )
        return cls(client, owns_client=True)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_home_data(
        self, location: Optional[GeoPoint], limit: int
    ) -> HomePageData:
        params: dict[str, str] = {}
        if location is not None:
            params["userLat"] = str(location.lat)
            params["userLng"] = str(location.lng)
        params["limit"] = str(limit)

        payload = await self._get_json("/api/public/home-data", params=params)
        envelope = self._unwrap(payload, HomePageData, "home page data")
        return envelope.data

    async def fetch_categories(self) -> list[Category]:
        payload = await self._get_json("/api/public/categories")
        envelope = self._unwrap(payload, list[Category], "categories")
        return envelope.data

    async def fetch_subcategory_products(
        self, subcategory_id: str, page: int, limit: int
    ) -> ProductPage:
        payload = await self._get_json(
            f"/api/public/products-by-subcategory/{subcategory_id}",
            params={"page": str(page), "limit": str(limit)},
        )
        return self._unwrap_page(payload, "section items")

    async def search_products(self, query: SearchQuery) -> ProductPage:
        payload = await self._get_json("/api/public/search", params=query.to_params())
        return self._unwrap_page(payload, "search results")

    async def fetch_user_profile(self, user_id: str, token: str) -> UserProfile:
        payload = await self._get_json(
            f"/api/users/{user_id}/profile",
            headers=_auth_headers(token),
        )
        try:
            body = UserProfileResponse.model_validate(payload)
        except PydanticValidationError as exc:
            raise GatewayError("Malformed user profile payload", code="APPLICATION_ERROR") from exc
        if body.user is None:
            raise GatewayError.application("User profile missing from response")
        return body.user

    async def _get_json(
        self,
        path: str,
        params: Optional[dict[str, str]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """GET ``path`` and return the decoded JSON body."""
        try:
            response = await self._client.get(path, params=params, headers=headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise GatewayError(f"HTTP error! status: {status}", status_code=status) from exc
        except httpx.HTTPError as exc:
            raise GatewayError(f"Request to {path} failed: {exc}") from exc
        except ValueError as exc:
            raise GatewayError(f"Invalid JSON from {path}", code="APPLICATION_ERROR") from exc

    @staticmethod
    def _unwrap(payload: Any, data_type: type[T], what: str) -> ApiEnvelope[T]:
        """Validate the envelope and fail on ``success: false`` or missing data."""
        try:
            envelope = ApiEnvelope[data_type].model_validate(payload)
        except PydanticValidationError as exc:
            raise GatewayError(f"Malformed {what} payload", code="APPLICATION_ERROR") from exc
        if not envelope.success or envelope.data is None:
            raise GatewayError.application(envelope.message or f"Failed to fetch {what}")
        return envelope

    def _unwrap_page(self, payload: Any, what: str) -> ProductPage:
        envelope = self._unwrap(payload, list[Product], what)
        if envelope.pagination is None:
            raise GatewayError.application(f"Pagination missing from {what}")
        return ProductPage(items=envelope.data, pagination=envelope.pagination)

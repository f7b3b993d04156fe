"""Pydantic schemas for backend payloads."""

from storefront.schemas.catalog import (
    SECTION_NAMES,
    Category,
    Restaurant,
    Shop,
    StoreRef,
    Product,
    Advertisement,
    HomePageData,
    Pagination,
    ProductPage,
    ApiEnvelope,
)
from storefront.schemas.user import UserProfile, UserProfileResponse

__all__ = [
    "SECTION_NAMES",
    "Category",
    "Restaurant",
    "Shop",
    "StoreRef",
    "Product",
    "Advertisement",
    "HomePageData",
    "Pagination",
    "ProductPage",
    "ApiEnvelope",
    "UserProfile",
    "UserProfileResponse",
]

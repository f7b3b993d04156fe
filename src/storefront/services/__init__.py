"""Service layer - caching, loading and cart orchestration."""

from storefront.services.auth_state import AuthState
from storefront.services.home_data_cache import HomeDataCache
from storefront.services.home_data_loader import HomeDataLoader
from storefront.services.user_profile_cache import UserProfileCache
from storefront.services.cart_service import CartAggregate, CartPrompter

__all__ = [
    "AuthState",
    "HomeDataCache",
    "HomeDataLoader",
    "UserProfileCache",
    "CartAggregate",
    "CartPrompter",
]

"""Domain models package."""

from storefront.domain.models.enums import AddToCartOutcome
from storefront.domain.models.cache import CacheEntry
from storefront.domain.models.location import GeoPoint
from storefront.domain.models.user import UserCacheData
from storefront.domain.models.cart import CartItem, CartLine

__all__ = [
    "AddToCartOutcome",
    "CacheEntry",
    "GeoPoint",
    "UserCacheData",
    "CartItem",
    "CartLine",
]

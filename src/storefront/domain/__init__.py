"""Domain layer - business models with no I/O."""

from storefront.domain.models import (
    AddToCartOutcome,
    CacheEntry,
    GeoPoint,
    UserCacheData,
    CartItem,
    CartLine,
)

__all__ = [
    "AddToCartOutcome",
    "CacheEntry",
    "GeoPoint",
    "UserCacheData",
    "CartItem",
    "CartLine",
]

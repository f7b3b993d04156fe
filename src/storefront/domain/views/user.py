"""View models for user profile loading."""

import asyncio
from dataclasses import dataclass
from typing import Optional

from storefront.domain.models.user import UserCacheData


@dataclass(frozen=True)
class SmartLoadResult:
    """
    Cached profile available now, plus the background refresh.

    Render ``cached`` immediately and swap in the result of ``fresh``
    when it completes.
    """

    cached: Optional[UserCacheData]
    fresh: "asyncio.Task[Optional[UserCacheData]]"

"""View models for the home screen."""

from dataclasses import dataclass, field
from typing import Optional

from storefront.schemas.catalog import HomePageData, Product


@dataclass(frozen=True)
class SectionPage:
    """One page of section or search results."""

    items: list[Product] = field(default_factory=list)
    has_more: bool = False

    @classmethod
    def empty(cls) -> "SectionPage":
        return cls(items=[], has_more=False)


@dataclass
class HomeScreenState:
    """Loading state of the home screen."""

    data: Optional[HomePageData] = None
    loading: bool = True
    refreshing: bool = False
    error: Optional[str] = None

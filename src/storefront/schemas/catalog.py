"""Pydantic schemas for the public catalog endpoints."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Fixed set of home page sections, in display order
SECTION_NAMES: tuple[str, ...] = (
    "localDishes",
    "fastFood",
    "beverages",
    "riceGrains",
    "oilsSpices",
    "medicines",
    "personalCare",
    "cleaningSupplies",
    "homeUtilities",
    "toiletries",
    "cannedPackaged",
    "babyProducts",
)


class CatalogModel(BaseModel):
    """Base for immutable catalog records parsed from camelCase JSON."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class Category(CatalogModel):
    """Top-level product category."""

    id: str
    name: str
    icon: Optional[str] = None
    color: Optional[str] = None
    image: Optional[str] = None


class Restaurant(CatalogModel):
    """Restaurant listed near the user."""

    id: str
    name: str
    image: Optional[str] = None
    rating: float = 0.0
    delivery_time: str = ""
    address: str = ""
    distance: Optional[float] = None


class Shop(CatalogModel):
    """Shop listed near the user."""

    id: str
    name: str
    image: Optional[str] = None
    rating: float = 0.0
    delivery_time: str = ""
    address: str = ""
    distance: Optional[float] = None


class StoreRef(CatalogModel):
    """Store summary embedded in a product."""

    id: str
    name: str
    rating: float = 0.0


class Product(CatalogModel):
    """Product shown in a home page section or a listing."""

    id: str
    name: str
    price: float
    image: Optional[str] = None
    description: Optional[str] = None
    store: Optional[StoreRef] = None


class Advertisement(CatalogModel):
    """Promotional banner. Lower priority is shown first."""

    id: str
    title: str
    image: str
    description: Optional[str] = None
    link: Optional[str] = None
    priority: int = 0


class HomePageData(CatalogModel):
    """
    Everything the home screen renders, fetched in a single request.

    Every named section is always present; sections missing from the
    payload parse as empty. Advertisements are ordered by priority.
    """

    categories: list[Category] = Field(default_factory=list)
    nearby_restaurants: list[Restaurant] = Field(default_factory=list)
    nearby_shops: list[Shop] = Field(default_factory=list)
    sections: dict[str, list[Product]] = Field(default_factory=dict, validate_default=True)
    advertisements: list[Advertisement] = Field(default_factory=list)

    @field_validator("sections", mode="after")
    @classmethod
    def _fill_sections(cls, value: dict[str, list[Product]]) -> dict[str, list[Product]]:
        filled = {name: list(value.get(name, [])) for name in SECTION_NAMES}
        for name, items in value.items():
            if name not in filled:
                filled[name] = list(items)
        return filled

    @field_validator("advertisements", mode="after")
    @classmethod
    def _order_advertisements(cls, value: list[Advertisement]) -> list[Advertisement]:
        return sorted(value, key=lambda ad: ad.priority)

    @classmethod
    def empty(cls) -> "HomePageData":
        """Return the all-empty structure served when nothing else is available."""
        return cls()

    def with_section_items(self, section: str, items: list[Product]) -> "HomePageData":
        """Return a copy with ``items`` appended to ``section``."""
        sections = dict(self.sections)
        sections[section] = [*sections.get(section, []), *items]
        return self.model_copy(update={"sections": sections})


class Pagination(CatalogModel):
    """Pagination block of a paged listing."""

    page: int
    total_pages: int

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages


class ProductPage(CatalogModel):
    """One page of products plus its pagination block."""

    items: list[Product] = Field(default_factory=list)
    pagination: Pagination


class ApiEnvelope(BaseModel, Generic[T]):
    """Standard ``{success, data, message, pagination}`` response envelope."""

    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    pagination: Optional[Pagination] = None

"""Cart domain models."""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional

from storefront.core.exceptions import ValidationError


def _to_decimal(value: object) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class CartItem:
    """Product snapshot offered to the cart (no quantity yet)."""

    id: str
    name: str
    price: Decimal
    vendor_id: str
    vendor_name: str
    image_url: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", _to_decimal(self.price))


@dataclass(frozen=True)
class CartLine:
    """
    Line in the cart, keyed by product id.

    Quantity is always >= 1; a line that would drop below 1 is removed instead.
    """

    id: str
    name: str
    price: Decimal
    quantity: int
    vendor_id: str
    vendor_name: str
    image_url: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", _to_decimal(self.price))
        if self.quantity < 1:
            raise ValidationError(f"Cart line quantity must be >= 1, got {self.quantity}")

    @classmethod
    def from_item(cls, item: CartItem, quantity: int = 1) -> "CartLine":
        return cls(
            id=item.id,
            name=item.name,
            price=item.price,
            quantity=quantity,
            vendor_id=item.vendor_id,
            vendor_name=item.vendor_name,
            image_url=item.image_url,
            description=item.description,
        )

    @property
    def subtotal(self) -> Decimal:
        """Line price times quantity."""
        return self.price * self.quantity

    def with_quantity(self, quantity: int) -> "CartLine":
        return replace(self, quantity=quantity)

"""Shopping cart for a single vendor."""

import asyncio
import logging
from decimal import Decimal
from typing import Optional, Protocol

from storefront.core.exceptions import AuthRequiredError, ValidationError
from storefront.domain.models import AddToCartOutcome, CartItem, CartLine
from storefront.domain.views import VendorDetails
from storefront.services.auth_state import AuthState

logger = logging.getLogger(__name__)

START_NEW_CART_TITLE = "Start New Cart?"
START_NEW_CART_MESSAGE = (
    "You have items in your cart from a different restaurant. "
    "Would you like to start a new cart?"
)


class CartPrompter(Protocol):
    """User interaction the cart needs from the UI layer."""

    async def confirm(self, title: str, message: str) -> bool:
        """Ask a yes/no question. Returns True if the user accepted."""
        ...

    async def prompt_login(self) -> None:
        """Offer the sign-in flow to the user."""
        ...


class CartAggregate:
    """
    In-memory cart holding lines from exactly one vendor.

    - Adding requires a signed-in user
    - Adding from a different vendor replaces the whole cart, and only after
      the user confirms
    - Line quantity never drops below 1; such updates remove the line

    ``add_to_cart`` calls are serialised, so a second add issued while a
    confirmation is pending sees the cart as left by the first. The other
    mutators are synchronous and apply immediately.

    The cart lives for the process only and is not persisted.
    """

    def __init__(self, auth: AuthState, prompter: CartPrompter):
        self._auth = auth
        self._prompter = prompter
        self._lines: list[CartLine] = []
        self._add_lock = asyncio.Lock()

    @property
    def items(self) -> tuple[CartLine, ...]:
        """Lines in insertion order."""
        return tuple(self._lines)

    @property
    def cart_items(self) -> tuple[CartLine, ...]:
        return self.items

    @property
    def is_empty(self) -> bool:
        return not self._lines

    # Mutations

    async def add_to_cart(self, item: CartItem, quantity: int = 1) -> AddToCartOutcome:
        """
        Add ``quantity`` of ``item`` to the cart.

        Raises:
            AuthRequiredError: no signed-in user; the login prompt was shown
                and the cart is unchanged.
            ValidationError: quantity is below 1.
        """
        if quantity < 1:
            raise ValidationError(f"Quantity must be at least 1, got {quantity}")

        async with self._add_lock:
            if not await self._auth.is_logged_in():
                logger.info("Add to cart blocked for %s: login required", item.id)
                await self._prompter.prompt_login()
                raise AuthRequiredError()

            vendor = self.get_vendor_details()
            if vendor is not None and vendor.id != item.vendor_id:
                confirmed = await self._prompter.confirm(
                    START_NEW_CART_TITLE, START_NEW_CART_MESSAGE
                )
                if not confirmed:
                    return AddToCartOutcome.DECLINED
                logger.info(
                    "Replacing cart from vendor %s with vendor %s",
                    vendor.id,
                    item.vendor_id,
                )
                self._lines = [CartLine.from_item(item, quantity)]
                return AddToCartOutcome.REPLACED

            return self._merge(item, quantity)

    def remove_from_cart(self, item_id: str) -> None:
        """Remove the line with ``item_id``. Unknown ids are ignored."""
        self._lines = [line for line in self._lines if line.id != item_id]

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """Set a line's quantity exactly; below 1 removes the line."""
        if quantity < 1:
            self.remove_from_cart(item_id)
            return
        self._lines = [
            line.with_quantity(quantity) if line.id == item_id else line
            for line in self._lines
        ]

    def clear_cart(self) -> None:
        """Empty the cart (e.g. after checkout)."""
        self._lines = []

    # Queries

    def get_cart_total(self) -> Decimal:
        """Sum of price x quantity over every line."""
        return sum((line.subtotal for line in self._lines), Decimal("0"))

    def get_total_amount(self) -> Decimal:
        return self.get_cart_total()

    def get_item_count(self) -> int:
        """Sum of quantities over every line."""
        return sum(line.quantity for line in self._lines)

    def get_total_quantity(self) -> int:
        return self.get_item_count()

    def get_quantity(self, item_id: str) -> int:
        """Quantity of the line with ``item_id``, or 0."""
        for line in self._lines:
            if line.id == item_id:
                return line.quantity
        return 0

    def get_vendor_details(self) -> Optional[VendorDetails]:
        """The cart's vendor, or None when the cart is empty."""
        if not self._lines:
            return None
        first = self._lines[0]
        return VendorDetails(id=first.vendor_id, name=first.vendor_name)

    def get_cart_by_vendor(self) -> dict[str, list[CartLine]]:
        """Group lines by vendor id, preserving insertion order."""
        grouped: dict[str, list[CartLine]] = {}
        for line in self._lines:
            grouped.setdefault(line.vendor_id, []).append(line)
        return grouped

    def _merge(self, item: CartItem, quantity: int) -> AddToCartOutcome:
        for index, line in enumerate(self._lines):
            if line.id == item.id:
                updated = list(self._lines)
                updated[index] = line.with_quantity(line.quantity + quantity)
                self._lines = updated
                return AddToCartOutcome.INCREMENTED
        self._lines = [*self._lines, CartLine.from_item(item, quantity)]
        return AddToCartOutcome.ADDED

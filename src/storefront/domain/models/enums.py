"""Enumerations for domain models."""

from enum import Enum


class AddToCartOutcome(str, Enum):
    """Result of an add-to-cart request."""

    ADDED = "ADDED"  # new line appended
    INCREMENTED = "INCREMENTED"  # existing line quantity increased
    REPLACED = "REPLACED"  # cart from another vendor replaced after confirmation
    DECLINED = "DECLINED"  # user kept the existing cart

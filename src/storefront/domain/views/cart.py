"""View models for the cart."""

from dataclasses import dataclass


@dataclass(frozen=True)
class VendorDetails:
    """The vendor every line in the cart belongs to."""

    id: str
    name: str

"""View models returned to the UI layer."""

from storefront.domain.views.home import SectionPage, HomeScreenState
from storefront.domain.views.user import SmartLoadResult
from storefront.domain.views.cart import VendorDetails

__all__ = [
    "SectionPage",
    "HomeScreenState",
    "SmartLoadResult",
    "VendorDetails",
]

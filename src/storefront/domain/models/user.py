"""Cached projection of the signed-in user's profile."""

from dataclasses import dataclass
from typing import Optional

from storefront.schemas.user import UserProfile


@dataclass(frozen=True)
class UserCacheData:
    """
    Locally cached user fields.

    The server record is the source of truth; this is only a projection of it.
    """

    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    is_verified: Optional[bool] = None

    @property
    def has_content(self) -> bool:
        """Return True if any of name, phone or email is non-empty."""
        return bool(self.full_name or self.phone or self.email)

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserCacheData":
        """Project a server-side user record onto the cached fields."""
        return cls(
            full_name=profile.full_name,
            phone=profile.phone,
            email=profile.email,
            is_verified=profile.is_verified,
        )

    def masked(self) -> dict[str, object]:
        """Return a log-safe dict with the e-mail address hidden."""
        return {
            "full_name": self.full_name,
            "phone": self.phone,
            "email": "***@***.***" if self.email else "",
            "is_verified": self.is_verified,
        }

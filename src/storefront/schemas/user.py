"""Pydantic schemas for the user profile endpoint."""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UserProfile(BaseModel):
    """Server-side user record. Unknown fields are ignored."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    id: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    is_verified: Optional[bool] = None
    role: Optional[str] = None


class UserProfileResponse(BaseModel):
    """Response body of ``GET /api/users/{user_id}/profile``."""

    user: Optional[UserProfile] = None

"""Company and user profile schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class CompanyResponse(BaseModel):
    """Company response."""

    id: int
    name: str
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    amenities: list[dict[str, Any]] | None = None
    settings: dict[str, Any] | None = None
    staff_emails: list[str] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CompanyUpdate(BaseModel):
    """Company update request; ``settings`` sections are merged over the stored ones."""

    name: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    amenities: list[dict[str, Any]] | None = None
    staff_emails: list[str] | None = None
    settings: dict[str, Any] | None = None


class ProfileResponse(BaseModel):
    """User profile response."""

    uid: str
    email: str | None = None
    display_name: str | None = None
    role: str
    preferences: dict[str, Any] | None = None
    updated_at: datetime

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    """User profile update request."""

    display_name: str | None = None
    role: str | None = None
    preferences: dict[str, Any] | None = None

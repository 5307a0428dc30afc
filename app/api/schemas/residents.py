"""Resident schemas."""

from datetime import datetime

from pydantic import BaseModel


class EmergencyContact(BaseModel):
    name: str | None = None
    phone: str | None = None
    relationship: str | None = None


class ResidentCreate(BaseModel):
    """Resident creation request."""

    name: str | None = None
    unit_number: str | None = None
    email: str | None = None
    phone: str | None = None
    emergency_contact: EmergencyContact | None = None
    notes: str | None = None


class ResidentUpdate(ResidentCreate):
    """Resident update request; only the fields sent are changed."""


class ResidentResponse(BaseModel):
    """Resident response."""

    id: int
    company_id: int
    name: str
    unit_number: str
    email: str | None = None
    phone: str | None = None
    emergency_contact: EmergencyContact | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

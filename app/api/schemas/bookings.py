"""Amenity booking schemas."""

from datetime import datetime

from pydantic import BaseModel


class ContactInfo(BaseModel):
    name: str | None = None
    phone: str | None = None
    email: str | None = None


class BookingCreate(BaseModel):
    """Booking creation request.

    ``contact_info`` may be left out when ``resident_id`` is given; the
    resident's details are then copied onto the booking.
    """

    title: str | None = None
    amenity_id: str | None = None
    resident_id: int | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    contact_info: ContactInfo | None = None
    status: str | None = None
    notes: str | None = None


class BookingUpdate(BookingCreate):
    """Booking update request."""


class BookingResponse(BaseModel):
    """Booking response."""

    id: int
    company_id: int
    title: str
    amenity_id: str
    resident_id: int | None = None
    start_date: datetime
    end_date: datetime
    contact_info: ContactInfo | None = None
    status: str
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

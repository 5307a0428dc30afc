"""Visitor and parking request schemas."""

from datetime import date, datetime

from pydantic import BaseModel


class Visiting(BaseModel):
    """Resident being visited; filled from the resident when only the ID is sent."""

    resident_id: int | None = None
    resident_name: str | None = None
    unit_number: str | None = None


class VehicleInfo(BaseModel):
    make: str | None = None
    model: str | None = None
    year: str | None = None
    color: str | None = None
    license_plate: str | None = None


class VisitorCreate(BaseModel):
    """Visitor pre-registration request."""

    name: str | None = None
    phone: str | None = None
    email: str | None = None
    visiting: Visiting | None = None
    purpose: str | None = None
    expected_arrival: datetime | None = None
    expected_departure: datetime | None = None
    parking_required: bool = False
    vehicle_info: VehicleInfo | None = None
    parking_spot: str | None = None
    access_code: str | None = None
    notes: str | None = None


class VisitorUpdate(VisitorCreate):
    """Visitor update request."""


class VisitorResponse(BaseModel):
    """Visitor response."""

    id: int
    company_id: int
    name: str
    phone: str | None = None
    email: str | None = None
    visiting: Visiting
    purpose: str | None = None
    expected_arrival: datetime | None = None
    expected_departure: datetime | None = None
    actual_arrival: datetime | None = None
    actual_departure: datetime | None = None
    parking_required: bool
    vehicle_info: VehicleInfo | None = None
    parking_spot: str | None = None
    access_code: str | None = None
    notes: str | None = None
    status: str
    checked_in_by: str | None = None
    notification_sent: bool
    notification_method: str | None = None
    notification_sent_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CheckInRequest(BaseModel):
    checked_in_by: str | None = None


class ParkingRequestCreate(BaseModel):
    """Visitor parking request."""

    requester_name: str | None = None
    requester_phone: str | None = None
    requester_email: str | None = None
    visiting: Visiting | None = None
    vehicle_info: VehicleInfo | None = None
    requested_date: date | None = None
    start_time: str | None = None  # "HH:MM"
    end_time: str | None = None
    purpose: str | None = None
    notes: str | None = None


class ParkingRequestUpdate(ParkingRequestCreate):
    """Parking request update request."""


class ParkingRequestResponse(BaseModel):
    """Parking request response."""

    id: int
    company_id: int
    requester_name: str
    requester_phone: str | None = None
    requester_email: str | None = None
    visiting: Visiting
    vehicle_info: VehicleInfo | None = None
    requested_date: datetime
    start_time: str
    end_time: str
    purpose: str | None = None
    notes: str | None = None
    status: str
    approved_by: str | None = None
    approved_at: datetime | None = None
    parking_spot: str | None = None
    access_code: str | None = None
    notification_sent: bool
    notification_method: str | None = None
    notification_sent_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ApproveParkingRequest(BaseModel):
    """Approval; spot and access code are generated when left out."""

    approved_by: str | None = None
    parking_spot: str | None = None
    access_code: str | None = None


class DenyParkingRequest(BaseModel):
    denied_by: str | None = None

"""Package center schemas."""

from datetime import date, datetime

from pydantic import BaseModel


class PackageCreate(BaseModel):
    """Package intake request.

    With ``resident_id`` set, recipient fields left out are filled from the
    resident record.
    """

    resident_id: int | None = None
    resident_name: str | None = None
    unit_number: str | None = None
    recipient_email: str | None = None
    recipient_phone: str | None = None
    courier: str | None = None
    tracking_number: str | None = None
    package_type: str | None = None
    size: str | None = None
    description: str | None = None
    delivered_at: datetime | None = None
    received_by: str | None = None
    notes: str | None = None


class PackageUpdate(PackageCreate):
    """Package update request."""


class PackageResponse(BaseModel):
    """Package response."""

    id: int
    company_id: int
    resident_id: int | None = None
    resident_name: str
    unit_number: str
    recipient_email: str | None = None
    recipient_phone: str | None = None
    courier: str | None = None
    tracking_number: str | None = None
    package_type: str | None = None
    size: str | None = None
    description: str | None = None
    delivered_at: datetime
    received_by: str | None = None
    notes: str | None = None
    status: str
    notification_sent: bool
    notification_method: str | None = None
    notification_sent_at: datetime | None = None
    notification_content: str | None = None
    pickup_by: str | None = None
    picked_up_at: datetime | None = None
    pickup_notes: str | None = None
    verification_method: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PickupRequest(BaseModel):
    """Pickup of a single package."""

    pickup_by: str | None = None
    notes: str | None = None
    verification_method: str | None = None


class BulkPickupRequest(PickupRequest):
    """Pickup of several packages at once."""

    package_ids: list[int]


class BulkPickupResponse(BaseModel):
    updated: int


class PackageStatusRequest(BaseModel):
    """Move a pending package to returned, damaged or lost."""

    status: str
    notes: str | None = None


class CourierCount(BaseModel):
    courier: str
    count: int


class PackageStatsResponse(BaseModel):
    """Package center counters."""

    total: int
    pending: int
    picked_up: int
    notified: int
    avg_pickup_time: float
    top_couriers: list[CourierCount]


class ReportPeriod(BaseModel):
    start: datetime
    end: datetime


class BusiestDay(BaseModel):
    day: date | None = None
    count: int


class MostActiveUnit(BaseModel):
    unit: str | None = None
    count: int


class ReportInsights(BaseModel):
    busiest_day: BusiestDay
    most_active_unit: MostActiveUnit
    average_packages_per_day: float


class PackageReportResponse(BaseModel):
    """Package report for a date range."""

    period: ReportPeriod
    summary: PackageStatsResponse
    packages: list[PackageResponse]
    insights: ReportInsights

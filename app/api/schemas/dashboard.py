"""Dashboard schemas."""

from pydantic import BaseModel

from app.api.schemas.bookings import BookingResponse
from app.api.schemas.issues import IssueResponse
from app.api.schemas.messages import MessageResponse
from app.api.schemas.packages import PackageResponse
from app.api.schemas.visitors import VisitorResponse


class DashboardStatsResponse(BaseModel):
    """Dashboard counters for the company's current day."""

    total_residents: int = 0
    todays_bookings: int = 0
    pending_packages: int = 0
    unread_messages: int = 0
    missed_calls: int = 0
    open_issues: int = 0
    todays_visitors: int = 0
    response_time: float = 0.0  # minutes


class DashboardResponse(BaseModel):
    """Counters plus the short lists shown beside them."""

    stats: DashboardStatsResponse
    todays_bookings: list[BookingResponse]
    recent_packages: list[PackageResponse]
    recent_messages: list[MessageResponse]
    recent_issues: list[IssueResponse]
    todays_visitors: list[VisitorResponse]

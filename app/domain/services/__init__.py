"""Domain services."""

from app.domain.services.booking_service import BookingService
from app.domain.services.company_service import CompanyService
from app.domain.services.dashboard_service import DashboardService
from app.domain.services.issue_service import IssueService
from app.domain.services.message_service import MessageService
from app.domain.services.notification_dispatcher import NotificationDispatcher
from app.domain.services.package_service import PackageService
from app.domain.services.resident_service import ResidentService
from app.domain.services.visitor_service import ParkingService, VisitorService

__all__ = [
    "BookingService",
    "CompanyService",
    "DashboardService",
    "IssueService",
    "MessageService",
    "NotificationDispatcher",
    "PackageService",
    "ParkingService",
    "ResidentService",
    "VisitorService",
]

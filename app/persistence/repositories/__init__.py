"""Repository implementations."""

from app.persistence.repositories.base import BaseRepository
from app.persistence.repositories.booking_repository import BookingRepository
from app.persistence.repositories.company_repository import CompanyRepository, UserProfileRepository
from app.persistence.repositories.issue_repository import ActivityLogRepository, IssueRepository
from app.persistence.repositories.message_repository import CallLogRepository, MessageRepository
from app.persistence.repositories.package_repository import PackageRepository
from app.persistence.repositories.resident_repository import ResidentRepository
from app.persistence.repositories.visitor_repository import ParkingRequestRepository, VisitorRepository

__all__ = [
    "ActivityLogRepository",
    "BaseRepository",
    "BookingRepository",
    "CallLogRepository",
    "CompanyRepository",
    "IssueRepository",
    "MessageRepository",
    "PackageRepository",
    "ParkingRequestRepository",
    "ResidentRepository",
    "UserProfileRepository",
    "VisitorRepository",
]

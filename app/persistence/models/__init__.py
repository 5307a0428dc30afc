"""Database models."""

from app.persistence.models.booking import Booking
from app.persistence.models.company import Company, CompanyStaffMember, UserProfile
from app.persistence.models.issue import ActivityLog, Issue
from app.persistence.models.message import CallLog, Message
from app.persistence.models.package import Package
from app.persistence.models.resident import Resident
from app.persistence.models.visitor import ParkingRequest, Visitor

__all__ = [
    "ActivityLog",
    "Booking",
    "CallLog",
    "Company",
    "CompanyStaffMember",
    "Issue",
    "Message",
    "Package",
    "ParkingRequest",
    "Resident",
    "UserProfile",
    "Visitor",
]

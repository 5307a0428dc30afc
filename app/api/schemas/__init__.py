"""API schemas package."""

from app.api.schemas.bookings import BookingCreate, BookingResponse, BookingUpdate
from app.api.schemas.company import CompanyResponse, CompanyUpdate, ProfileResponse, ProfileUpdate
from app.api.schemas.issues import IssueCreate, IssueResponse, IssueUpdate
from app.api.schemas.packages import PackageCreate, PackageResponse, PackageUpdate
from app.api.schemas.residents import ResidentCreate, ResidentResponse, ResidentUpdate
from app.api.schemas.visitors import (
    ParkingRequestCreate,
    ParkingRequestResponse,
    ParkingRequestUpdate,
    VisitorCreate,
    VisitorResponse,
    VisitorUpdate,
)

__all__ = [
    "BookingCreate",
    "BookingResponse",
    "BookingUpdate",
    "CompanyResponse",
    "CompanyUpdate",
    "IssueCreate",
    "IssueResponse",
    "IssueUpdate",
    "PackageCreate",
    "PackageResponse",
    "PackageUpdate",
    "ParkingRequestCreate",
    "ParkingRequestResponse",
    "ParkingRequestUpdate",
    "ProfileResponse",
    "ProfileUpdate",
    "ResidentCreate",
    "ResidentResponse",
    "ResidentUpdate",
    "VisitorCreate",
    "VisitorResponse",
    "VisitorUpdate",
]

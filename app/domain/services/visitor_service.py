"""Visitor and visitor parking services."""

import logging
import random
import string
from datetime import date, datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.timezones import local_day_bounds, local_today, to_naive_utc
from app.domain.errors import EntityNotFoundError, EntityValidationError, InvalidTransitionError
from app.domain.models.snapshots import ResidentSnapshot
from app.domain.services.company_service import load_company_settings
from app.domain.validation import validate_parking_request, validate_visitor
from app.persistence.models.visitor import ParkingRequest, Visitor
from app.persistence.repositories.base import to_dict
from app.persistence.repositories.resident_repository import ResidentRepository
from app.persistence.repositories.visitor_repository import (
    ParkingRequestRepository,
    VisitorRepository,
)
from app.settings import settings

logger = logging.getLogger(__name__)

VISITOR_FIELDS = (
    "name",
    "phone",
    "email",
    "visiting",
    "purpose",
    "expected_arrival",
    "expected_departure",
    "parking_required",
    "vehicle_info",
    "parking_spot",
    "access_code",
    "notes",
)
PARKING_FIELDS = (
    "requester_name",
    "requester_phone",
    "requester_email",
    "visiting",
    "vehicle_info",
    "requested_date",
    "start_time",
    "end_time",
    "purpose",
    "notes",
)
VISITOR_DATETIME_FIELDS = ("expected_arrival", "expected_departure")

ACCESS_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_access_code() -> str:
    """Visitor access code: "VIS" followed by four upper-case alphanumerics."""
    return "VIS" + "".join(random.choices(ACCESS_CODE_ALPHABET, k=4))


def assign_parking_spot() -> str:
    """Draw a visitor spot from the configured pool."""
    return random.choice(settings.visitor_parking_spots)


async def _visiting_snapshot(
    resident_repo: ResidentRepository, company_id: int, visiting: dict[str, Any] | None
) -> dict[str, Any] | None:
    """Fill the visiting record from the resident when ``resident_id`` is given."""
    if not visiting or visiting.get("resident_id") is None:
        return visiting
    resident = await resident_repo.get_by_id(company_id, visiting["resident_id"])
    if resident is None:
        raise EntityValidationError({"visiting.resident_id": "Resident not found"})
    return ResidentSnapshot.from_resident(resident).visiting()


class VisitorService:
    """Service for visitor registration and the check-in/out lifecycle.

    Lifecycle: pre_registered -> checked_in -> checked_out, or
    pre_registered -> no_show.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.visitor_repo = VisitorRepository(session)
        self.resident_repo = ResidentRepository(session)

    async def create_visitor(self, company_id: int, data: dict[str, Any]) -> Visitor:
        values = {key: data.get(key) for key in VISITOR_FIELDS}
        values["parking_required"] = bool(values["parking_required"])
        for key in VISITOR_DATETIME_FIELDS:
            if values[key] is not None:
                values[key] = to_naive_utc(values[key])
        values["visiting"] = await _visiting_snapshot(self.resident_repo, company_id, values["visiting"])

        errors = validate_visitor(values)
        if errors:
            raise EntityValidationError(errors)

        visitor = await self.visitor_repo.create(company_id, status="pre_registered", **values)
        logger.info("Visitor registered", extra={"company_id": company_id, "visitor_id": visitor.id})
        return visitor

    async def list_visitors(
        self,
        company_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Visitor]:
        return await self.visitor_repo.list_by_company(
            company_id,
            start=to_naive_utc(start) if start else None,
            end=to_naive_utc(end) if end else None,
        )

    async def get_visitor(self, company_id: int, visitor_id: int) -> Visitor:
        visitor = await self.visitor_repo.get_by_id(company_id, visitor_id)
        if visitor is None:
            raise EntityNotFoundError("visitor", visitor_id)
        return visitor

    async def update_visitor(
        self, company_id: int, visitor_id: int, data: dict[str, Any]
    ) -> Visitor:
        visitor = await self.get_visitor(company_id, visitor_id)
        updates = {key: value for key, value in data.items() if key in VISITOR_FIELDS}
        for key in VISITOR_DATETIME_FIELDS:
            if updates.get(key) is not None:
                updates[key] = to_naive_utc(updates[key])
        if "visiting" in updates:
            updates["visiting"] = await _visiting_snapshot(
                self.resident_repo, company_id, updates["visiting"]
            )

        errors = validate_visitor({**to_dict(visitor), **updates})
        if errors:
            raise EntityValidationError(errors)

        return await self.visitor_repo.update(company_id, visitor_id, **updates)

    async def delete_visitor(self, company_id: int, visitor_id: int) -> None:
        if not await self.visitor_repo.delete(company_id, visitor_id):
            raise EntityNotFoundError("visitor", visitor_id)

    async def _transition(
        self,
        company_id: int,
        visitor_id: int,
        allowed_from: str,
        target: str,
        **updates,
    ) -> Visitor:
        visitor = await self.get_visitor(company_id, visitor_id)
        if visitor.status != allowed_from:
            raise InvalidTransitionError("visitor", visitor.status, target)
        visitor = await self.visitor_repo.update(company_id, visitor_id, status=target, **updates)
        logger.info(
            f"Visitor {target}",
            extra={"company_id": company_id, "visitor_id": visitor_id},
        )
        return visitor

    async def check_in(
        self, company_id: int, visitor_id: int, checked_in_by: str | None = None
    ) -> Visitor:
        return await self._transition(
            company_id,
            visitor_id,
            "pre_registered",
            "checked_in",
            actual_arrival=datetime.utcnow(),
            checked_in_by=checked_in_by or "Front Desk",
        )

    async def check_out(self, company_id: int, visitor_id: int) -> Visitor:
        return await self._transition(
            company_id,
            visitor_id,
            "checked_in",
            "checked_out",
            actual_departure=datetime.utcnow(),
        )

    async def mark_no_show(self, company_id: int, visitor_id: int) -> Visitor:
        return await self._transition(company_id, visitor_id, "pre_registered", "no_show")

    async def list_checked_in_today(
        self, company_id: int, now: datetime | None = None
    ) -> list[Visitor]:
        """Visitors still checked in who arrived on the company's current local day."""
        company_settings = await load_company_settings(self.session, company_id)
        today = local_today(company_settings.timezone, now)
        start, end = local_day_bounds(today, company_settings.timezone)
        return await self.visitor_repo.list_checked_in_between(company_id, start, end)


class ParkingService:
    """Service for visitor parking requests.

    Lifecycle: pending -> approved (spot and access code assigned) or
    pending -> denied.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.parking_repo = ParkingRequestRepository(session)
        self.resident_repo = ResidentRepository(session)

    async def create_request(
        self,
        company_id: int,
        data: dict[str, Any],
        today: date | None = None,
    ) -> ParkingRequest:
        """Validate and file a parking request as ``pending``.

        Args:
            company_id: Company ID
            data: Request fields
            today: Company-local date used for the past-date check
                (defaults to today in the company timezone)
        """
        values = {key: data.get(key) for key in PARKING_FIELDS}
        values["visiting"] = await _visiting_snapshot(self.resident_repo, company_id, values["visiting"])
        if isinstance(values["requested_date"], date) and not isinstance(values["requested_date"], datetime):
            values["requested_date"] = datetime.combine(values["requested_date"], datetime.min.time())

        if today is None:
            company_settings = await load_company_settings(self.session, company_id)
            today = local_today(company_settings.timezone)

        errors = validate_parking_request(values, today=today)
        if errors:
            raise EntityValidationError(errors)

        request = await self.parking_repo.create(company_id, status="pending", **values)
        logger.info(
            "Parking request filed",
            extra={"company_id": company_id, "parking_request_id": request.id},
        )
        return request

    async def list_requests(
        self,
        company_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[ParkingRequest]:
        return await self.parking_repo.list_by_company(company_id, start=start, end=end)

    async def list_pending(self, company_id: int) -> list[ParkingRequest]:
        return await self.parking_repo.list_pending(company_id)

    async def get_request(self, company_id: int, request_id: int) -> ParkingRequest:
        request = await self.parking_repo.get_by_id(company_id, request_id)
        if request is None:
            raise EntityNotFoundError("parking_request", request_id)
        return request

    async def update_request(
        self, company_id: int, request_id: int, data: dict[str, Any]
    ) -> ParkingRequest:
        request = await self.get_request(company_id, request_id)
        updates = {key: value for key, value in data.items() if key in PARKING_FIELDS}
        if isinstance(updates.get("requested_date"), date) and not isinstance(
            updates["requested_date"], datetime
        ):
            updates["requested_date"] = datetime.combine(updates["requested_date"], datetime.min.time())
        if "visiting" in updates:
            updates["visiting"] = await _visiting_snapshot(
                self.resident_repo, company_id, updates["visiting"]
            )

        errors = validate_parking_request({**to_dict(request), **updates})
        if errors:
            raise EntityValidationError(errors)

        return await self.parking_repo.update(company_id, request_id, **updates)

    async def delete_request(self, company_id: int, request_id: int) -> None:
        if not await self.parking_repo.delete(company_id, request_id):
            raise EntityNotFoundError("parking_request", request_id)

    async def approve(
        self,
        company_id: int,
        request_id: int,
        approved_by: str | None = None,
        parking_spot: str | None = None,
        access_code: str | None = None,
    ) -> ParkingRequest:
        """Approve a pending request, assigning a spot and access code.

        Raises:
            InvalidTransitionError: If the request was already decided
        """
        request = await self.get_request(company_id, request_id)
        if request.status != "pending":
            raise InvalidTransitionError("parking_request", request.status, "approved")

        request = await self.parking_repo.update(
            company_id,
            request_id,
            status="approved",
            approved_by=approved_by or "Front Desk",
            approved_at=datetime.utcnow(),
            parking_spot=parking_spot or assign_parking_spot(),
            access_code=access_code or generate_access_code(),
        )
        logger.info(
            "Parking request approved",
            extra={"company_id": company_id, "parking_request_id": request_id, "spot": request.parking_spot},
        )
        return request

    async def deny(
        self,
        company_id: int,
        request_id: int,
        denied_by: str | None = None,
    ) -> ParkingRequest:
        """Deny a pending request."""
        request = await self.get_request(company_id, request_id)
        if request.status != "pending":
            raise InvalidTransitionError("parking_request", request.status, "denied")

        request = await self.parking_repo.update(
            company_id,
            request_id,
            status="denied",
            approved_by=denied_by or "Front Desk",
            approved_at=datetime.utcnow(),
        )
        logger.info(
            "Parking request denied",
            extra={"company_id": company_id, "parking_request_id": request_id},
        )
        return request

"""Amenity booking service."""

import logging
from datetime import date, datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.timezones import local_day_bounds, to_naive_utc
from app.domain.errors import EntityNotFoundError, EntityValidationError
from app.domain.models.snapshots import ContactSnapshot
from app.domain.validation import validate_booking
from app.persistence.models.booking import Booking
from app.persistence.repositories.base import to_dict
from app.persistence.repositories.booking_repository import BookingRepository
from app.persistence.repositories.resident_repository import ResidentRepository

logger = logging.getLogger(__name__)

BOOKING_FIELDS = (
    "title",
    "amenity_id",
    "resident_id",
    "start_date",
    "end_date",
    "contact_info",
    "status",
    "notes",
)
BOOKING_STATUSES = ("confirmed", "pending", "cancelled")


class BookingService:
    """Service for amenity bookings."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.booking_repo = BookingRepository(session)
        self.resident_repo = ResidentRepository(session)

    async def create_booking(
        self,
        company_id: int,
        data: dict[str, Any],
        now: datetime | None = None,
    ) -> Booking:
        """Validate and create a booking.

        The contact snapshot is taken from the request, or from the resident
        when only ``resident_id`` is given. Status defaults to ``confirmed``.

        Raises:
            EntityValidationError: On missing fields, end before start, or a
                start in the past
        """
        values = {key: data.get(key) for key in BOOKING_FIELDS}
        values["status"] = values["status"] or "confirmed"
        for key in ("start_date", "end_date"):
            if values[key] is not None:
                values[key] = to_naive_utc(values[key])

        if values["resident_id"] is not None and not values["contact_info"]:
            resident = await self.resident_repo.get_by_id(company_id, values["resident_id"])
            if resident is None:
                raise EntityValidationError({"resident_id": "Resident not found"})
            values["contact_info"] = ContactSnapshot(
                name=resident.name, phone=resident.phone, email=resident.email
            ).model_dump()

        errors = validate_booking(values, now=now or datetime.utcnow())
        if values["status"] not in BOOKING_STATUSES:
            errors["status"] = f"Status must be one of: {', '.join(BOOKING_STATUSES)}"
        if errors:
            raise EntityValidationError(errors)

        booking = await self.booking_repo.create(company_id, **values)
        logger.info(
            "Booking created",
            extra={"company_id": company_id, "booking_id": booking.id, "amenity_id": booking.amenity_id},
        )
        return booking

    async def list_bookings(
        self,
        company_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Booking]:
        return await self.booking_repo.list_by_company(
            company_id,
            start=to_naive_utc(start) if start else None,
            end=to_naive_utc(end) if end else None,
        )

    async def list_for_day(self, company_id: int, day: date, timezone_str: str | None) -> list[Booking]:
        """Bookings starting on a local calendar day."""
        day_start, day_end = local_day_bounds(day, timezone_str)
        return await self.booking_repo.query(
            company_id,
            Booking.start_date >= day_start,
            Booking.start_date < day_end,
            order_by=Booking.start_date,
        )

    async def get_booking(self, company_id: int, booking_id: int) -> Booking:
        booking = await self.booking_repo.get_by_id(company_id, booking_id)
        if booking is None:
            raise EntityNotFoundError("booking", booking_id)
        return booking

    async def update_booking(
        self, company_id: int, booking_id: int, data: dict[str, Any]
    ) -> Booking:
        """Apply a partial update; end must still follow start."""
        booking = await self.get_booking(company_id, booking_id)
        updates = {key: value for key, value in data.items() if key in BOOKING_FIELDS}
        for key in ("start_date", "end_date"):
            if updates.get(key) is not None:
                updates[key] = to_naive_utc(updates[key])

        errors = validate_booking({**to_dict(booking), **updates})
        if updates.get("status") is not None and updates["status"] not in BOOKING_STATUSES:
            errors["status"] = f"Status must be one of: {', '.join(BOOKING_STATUSES)}"
        if errors:
            raise EntityValidationError(errors)

        return await self.booking_repo.update(company_id, booking_id, **updates)

    async def cancel_booking(self, company_id: int, booking_id: int) -> Booking:
        await self.get_booking(company_id, booking_id)
        booking = await self.booking_repo.update(company_id, booking_id, status="cancelled")
        logger.info("Booking cancelled", extra={"company_id": company_id, "booking_id": booking_id})
        return booking

"""Package center service: logging, pickup, exceptions, search and reports."""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.timezones import to_naive_utc
from app.domain import analytics
from app.domain.errors import EntityNotFoundError, EntityValidationError, InvalidTransitionError
from app.domain.models.snapshots import ResidentSnapshot
from app.domain.services.company_service import load_company_settings
from app.domain.validation import PACKAGE_EXCEPTION_STATUSES, validate_package
from app.persistence.models.package import Package
from app.persistence.repositories.base import to_dict
from app.persistence.repositories.package_repository import PackageRepository
from app.persistence.repositories.resident_repository import ResidentRepository

logger = logging.getLogger(__name__)

PACKAGE_FIELDS = (
    "resident_id",
    "resident_name",
    "unit_number",
    "recipient_email",
    "recipient_phone",
    "courier",
    "tracking_number",
    "package_type",
    "size",
    "description",
    "delivered_at",
    "received_by",
    "notes",
)
SEARCH_FIELDS = (
    "resident_name",
    "unit_number",
    "courier",
    "tracking_number",
    "description",
    "recipient_email",
    "recipient_phone",
)


class PackageService:
    """Service for packages held at the front desk."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.package_repo = PackageRepository(session)
        self.resident_repo = ResidentRepository(session)

    async def create_package(
        self,
        company_id: int,
        data: dict[str, Any],
        now: datetime | None = None,
    ) -> Package:
        """Log a package as ``pending`` and not yet notified.

        When ``resident_id`` is given, the resident's name, unit, email and
        phone are copied onto the package for any field the request left out.

        Raises:
            EntityValidationError: On missing fields or a delivery time in
                the future
        """
        values = {key: data.get(key) for key in PACKAGE_FIELDS}

        if values["resident_id"] is not None:
            resident = await self.resident_repo.get_by_id(company_id, values["resident_id"])
            if resident is None:
                raise EntityValidationError({"resident_id": "Resident not found"})
            for key, value in ResidentSnapshot.from_resident(resident).package_fields().items():
                if values.get(key) in (None, ""):
                    values[key] = value

        if values["delivered_at"] is not None:
            values["delivered_at"] = to_naive_utc(values["delivered_at"])
        values["package_type"] = values["package_type"] or "Box"
        values["size"] = values["size"] or "Medium"
        values["received_by"] = values["received_by"] or "Front Desk"

        errors = validate_package(values, now=now)
        if errors:
            raise EntityValidationError(errors)

        package = await self.package_repo.create(
            company_id,
            status="pending",
            notification_sent=False,
            **values,
        )
        logger.info(
            "Package logged",
            extra={"company_id": company_id, "package_id": package.id, "courier": package.courier},
        )
        return package

    async def list_packages(
        self,
        company_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Package]:
        return await self.package_repo.list_by_company(
            company_id,
            start=to_naive_utc(start) if start else None,
            end=to_naive_utc(end) if end else None,
        )

    async def get_package(self, company_id: int, package_id: int) -> Package:
        package = await self.package_repo.get_by_id(company_id, package_id)
        if package is None:
            raise EntityNotFoundError("package", package_id)
        return package

    async def update_package(
        self, company_id: int, package_id: int, data: dict[str, Any]
    ) -> Package:
        """Edit package details; status changes go through pickup/exception."""
        package = await self.get_package(company_id, package_id)
        updates = {key: value for key, value in data.items() if key in PACKAGE_FIELDS}
        if updates.get("delivered_at") is not None:
            updates["delivered_at"] = to_naive_utc(updates["delivered_at"])

        errors = validate_package({**to_dict(package), **updates})
        if errors:
            raise EntityValidationError(errors)

        return await self.package_repo.update(company_id, package_id, **updates)

    async def delete_package(self, company_id: int, package_id: int) -> None:
        if not await self.package_repo.delete(company_id, package_id):
            raise EntityNotFoundError("package", package_id)

    async def mark_picked_up(
        self,
        company_id: int,
        package_id: int,
        pickup_by: str | None = None,
        notes: str | None = None,
        verification_method: str | None = None,
    ) -> Package:
        """Record pickup of a pending package.

        Raises:
            InvalidTransitionError: If the package is not pending
        """
        package = await self.get_package(company_id, package_id)
        if package.status != "pending":
            raise InvalidTransitionError("package", package.status, "picked_up")

        package = await self.package_repo.update(
            company_id,
            package_id,
            status="picked_up",
            pickup_by=pickup_by or "Resident",
            picked_up_at=datetime.utcnow(),
            pickup_notes=notes,
            verification_method=verification_method,
        )
        logger.info("Package picked up", extra={"company_id": company_id, "package_id": package_id})
        return package

    async def mark_many_picked_up(
        self,
        company_id: int,
        package_ids: list[int],
        pickup_by: str | None = None,
        notes: str | None = None,
        verification_method: str | None = None,
    ) -> int:
        """Record pickup of several packages; returns how many changed.

        Unknown IDs and packages that are no longer pending are skipped.
        """
        count = 0
        for package in await self.package_repo.get_many(company_id, package_ids):
            if package.status != "pending":
                continue
            await self.package_repo.update(
                company_id,
                package.id,
                status="picked_up",
                pickup_by=pickup_by or "Resident",
                picked_up_at=datetime.utcnow(),
                pickup_notes=notes,
                verification_method=verification_method,
            )
            count += 1
        return count

    async def mark_exception(
        self,
        company_id: int,
        package_id: int,
        status: str,
        notes: str | None = None,
    ) -> Package:
        """Move a pending package to returned, damaged or lost."""
        if status not in PACKAGE_EXCEPTION_STATUSES:
            raise EntityValidationError(
                {"status": f"Status must be one of: {', '.join(PACKAGE_EXCEPTION_STATUSES)}"}
            )
        package = await self.get_package(company_id, package_id)
        if package.status != "pending":
            raise InvalidTransitionError("package", package.status, status)

        updates: dict[str, Any] = {"status": status}
        if notes:
            updates["notes"] = notes
        return await self.package_repo.update(company_id, package_id, **updates)

    async def search(self, company_id: int, term: str) -> list[Package]:
        """Case-insensitive substring search over recipient and package fields."""
        needle = (term or "").strip().lower()
        packages = await self.package_repo.list_by_company(company_id)
        if not needle:
            return packages
        return [
            package
            for package in packages
            if any(needle in (getattr(package, field) or "").lower() for field in SEARCH_FIELDS)
        ]

    async def get_stats(
        self,
        company_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> dict[str, Any]:
        packages = await self.list_packages(company_id, start, end)
        return analytics.package_stats(packages)

    async def generate_report(
        self, company_id: int, start: datetime, end: datetime
    ) -> dict[str, Any]:
        """Summary, package list and insights for a date range."""
        start = to_naive_utc(start)
        end = to_naive_utc(end)
        if end <= start:
            raise EntityValidationError({"end": "End must be after start"})
        company_settings = await load_company_settings(self.session, company_id)
        packages = await self.package_repo.list_by_company(company_id, start=start, end=end)
        return analytics.package_report(packages, start, end, company_settings.timezone)

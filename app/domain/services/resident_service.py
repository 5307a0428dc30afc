"""Resident service."""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.errors import EntityNotFoundError, EntityValidationError
from app.domain.validation import validate_resident
from app.persistence.models.resident import Resident
from app.persistence.repositories.base import to_dict
from app.persistence.repositories.resident_repository import ResidentRepository

logger = logging.getLogger(__name__)

RESIDENT_FIELDS = ("name", "unit_number", "email", "phone", "emergency_contact", "notes")


class ResidentService:
    """Service for resident records."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.resident_repo = ResidentRepository(session)

    async def create_resident(self, company_id: int, data: dict[str, Any]) -> Resident:
        """Validate and create a resident.

        Raises:
            EntityValidationError: If required fields are missing or malformed
        """
        values = {key: data.get(key) for key in RESIDENT_FIELDS}
        errors = validate_resident(values)
        if errors:
            raise EntityValidationError(errors)

        resident = await self.resident_repo.create(company_id, **values)
        logger.info(
            "Resident created",
            extra={"company_id": company_id, "resident_id": resident.id},
        )
        return resident

    async def list_residents(self, company_id: int) -> list[Resident]:
        return await self.resident_repo.list_by_company(company_id)

    async def get_resident(self, company_id: int, resident_id: int) -> Resident:
        resident = await self.resident_repo.get_by_id(company_id, resident_id)
        if resident is None:
            raise EntityNotFoundError("resident", resident_id)
        return resident

    async def update_resident(
        self, company_id: int, resident_id: int, data: dict[str, Any]
    ) -> Resident:
        """Apply a partial update; the merged record must still validate.

        Snapshots already copied onto packages, bookings and messages are
        not touched.
        """
        resident = await self.get_resident(company_id, resident_id)
        updates = {key: value for key, value in data.items() if key in RESIDENT_FIELDS}

        errors = validate_resident({**to_dict(resident), **updates})
        if errors:
            raise EntityValidationError(errors)

        return await self.resident_repo.update(company_id, resident_id, **updates)

    async def delete_resident(self, company_id: int, resident_id: int) -> None:
        if not await self.resident_repo.delete(company_id, resident_id):
            raise EntityNotFoundError("resident", resident_id)
        logger.info(
            "Resident deleted",
            extra={"company_id": company_id, "resident_id": resident_id},
        )

"""Resident repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.persistence.models.resident import Resident
from app.persistence.repositories.base import BaseRepository


class ResidentRepository(BaseRepository[Resident]):
    """Repository for Resident entities."""

    def __init__(self, session: AsyncSession):
        """Initialize resident repository."""
        super().__init__(Resident, session)

    async def list_by_company(self, company_id: int) -> list[Resident]:
        """List residents of a company ordered by name."""
        stmt = (
            select(Resident)
            .where(Resident.company_id == company_id)
            .order_by(Resident.name, Resident.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_phone(self, company_id: int, phone: str) -> Resident | None:
        """Get the resident whose phone equals the given string exactly.

        Phone numbers are assumed unique within a company; if duplicates
        exist the earliest created resident wins.

        Args:
            company_id: Company ID
            phone: Phone number, compared as a literal string

        Returns:
            Resident or None if not found
        """
        stmt = (
            select(Resident)
            .where(
                Resident.company_id == company_id,
                Resident.phone == phone,
            )
            .order_by(Resident.created_at, Resident.id)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

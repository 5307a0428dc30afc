"""Package repository."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.persistence.models.package import Package
from app.persistence.repositories.base import BaseRepository


class PackageRepository(BaseRepository[Package]):
    """Repository for Package entities."""

    def __init__(self, session: AsyncSession):
        """Initialize package repository."""
        super().__init__(Package, session)

    async def list_by_company(
        self,
        company_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Package]:
        """List packages of a company, newest first.

        Args:
            company_id: Company ID
            start: Only packages logged at or after this time
            end: Only packages logged at or before this time

        Returns:
            List of packages
        """
        stmt = select(Package).where(Package.company_id == company_id)
        if start is not None:
            stmt = stmt.where(Package.created_at >= start)
        if end is not None:
            stmt = stmt.where(Package.created_at <= end)
        stmt = stmt.order_by(Package.created_at.desc(), Package.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_many(self, company_id: int, ids: list[int]) -> list[Package]:
        """Get several packages by ID; unknown IDs are skipped."""
        if not ids:
            return []
        stmt = select(Package).where(
            Package.company_id == company_id,
            Package.id.in_(ids),
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

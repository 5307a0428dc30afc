"""Visitor and parking request repositories."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.persistence.models.visitor import ParkingRequest, Visitor
from app.persistence.repositories.base import BaseRepository


class VisitorRepository(BaseRepository[Visitor]):
    """Repository for Visitor entities."""

    def __init__(self, session: AsyncSession):
        """Initialize visitor repository."""
        super().__init__(Visitor, session)

    async def list_by_company(
        self,
        company_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Visitor]:
        """List visitors, optionally filtered by expected arrival window."""
        stmt = select(Visitor).where(Visitor.company_id == company_id)
        if start is not None:
            stmt = stmt.where(Visitor.expected_arrival >= start)
        if end is not None:
            stmt = stmt.where(Visitor.expected_arrival <= end)
        stmt = stmt.order_by(Visitor.expected_arrival, Visitor.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_checked_in_between(
        self, company_id: int, start: datetime, end: datetime
    ) -> list[Visitor]:
        """List visitors currently checked in whose arrival falls in [start, end)."""
        stmt = (
            select(Visitor)
            .where(
                Visitor.company_id == company_id,
                Visitor.status == "checked_in",
                Visitor.actual_arrival >= start,
                Visitor.actual_arrival < end,
            )
            .order_by(Visitor.actual_arrival)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class ParkingRequestRepository(BaseRepository[ParkingRequest]):
    """Repository for ParkingRequest entities."""

    def __init__(self, session: AsyncSession):
        """Initialize parking request repository."""
        super().__init__(ParkingRequest, session)

    async def list_by_company(
        self,
        company_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[ParkingRequest]:
        """List parking requests, optionally filtered by requested date."""
        stmt = select(ParkingRequest).where(ParkingRequest.company_id == company_id)
        if start is not None:
            stmt = stmt.where(ParkingRequest.requested_date >= start)
        if end is not None:
            stmt = stmt.where(ParkingRequest.requested_date <= end)
        stmt = stmt.order_by(ParkingRequest.requested_date, ParkingRequest.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_pending(self, company_id: int) -> list[ParkingRequest]:
        """List parking requests still awaiting a decision."""
        return await self.list(
            company_id, order_by=ParkingRequest.requested_date, status="pending"
        )

"""Booking repository."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.persistence.models.booking import Booking
from app.persistence.repositories.base import BaseRepository


class BookingRepository(BaseRepository[Booking]):
    """Repository for Booking entities."""

    def __init__(self, session: AsyncSession):
        """Initialize booking repository."""
        super().__init__(Booking, session)

    async def list_by_company(
        self,
        company_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Booking]:
        """List bookings of a company, optionally within a date window.

        Args:
            company_id: Company ID
            start: Only bookings starting at or after this time
            end: Only bookings ending at or before this time

        Returns:
            Bookings ordered by start date
        """
        stmt = select(Booking).where(Booking.company_id == company_id)
        if start is not None:
            stmt = stmt.where(Booking.start_date >= start)
        if end is not None:
            stmt = stmt.where(Booking.end_date <= end)
        stmt = stmt.order_by(Booking.start_date, Booking.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

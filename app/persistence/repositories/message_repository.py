"""Message and call log repositories."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.persistence.models.message import CallLog, Message
from app.persistence.repositories.base import BaseRepository


class MessageRepository(BaseRepository[Message]):
    """Repository for Message entities."""

    def __init__(self, session: AsyncSession):
        """Initialize message repository."""
        super().__init__(Message, session)

    async def list_by_company(
        self,
        company_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Message]:
        """List messages of a company ordered by timestamp.

        Args:
            company_id: Company ID
            start: Only messages at or after this time
            end: Only messages at or before this time

        Returns:
            List of messages
        """
        stmt = select(Message).where(Message.company_id == company_id)
        if start is not None:
            stmt = stmt.where(Message.timestamp >= start)
        if end is not None:
            stmt = stmt.where(Message.timestamp <= end)
        stmt = stmt.order_by(Message.timestamp, Message.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_thread(self, company_id: int, phone_number: str) -> list[Message]:
        """Get the conversation with one phone number, oldest first."""
        stmt = (
            select(Message)
            .where(
                Message.company_id == company_id,
                Message.phone_number == phone_number,
            )
            .order_by(Message.timestamp, Message.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_unread_incoming(
        self, company_id: int, phone_number: str | None = None
    ) -> list[Message]:
        """List unread incoming messages, optionally for one phone number."""
        stmt = select(Message).where(
            Message.company_id == company_id,
            Message.is_read.is_(False),
            Message.direction == "incoming",
        )
        if phone_number:
            stmt = stmt.where(Message.phone_number == phone_number)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class CallLogRepository(BaseRepository[CallLog]):
    """Repository for CallLog entities."""

    def __init__(self, session: AsyncSession):
        """Initialize call log repository."""
        super().__init__(CallLog, session)

    async def list_by_company(
        self,
        company_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[CallLog]:
        """List call logs of a company, newest first."""
        stmt = select(CallLog).where(CallLog.company_id == company_id)
        if start is not None:
            stmt = stmt.where(CallLog.timestamp >= start)
        if end is not None:
            stmt = stmt.where(CallLog.timestamp <= end)
        stmt = stmt.order_by(CallLog.timestamp.desc(), CallLog.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

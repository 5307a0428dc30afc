"""Issue and activity log repositories."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.persistence.models.issue import ActivityLog, Issue
from app.persistence.repositories.base import BaseRepository


class IssueRepository(BaseRepository[Issue]):
    """Repository for Issue entities."""

    def __init__(self, session: AsyncSession):
        """Initialize issue repository."""
        super().__init__(Issue, session)

    async def list_by_company(self, company_id: int) -> list[Issue]:
        """List issues of a company, newest first."""
        return await self.list(company_id, order_by=Issue.created_at.desc())


class ActivityLogRepository(BaseRepository[ActivityLog]):
    """Repository for ActivityLog entities."""

    def __init__(self, session: AsyncSession):
        """Initialize activity log repository."""
        super().__init__(ActivityLog, session)

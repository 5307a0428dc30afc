"""Dashboard counters and highlights."""

from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain import analytics
from app.domain.services.company_service import load_company_settings
from app.persistence.repositories.booking_repository import BookingRepository
from app.persistence.repositories.issue_repository import IssueRepository
from app.persistence.repositories.message_repository import CallLogRepository, MessageRepository
from app.persistence.repositories.package_repository import PackageRepository
from app.persistence.repositories.resident_repository import ResidentRepository
from app.persistence.repositories.visitor_repository import VisitorRepository


class DashboardService:
    """Loads every collection of a company and derives the dashboard from it.

    Nothing is cached; each call recomputes from a fresh read.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _load(self, company_id: int) -> dict[str, list[Any]]:
        return {
            "residents": await ResidentRepository(self.session).list_by_company(company_id),
            "bookings": await BookingRepository(self.session).list_by_company(company_id),
            "packages": await PackageRepository(self.session).list_by_company(company_id),
            "messages": await MessageRepository(self.session).list_by_company(company_id),
            "calls": await CallLogRepository(self.session).list_by_company(company_id),
            "issues": await IssueRepository(self.session).list_by_company(company_id),
            "visitors": await VisitorRepository(self.session).list_by_company(company_id),
        }

    async def get_stats(self, company_id: int, now: datetime | None = None) -> dict[str, Any]:
        """Dashboard counters for the company's current local day."""
        company_settings = await load_company_settings(self.session, company_id)
        collections = await self._load(company_id)
        return analytics.dashboard_stats(
            **collections, timezone_str=company_settings.timezone, now=now
        )

    async def get_overview(self, company_id: int, now: datetime | None = None) -> dict[str, Any]:
        """Counters plus the short lists shown beside them."""
        company_settings = await load_company_settings(self.session, company_id)
        collections = await self._load(company_id)
        stats = analytics.dashboard_stats(
            **collections, timezone_str=company_settings.timezone, now=now
        )
        highlights = analytics.dashboard_highlights(
            bookings=collections["bookings"],
            packages=collections["packages"],
            messages=collections["messages"],
            issues=collections["issues"],
            visitors=collections["visitors"],
            timezone_str=company_settings.timezone,
            now=now,
        )
        return {"stats": stats, **highlights}

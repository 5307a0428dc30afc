"""Dashboard endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SessionContext, get_session_context
from app.api.schemas.bookings import BookingResponse
from app.api.schemas.dashboard import DashboardResponse, DashboardStatsResponse
from app.api.schemas.issues import IssueResponse
from app.api.schemas.messages import MessageResponse
from app.api.schemas.packages import PackageResponse
from app.api.schemas.visitors import VisitorResponse
from app.domain.services.dashboard_service import DashboardService
from app.persistence.database import get_db

router = APIRouter()


@router.get("/stats", response_model=DashboardStatsResponse)
async def dashboard_stats(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DashboardStatsResponse:
    """Dashboard counters, recomputed on every call."""
    stats = await DashboardService(db).get_stats(session.company_id)
    return DashboardStatsResponse.model_validate(stats)


@router.get("", response_model=DashboardResponse)
async def dashboard_overview(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DashboardResponse:
    """Counters plus today's bookings and visitors and the latest packages, messages and issues."""
    overview = await DashboardService(db).get_overview(session.company_id)
    return DashboardResponse(
        stats=DashboardStatsResponse.model_validate(overview["stats"]),
        todays_bookings=[BookingResponse.model_validate(b) for b in overview["todays_bookings"]],
        recent_packages=[PackageResponse.model_validate(p) for p in overview["recent_packages"]],
        recent_messages=[MessageResponse.model_validate(m) for m in overview["recent_messages"]],
        recent_issues=[IssueResponse.model_validate(i) for i in overview["recent_issues"]],
        todays_visitors=[VisitorResponse.model_validate(v) for v in overview["todays_visitors"]],
    )

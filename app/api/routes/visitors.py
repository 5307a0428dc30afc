"""Visitor API endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SessionContext, get_session_context
from app.api.schemas.visitors import CheckInRequest, VisitorCreate, VisitorResponse, VisitorUpdate
from app.domain.services.visitor_service import VisitorService
from app.persistence.database import get_db

router = APIRouter()


@router.get("", response_model=list[VisitorResponse])
async def list_visitors(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    start: datetime | None = Query(None, description="Expected arrival at or after"),
    end: datetime | None = Query(None, description="Expected arrival before"),
) -> list[VisitorResponse]:
    visitors = await VisitorService(db).list_visitors(session.company_id, start, end)
    return [VisitorResponse.model_validate(v) for v in visitors]


@router.post("", response_model=VisitorResponse, status_code=status.HTTP_201_CREATED)
async def create_visitor(
    payload: VisitorCreate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VisitorResponse:
    """Pre-register a visitor."""
    visitor = await VisitorService(db).create_visitor(session.company_id, payload.model_dump())
    return VisitorResponse.model_validate(visitor)


@router.get("/checked-in-today", response_model=list[VisitorResponse])
async def checked_in_today(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[VisitorResponse]:
    """Visitors currently on site who arrived today."""
    visitors = await VisitorService(db).list_checked_in_today(session.company_id)
    return [VisitorResponse.model_validate(v) for v in visitors]


@router.get("/{visitor_id}", response_model=VisitorResponse)
async def get_visitor(
    visitor_id: int,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VisitorResponse:
    visitor = await VisitorService(db).get_visitor(session.company_id, visitor_id)
    return VisitorResponse.model_validate(visitor)


@router.patch("/{visitor_id}", response_model=VisitorResponse)
async def update_visitor(
    visitor_id: int,
    payload: VisitorUpdate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VisitorResponse:
    visitor = await VisitorService(db).update_visitor(
        session.company_id, visitor_id, payload.model_dump(exclude_unset=True)
    )
    return VisitorResponse.model_validate(visitor)


@router.delete("/{visitor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_visitor(
    visitor_id: int,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    await VisitorService(db).delete_visitor(session.company_id, visitor_id)


@router.post("/{visitor_id}/check-in", response_model=VisitorResponse)
async def check_in_visitor(
    visitor_id: int,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    payload: CheckInRequest | None = None,
) -> VisitorResponse:
    visitor = await VisitorService(db).check_in(
        session.company_id,
        visitor_id,
        checked_in_by=payload.checked_in_by if payload else None,
    )
    return VisitorResponse.model_validate(visitor)


@router.post("/{visitor_id}/check-out", response_model=VisitorResponse)
async def check_out_visitor(
    visitor_id: int,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VisitorResponse:
    visitor = await VisitorService(db).check_out(session.company_id, visitor_id)
    return VisitorResponse.model_validate(visitor)


@router.post("/{visitor_id}/no-show", response_model=VisitorResponse)
async def mark_no_show(
    visitor_id: int,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VisitorResponse:
    visitor = await VisitorService(db).mark_no_show(session.company_id, visitor_id)
    return VisitorResponse.model_validate(visitor)

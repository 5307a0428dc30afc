"""Call log API endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SessionContext, get_session_context
from app.api.schemas.messages import CallCreate, CallResponse, CallStatsResponse, CallUpdate
from app.domain.services.message_service import MessageService
from app.persistence.database import get_db

router = APIRouter()


@router.get("", response_model=list[CallResponse])
async def list_calls(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
) -> list[CallResponse]:
    """List call logs, newest first."""
    calls = await MessageService(db).list_calls(session.company_id, start, end)
    return [CallResponse.model_validate(c) for c in calls]


@router.post("", response_model=CallResponse, status_code=status.HTTP_201_CREATED)
async def create_call(
    payload: CallCreate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CallResponse:
    call = await MessageService(db).create_call_log(session.company_id, payload.model_dump())
    return CallResponse.model_validate(call)


@router.get("/stats", response_model=CallStatsResponse)
async def call_stats(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
) -> CallStatsResponse:
    stats = await MessageService(db).get_call_stats(session.company_id, start, end)
    return CallStatsResponse.model_validate(stats)


@router.patch("/{call_id}", response_model=CallResponse)
async def update_call(
    call_id: int,
    payload: CallUpdate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CallResponse:
    call = await MessageService(db).update_call(
        session.company_id, call_id, payload.model_dump(exclude_unset=True)
    )
    return CallResponse.model_validate(call)

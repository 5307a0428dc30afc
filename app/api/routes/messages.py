"""Message center API endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SessionContext, get_channel_factory, get_session_context
from app.api.schemas.messages import (
    CallResponse,
    MarkAllReadRequest,
    MarkAllReadResponse,
    MessageCreate,
    MessageResponse,
    MessageStatsResponse,
    ReplyRequest,
    SearchResponse,
)
from app.domain.services.message_service import MessageService
from app.infrastructure.channels.factory import ChannelFactory
from app.persistence.database import get_db

router = APIRouter()


@router.get("", response_model=list[MessageResponse])
async def list_messages(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
) -> list[MessageResponse]:
    """List messages in timestamp order."""
    messages = await MessageService(db).list_messages(session.company_id, start, end)
    return [MessageResponse.model_validate(m) for m in messages]


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_message(
    payload: MessageCreate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """Store a message; the resident is attached when the number matches one."""
    message = await MessageService(db).create_message(session.company_id, payload.model_dump())
    return MessageResponse.model_validate(message)


@router.get("/search", response_model=SearchResponse)
async def search_messages(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    q: str = Query("", description="Search term"),
) -> SearchResponse:
    """Search messages and call logs."""
    found = await MessageService(db).search(session.company_id, q)
    return SearchResponse(
        messages=[MessageResponse.model_validate(m) for m in found["messages"]],
        calls=[CallResponse.model_validate(c) for c in found["calls"]],
        total=found["total"],
    )


@router.get("/stats", response_model=MessageStatsResponse)
async def message_stats(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
) -> MessageStatsResponse:
    stats = await MessageService(db).get_message_stats(session.company_id, start, end)
    return MessageStatsResponse.model_validate(stats)


@router.get("/thread/{phone_number}", response_model=list[MessageResponse])
async def get_thread(
    phone_number: str,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[MessageResponse]:
    """Conversation with one phone number, oldest first."""
    messages = await MessageService(db).get_thread(session.company_id, phone_number)
    return [MessageResponse.model_validate(m) for m in messages]


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    payload: MarkAllReadRequest | None = None,
) -> MarkAllReadResponse:
    """Mark unread incoming messages read, for one number or all of them."""
    updated = await MessageService(db).mark_all_read(
        session.company_id, payload.phone_number if payload else None
    )
    return MarkAllReadResponse(updated=updated)


@router.post("/reply", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_reply(
    payload: ReplyRequest,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    channel_factory: Annotated[ChannelFactory, Depends(get_channel_factory)],
) -> MessageResponse:
    """Send an SMS and log it as outgoing."""
    message = await MessageService(db, channel_factory).send_reply(
        session.company_id,
        payload.phone_number,
        payload.content,
        sent_by=session.email,
        reply_to=payload.reply_to,
    )
    return MessageResponse.model_validate(message)


@router.post("/{message_id}/read", response_model=MessageResponse)
async def mark_read(
    message_id: int,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    message = await MessageService(db).mark_read(session.company_id, message_id)
    return MessageResponse.model_validate(message)

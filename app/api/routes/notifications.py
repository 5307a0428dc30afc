"""Notification template, preview and dispatch endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SessionContext, get_channel_factory, get_session_context
from app.api.schemas.notifications import (
    DispatchManyRequest,
    DispatchManyResponse,
    DispatchRequest,
    DispatchResponse,
    EntityRefSchema,
    PreviewRequest,
    PreviewResponse,
    RecipientSchema,
    TemplateResponse,
)
from app.domain.errors import NotificationError
from app.domain.models.snapshots import ContactSnapshot
from app.domain.notifications import list_templates
from app.domain.services.notification_dispatcher import (
    DispatchResult,
    EntityRef,
    NotificationDispatcher,
)
from app.infrastructure.channels.factory import ChannelFactory
from app.persistence.database import get_db

router = APIRouter()


def _recipient(recipient: RecipientSchema | None) -> ContactSnapshot | None:
    if recipient is None:
        return None
    return ContactSnapshot(**recipient.model_dump())


def _ref(entity: EntityRefSchema | None) -> EntityRef | None:
    if entity is None:
        return None
    return EntityRef(kind=entity.kind, id=entity.id)


def _result_response(result: DispatchResult) -> DispatchResponse:
    return DispatchResponse(
        success=result.success,
        entity=EntityRefSchema(kind=result.ref.kind, id=result.ref.id) if result.ref else None,
        channel=result.channel,
        to=result.to,
        content=result.content,
        message_id=result.message_id,
        error=result.error,
    )


@router.get("/templates", response_model=list[TemplateResponse])
async def get_templates(
    session: Annotated[SessionContext, Depends(get_session_context)],
) -> list[TemplateResponse]:
    """List the notification templates."""
    return [TemplateResponse.model_validate(t) for t in list_templates()]


@router.post("/preview", response_model=PreviewResponse)
async def preview_notification(
    payload: PreviewRequest,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    channel_factory: Annotated[ChannelFactory, Depends(get_channel_factory)],
) -> PreviewResponse:
    """Render a notification without sending it."""
    composed = await NotificationDispatcher(db, channel_factory).preview(
        session.company_id,
        payload.template_key,
        payload.channel,
        ref=_ref(payload.entity),
        recipient=_recipient(payload.recipient),
        body=payload.body,
        subject=payload.subject,
    )
    return PreviewResponse(
        template_key=composed.template_key,
        channel=composed.channel,
        to=composed.to,
        recipient_name=composed.recipient_name,
        subject=composed.subject,
        body=composed.body,
    )


@router.post("/dispatch", response_model=DispatchResponse)
async def dispatch_notification(
    payload: DispatchRequest,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    channel_factory: Annotated[ChannelFactory, Depends(get_channel_factory)],
) -> DispatchResponse:
    """Send one notification and record it on the entity.

    A failed send is reported as an error; the entity is left unchanged.
    """
    result = await NotificationDispatcher(db, channel_factory).dispatch(
        session.company_id,
        _ref(payload.entity),
        payload.template_key,
        payload.channel,
        recipient=_recipient(payload.recipient),
        body=payload.body,
        subject=payload.subject,
        sent_by=session.email,
    )
    if not result.success:
        raise NotificationError(result.reason or "channel_error", result.error or "Notification failed")
    return _result_response(result)


@router.post("/dispatch-many", response_model=DispatchManyResponse)
async def dispatch_many_notifications(
    payload: DispatchManyRequest,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    channel_factory: Annotated[ChannelFactory, Depends(get_channel_factory)],
) -> DispatchManyResponse:
    """Send the same template about several entities; failures are reported per entity."""
    bulk = await NotificationDispatcher(db, channel_factory).dispatch_many(
        session.company_id,
        [EntityRef(kind=e.kind, id=e.id) for e in payload.entities],
        payload.template_key,
        payload.channel,
        body=payload.body,
        subject=payload.subject,
        sent_by=session.email,
    )
    return DispatchManyResponse(
        requested=bulk.requested,
        succeeded=bulk.succeeded,
        failed=bulk.failed,
        results=[_result_response(r) for r in bulk.results],
    )

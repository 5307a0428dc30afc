"""Inbound webhooks: Twilio SMS and the AI call-summary provider."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from twilio.request_validator import RequestValidator

from app.api.deps import get_channel_factory
from app.api.schemas.messages import CallWebhookPayload
from app.core.company_context import set_company_context
from app.domain.models.company_settings import CompanySettings
from app.domain.services.message_service import MessageService
from app.infrastructure.channels.factory import ChannelFactory
from app.persistence.database import get_db
from app.persistence.repositories.company_repository import CompanyRepository
from app.settings import settings

logger = logging.getLogger(__name__)

EMPTY_TWIML = '<?xml version="1.0" encoding="UTF-8"?><Response></Response>'

router = APIRouter()


async def _validate_twilio_signature(request: Request, auth_token: str) -> bool:
    """Validate the X-Twilio-Signature header against the form body."""
    signature = request.headers.get("X-Twilio-Signature", "")
    if not signature:
        logger.warning("Missing X-Twilio-Signature header")
        return False

    form_data = await request.form()
    params = {key: form_data[key] for key in form_data}

    validator = RequestValidator(auth_token)
    return validator.validate(str(request.url), params, signature)


def _twilio_auth_token(company_settings: CompanySettings) -> str | None:
    twilio = company_settings.twilio_settings
    if twilio.enabled and twilio.auth_token:
        return twilio.auth_token
    return settings.twilio_auth_token


@router.post("/sms/inbound")
async def inbound_sms_webhook(
    request: Request,
    From: Annotated[str, Form()],  # Twilio sends as Form data
    To: Annotated[str, Form()],
    Body: Annotated[str, Form()],
    MessageSid: Annotated[str, Form()],
    db: Annotated[AsyncSession, Depends(get_db)],
    channel_factory: Annotated[ChannelFactory, Depends(get_channel_factory)],
) -> Response:
    """Handle an inbound SMS from Twilio.

    The company is the one whose Twilio number received the message. The
    message is stored, and the after-hours auto-reply is sent if enabled.

    Returns:
        Empty TwiML response
    """
    company = await CompanyRepository(db).get_by_sms_number(To)
    if company is None:
        logger.warning(f"Could not determine company for phone number: {To}")
        # Return 200 to Twilio even if we can't process
        return Response(content=EMPTY_TWIML, media_type="application/xml")

    set_company_context(company.id)
    company_settings = CompanySettings.from_blob(company.settings)

    # Validate Twilio signature in production
    auth_token = _twilio_auth_token(company_settings)
    if auth_token:
        is_valid = await _validate_twilio_signature(request, auth_token)
        if not is_valid:
            if settings.environment == "production":
                logger.warning(f"Invalid Twilio signature for company {company.id}")
                raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid signature")
            logger.warning(f"Invalid Twilio signature for company {company.id} (ignored in dev)")

    await MessageService(db, channel_factory).handle_inbound_sms(
        company.id, From, Body, external_sid=MessageSid
    )
    logger.info(
        "Inbound SMS stored",
        extra={"company_id": company.id, "message_sid": MessageSid},
    )
    return Response(content=EMPTY_TWIML, media_type="application/xml")


@router.post("/calls")
async def call_summary_webhook(
    payload: CallWebhookPayload,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """Store a call reported by the AI call-summary provider.

    The company is found by the reporting agent ID, or else by the number
    that was called.
    """
    company_repo = CompanyRepository(db)
    company = None
    if payload.agent_id:
        company = await company_repo.get_by_call_agent(payload.agent_id)
    if company is None and payload.to:
        company = await company_repo.get_by_sms_number(payload.to)
    if company is None:
        logger.warning(
            "Could not determine company for call webhook",
            extra={"agent_id": payload.agent_id, "to": payload.to},
        )
        return {"status": "ignored"}

    if not payload.from_:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Caller phone number is required",
        )

    set_company_context(company.id)
    call = await MessageService(db).log_incoming_call(
        company.id, payload.model_dump(by_alias=True)
    )
    return {"status": "stored", "call_id": call.id}

"""Message center schemas: SMS messages and call logs."""

from datetime import datetime

from pydantic import BaseModel, Field


class MessageCreate(BaseModel):
    """Message log request (messages sent or received outside the API)."""

    phone_number: str | None = None
    content: str | None = None
    direction: str | None = None
    type: str = "sms"
    status: str | None = None
    is_read: bool = False
    timestamp: datetime | None = None
    sent_by: str | None = None


class MessageResponse(BaseModel):
    """Message response."""

    id: int
    company_id: int
    phone_number: str
    resident_id: int | None = None
    resident_name: str | None = None
    unit_number: str | None = None
    content: str
    direction: str
    type: str
    status: str | None = None
    is_read: bool
    read_at: datetime | None = None
    timestamp: datetime
    reply_to: int | None = None
    external_sid: str | None = None
    sent_by: str | None = None

    class Config:
        from_attributes = True


class ReplyRequest(BaseModel):
    """Outgoing SMS from the front desk."""

    phone_number: str
    content: str
    reply_to: int | None = None


class MarkAllReadRequest(BaseModel):
    phone_number: str | None = None


class MarkAllReadResponse(BaseModel):
    updated: int


class MessageStatsResponse(BaseModel):
    total: int
    incoming: int
    outgoing: int
    unread: int
    avg_response_time: float


class CallCreate(BaseModel):
    """Manual call log entry."""

    phone_number: str | None = None
    status: str | None = None
    duration: str | None = None
    summary: str | None = None
    ai_summary: str | None = None
    transcription: str | None = None
    timestamp: datetime | None = None


class CallUpdate(BaseModel):
    status: str | None = None
    summary: str | None = None
    is_read: bool | None = None


class CallResponse(BaseModel):
    """Call log response."""

    id: int
    company_id: int
    phone_number: str
    resident_id: int | None = None
    resident_name: str | None = None
    unit_number: str | None = None
    status: str
    duration: str | None = None
    summary: str | None = None
    ai_summary: str | None = None
    transcription: str | None = None
    external_call_id: str | None = None
    is_read: bool
    timestamp: datetime

    class Config:
        from_attributes = True


class CallStatsResponse(BaseModel):
    total: int
    answered: int
    missed: int
    avg_duration: float


class SearchResponse(BaseModel):
    """Messages and calls matching a search term."""

    messages: list[MessageResponse]
    calls: list[CallResponse]
    total: int


class CallWebhookPayload(BaseModel):
    """Call reported by the AI call-summary provider."""

    call_id: str | None = None
    agent_id: str | None = None
    to: str | None = None
    from_: str | None = Field(default=None, alias="from")
    status: str | None = None
    duration: str | int | float | None = None
    timestamp: datetime | None = None
    summary: str | None = None
    ai_summary: str | None = None
    transcription: str | None = None

    class Config:
        populate_by_name = True

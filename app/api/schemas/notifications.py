"""Notification template, preview and dispatch schemas."""

from pydantic import BaseModel


class EntityRefSchema(BaseModel):
    """Entity a notification is about."""

    kind: str  # package, visitor, parking_request, booking
    id: int


class RecipientSchema(BaseModel):
    """Recipient override; defaults to the entity's own contact."""

    name: str | None = None
    phone: str | None = None
    email: str | None = None


class TemplateResponse(BaseModel):
    key: str
    name: str
    sms: str | None = None
    email_subject: str | None = None
    email_body: str | None = None
    custom: bool = False

    class Config:
        from_attributes = True


class PreviewRequest(BaseModel):
    template_key: str
    channel: str
    entity: EntityRefSchema | None = None
    recipient: RecipientSchema | None = None
    body: str | None = None
    subject: str | None = None


class PreviewResponse(BaseModel):
    template_key: str
    channel: str
    to: str | None = None
    recipient_name: str | None = None
    subject: str | None = None
    body: str


class DispatchRequest(BaseModel):
    template_key: str
    channel: str
    entity: EntityRefSchema
    recipient: RecipientSchema | None = None
    body: str | None = None
    subject: str | None = None


class DispatchResponse(BaseModel):
    success: bool
    entity: EntityRefSchema | None = None
    channel: str | None = None
    to: str | None = None
    content: str | None = None
    message_id: str | None = None
    error: str | None = None


class DispatchManyRequest(BaseModel):
    template_key: str
    channel: str
    entities: list[EntityRefSchema]
    body: str | None = None
    subject: str | None = None


class DispatchManyResponse(BaseModel):
    requested: int
    succeeded: int
    failed: int
    results: list[DispatchResponse]

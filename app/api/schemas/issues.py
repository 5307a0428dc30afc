"""Issue schemas."""

from datetime import datetime

from pydantic import BaseModel


class IssueCreate(BaseModel):
    title: str | None = None
    category: str | None = None
    priority: str | None = None
    unit_number: str | None = None
    description: str | None = None


class IssueUpdate(IssueCreate):
    status: str | None = None


class IssueResponse(BaseModel):
    """Issue response."""

    id: int
    company_id: int
    title: str
    category: str | None = None
    priority: str
    status: str
    unit_number: str | None = None
    description: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

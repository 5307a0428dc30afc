"""Complaints and maintenance requests."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.errors import EntityNotFoundError, EntityValidationError
from app.persistence.models.issue import Issue
from app.persistence.repositories.issue_repository import IssueRepository

ISSUE_FIELDS = ("title", "category", "priority", "status", "unit_number", "description")
ISSUE_STATUSES = ("open", "in-progress", "resolved", "closed")
ISSUE_PRIORITIES = ("low", "medium", "high", "urgent")


def _validate_issue(values: dict[str, Any]) -> dict[str, str]:
    errors: dict[str, str] = {}
    if "title" in values and not (values["title"] or "").strip():
        errors["title"] = "Title is required"
    if values.get("status") is not None and values["status"] not in ISSUE_STATUSES:
        errors["status"] = f"Status must be one of: {', '.join(ISSUE_STATUSES)}"
    if values.get("priority") is not None and values["priority"] not in ISSUE_PRIORITIES:
        errors["priority"] = f"Priority must be one of: {', '.join(ISSUE_PRIORITIES)}"
    return errors


class IssueService:
    """Service for issues raised by residents or staff. Issues are closed, never deleted."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.issue_repo = IssueRepository(session)

    async def create_issue(self, company_id: int, data: dict[str, Any]) -> Issue:
        values = {key: data.get(key) for key in ISSUE_FIELDS}
        values["status"] = "open"
        values["priority"] = values["priority"] or "medium"
        errors = _validate_issue(values)
        if errors:
            raise EntityValidationError(errors)
        return await self.issue_repo.create(company_id, **values)

    async def list_issues(self, company_id: int) -> list[Issue]:
        return await self.issue_repo.list_by_company(company_id)

    async def update_issue(self, company_id: int, issue_id: int, data: dict[str, Any]) -> Issue:
        updates = {key: value for key, value in data.items() if key in ISSUE_FIELDS}
        errors = _validate_issue(updates)
        if errors:
            raise EntityValidationError(errors)
        issue = await self.issue_repo.update(company_id, issue_id, **updates)
        if issue is None:
            raise EntityNotFoundError("issue", issue_id)
        return issue

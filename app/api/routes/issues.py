"""Issue API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SessionContext, get_session_context
from app.api.schemas.issues import IssueCreate, IssueResponse, IssueUpdate
from app.domain.services.issue_service import IssueService
from app.persistence.database import get_db

router = APIRouter()


@router.get("", response_model=list[IssueResponse])
async def list_issues(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[IssueResponse]:
    issues = await IssueService(db).list_issues(session.company_id)
    return [IssueResponse.model_validate(i) for i in issues]


@router.post("", response_model=IssueResponse, status_code=status.HTTP_201_CREATED)
async def create_issue(
    payload: IssueCreate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> IssueResponse:
    issue = await IssueService(db).create_issue(session.company_id, payload.model_dump())
    return IssueResponse.model_validate(issue)


@router.patch("/{issue_id}", response_model=IssueResponse)
async def update_issue(
    issue_id: int,
    payload: IssueUpdate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> IssueResponse:
    """Update an issue; issues are closed through status, never deleted."""
    issue = await IssueService(db).update_issue(
        session.company_id, issue_id, payload.model_dump(exclude_unset=True)
    )
    return IssueResponse.model_validate(issue)

"""Company settings and user profile routes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SessionContext, get_session_context
from app.api.schemas.company import CompanyResponse, CompanyUpdate, ProfileResponse, ProfileUpdate
from app.domain.services.company_service import CompanyService
from app.persistence.database import get_db

router = APIRouter()


@router.get("", response_model=CompanyResponse)
async def get_company(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CompanyResponse:
    """Get the signed-in staff member's company."""
    company = await CompanyService(db).get_company(session.company_id)
    return CompanyResponse.model_validate(company)


@router.patch("", response_model=CompanyResponse)
async def update_company(
    payload: CompanyUpdate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CompanyResponse:
    """Update company profile, staff list or settings."""
    company = await CompanyService(db).update_company(
        session.company_id, payload.model_dump(exclude_unset=True)
    )
    return CompanyResponse.model_validate(company)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProfileResponse:
    """Get the signed-in user's profile, creating it on first access."""
    profile = await CompanyService(db).get_profile(session.uid, session.email)
    return ProfileResponse.model_validate(profile)


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    payload: ProfileUpdate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProfileResponse:
    """Update display name, role and preferences."""
    profile = await CompanyService(db).update_profile(
        session.uid, session.email, payload.model_dump(exclude_unset=True)
    )
    return ProfileResponse.model_validate(profile)

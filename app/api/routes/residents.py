"""Resident API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SessionContext, get_session_context
from app.api.schemas.residents import ResidentCreate, ResidentResponse, ResidentUpdate
from app.domain.services.resident_service import ResidentService
from app.persistence.database import get_db

router = APIRouter()


@router.get("", response_model=list[ResidentResponse])
async def list_residents(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[ResidentResponse]:
    """List residents ordered by name."""
    residents = await ResidentService(db).list_residents(session.company_id)
    return [ResidentResponse.model_validate(r) for r in residents]


@router.post("", response_model=ResidentResponse, status_code=status.HTTP_201_CREATED)
async def create_resident(
    payload: ResidentCreate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ResidentResponse:
    resident = await ResidentService(db).create_resident(session.company_id, payload.model_dump())
    return ResidentResponse.model_validate(resident)


@router.get("/{resident_id}", response_model=ResidentResponse)
async def get_resident(
    resident_id: int,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ResidentResponse:
    resident = await ResidentService(db).get_resident(session.company_id, resident_id)
    return ResidentResponse.model_validate(resident)


@router.patch("/{resident_id}", response_model=ResidentResponse)
async def update_resident(
    resident_id: int,
    payload: ResidentUpdate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ResidentResponse:
    resident = await ResidentService(db).update_resident(
        session.company_id, resident_id, payload.model_dump(exclude_unset=True)
    )
    return ResidentResponse.model_validate(resident)


@router.delete("/{resident_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resident(
    resident_id: int,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    await ResidentService(db).delete_resident(session.company_id, resident_id)

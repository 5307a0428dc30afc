"""Visitor parking request API endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SessionContext, get_session_context
from app.api.schemas.visitors import (
    ApproveParkingRequest,
    DenyParkingRequest,
    ParkingRequestCreate,
    ParkingRequestResponse,
    ParkingRequestUpdate,
)
from app.domain.services.visitor_service import ParkingService
from app.persistence.database import get_db

router = APIRouter()


@router.get("", response_model=list[ParkingRequestResponse])
async def list_parking_requests(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
) -> list[ParkingRequestResponse]:
    requests = await ParkingService(db).list_requests(session.company_id, start, end)
    return [ParkingRequestResponse.model_validate(r) for r in requests]


@router.post("", response_model=ParkingRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_parking_request(
    payload: ParkingRequestCreate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ParkingRequestResponse:
    request = await ParkingService(db).create_request(session.company_id, payload.model_dump())
    return ParkingRequestResponse.model_validate(request)


@router.get("/pending", response_model=list[ParkingRequestResponse])
async def list_pending_requests(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[ParkingRequestResponse]:
    """Requests awaiting a decision."""
    requests = await ParkingService(db).list_pending(session.company_id)
    return [ParkingRequestResponse.model_validate(r) for r in requests]


@router.get("/{request_id}", response_model=ParkingRequestResponse)
async def get_parking_request(
    request_id: int,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ParkingRequestResponse:
    request = await ParkingService(db).get_request(session.company_id, request_id)
    return ParkingRequestResponse.model_validate(request)


@router.patch("/{request_id}", response_model=ParkingRequestResponse)
async def update_parking_request(
    request_id: int,
    payload: ParkingRequestUpdate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ParkingRequestResponse:
    request = await ParkingService(db).update_request(
        session.company_id, request_id, payload.model_dump(exclude_unset=True)
    )
    return ParkingRequestResponse.model_validate(request)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_parking_request(
    request_id: int,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    await ParkingService(db).delete_request(session.company_id, request_id)


@router.post("/{request_id}/approve", response_model=ParkingRequestResponse)
async def approve_parking_request(
    request_id: int,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    payload: ApproveParkingRequest | None = None,
) -> ParkingRequestResponse:
    """Approve a pending request, assigning a spot and access code."""
    payload = payload or ApproveParkingRequest()
    request = await ParkingService(db).approve(
        session.company_id,
        request_id,
        approved_by=payload.approved_by or session.email,
        parking_spot=payload.parking_spot,
        access_code=payload.access_code,
    )
    return ParkingRequestResponse.model_validate(request)


@router.post("/{request_id}/deny", response_model=ParkingRequestResponse)
async def deny_parking_request(
    request_id: int,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    payload: DenyParkingRequest | None = None,
) -> ParkingRequestResponse:
    request = await ParkingService(db).deny(
        session.company_id,
        request_id,
        denied_by=(payload.denied_by if payload else None) or session.email,
    )
    return ParkingRequestResponse.model_validate(request)

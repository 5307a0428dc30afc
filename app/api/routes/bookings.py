"""Amenity booking API endpoints."""

from datetime import date, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SessionContext, get_session_context
from app.api.schemas.bookings import BookingCreate, BookingResponse, BookingUpdate
from app.domain.services.booking_service import BookingService
from app.domain.services.company_service import load_company_settings
from app.persistence.database import get_db

router = APIRouter()


@router.get("", response_model=list[BookingResponse])
async def list_bookings(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    start: datetime | None = Query(None, description="Bookings starting at or after"),
    end: datetime | None = Query(None, description="Bookings ending at or before"),
    day: date | None = Query(None, description="Bookings starting on this local day"),
) -> list[BookingResponse]:
    """List bookings, optionally for a date range or a single local day."""
    service = BookingService(db)
    if day is not None:
        company_settings = await load_company_settings(db, session.company_id)
        bookings = await service.list_for_day(session.company_id, day, company_settings.timezone)
    else:
        bookings = await service.list_bookings(session.company_id, start, end)
    return [BookingResponse.model_validate(b) for b in bookings]


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookingResponse:
    booking = await BookingService(db).create_booking(session.company_id, payload.model_dump())
    return BookingResponse.model_validate(booking)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookingResponse:
    booking = await BookingService(db).get_booking(session.company_id, booking_id)
    return BookingResponse.model_validate(booking)


@router.patch("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: int,
    payload: BookingUpdate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookingResponse:
    booking = await BookingService(db).update_booking(
        session.company_id, booking_id, payload.model_dump(exclude_unset=True)
    )
    return BookingResponse.model_validate(booking)


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: int,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BookingResponse:
    """Cancel a booking; bookings are never deleted."""
    booking = await BookingService(db).cancel_booking(session.company_id, booking_id)
    return BookingResponse.model_validate(booking)

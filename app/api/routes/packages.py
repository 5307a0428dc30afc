"""Package center API endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SessionContext, get_session_context
from app.api.schemas.packages import (
    BulkPickupRequest,
    BulkPickupResponse,
    PackageCreate,
    PackageReportResponse,
    PackageResponse,
    PackageStatsResponse,
    PackageStatusRequest,
    PackageUpdate,
    PickupRequest,
)
from app.domain.services.package_service import PackageService
from app.persistence.database import get_db

router = APIRouter()


@router.get("", response_model=list[PackageResponse])
async def list_packages(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
) -> list[PackageResponse]:
    """List packages, newest first."""
    packages = await PackageService(db).list_packages(session.company_id, start, end)
    return [PackageResponse.model_validate(p) for p in packages]


@router.post("", response_model=PackageResponse, status_code=status.HTTP_201_CREATED)
async def create_package(
    payload: PackageCreate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PackageResponse:
    """Log a package received at the front desk."""
    package = await PackageService(db).create_package(session.company_id, payload.model_dump())
    return PackageResponse.model_validate(package)


@router.get("/search", response_model=list[PackageResponse])
async def search_packages(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    q: str = Query("", description="Search term"),
) -> list[PackageResponse]:
    packages = await PackageService(db).search(session.company_id, q)
    return [PackageResponse.model_validate(p) for p in packages]


@router.get("/stats", response_model=PackageStatsResponse)
async def package_stats(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
) -> PackageStatsResponse:
    stats = await PackageService(db).get_stats(session.company_id, start, end)
    return PackageStatsResponse.model_validate(stats)


@router.get("/report", response_model=PackageReportResponse)
async def package_report(
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
    start: datetime = Query(...),
    end: datetime = Query(...),
) -> PackageReportResponse:
    """Summary, packages and insights for a date range."""
    report = await PackageService(db).generate_report(session.company_id, start, end)
    return PackageReportResponse.model_validate(
        {
            **report,
            "packages": [PackageResponse.model_validate(p) for p in report["packages"]],
        }
    )


@router.post("/pickup", response_model=BulkPickupResponse)
async def pickup_many(
    payload: BulkPickupRequest,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BulkPickupResponse:
    """Record pickup of several packages; packages no longer pending are skipped."""
    updated = await PackageService(db).mark_many_picked_up(
        session.company_id,
        payload.package_ids,
        pickup_by=payload.pickup_by,
        notes=payload.notes,
        verification_method=payload.verification_method,
    )
    return BulkPickupResponse(updated=updated)


@router.get("/{package_id}", response_model=PackageResponse)
async def get_package(
    package_id: int,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PackageResponse:
    package = await PackageService(db).get_package(session.company_id, package_id)
    return PackageResponse.model_validate(package)


@router.patch("/{package_id}", response_model=PackageResponse)
async def update_package(
    package_id: int,
    payload: PackageUpdate,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PackageResponse:
    package = await PackageService(db).update_package(
        session.company_id, package_id, payload.model_dump(exclude_unset=True)
    )
    return PackageResponse.model_validate(package)


@router.delete("/{package_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_package(
    package_id: int,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    await PackageService(db).delete_package(session.company_id, package_id)


@router.post("/{package_id}/pickup", response_model=PackageResponse)
async def pickup_package(
    package_id: int,
    payload: PickupRequest,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PackageResponse:
    package = await PackageService(db).mark_picked_up(
        session.company_id,
        package_id,
        pickup_by=payload.pickup_by,
        notes=payload.notes,
        verification_method=payload.verification_method,
    )
    return PackageResponse.model_validate(package)


@router.post("/{package_id}/status", response_model=PackageResponse)
async def set_package_status(
    package_id: int,
    payload: PackageStatusRequest,
    session: Annotated[SessionContext, Depends(get_session_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PackageResponse:
    """Mark a pending package returned, damaged or lost."""
    package = await PackageService(db).mark_exception(
        session.company_id, package_id, payload.status, payload.notes
    )
    return PackageResponse.model_validate(package)

"""API routes."""

from fastapi import APIRouter

from app.api.routes import (
    bookings,
    calls,
    company,
    dashboard,
    issues,
    messages,
    notifications,
    packages,
    parking_requests,
    residents,
    visitors,
    webhooks,
)

api_router = APIRouter()

# Public routes (provider webhooks, no staff auth)
api_router.include_router(webhooks.router, prefix="/webhooks", tags=["webhooks"])

# Protected routes (staff of a company)
api_router.include_router(company.router, prefix="/company", tags=["company"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(residents.router, prefix="/residents", tags=["residents"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(packages.router, prefix="/packages", tags=["packages"])
api_router.include_router(visitors.router, prefix="/visitors", tags=["visitors"])
api_router.include_router(parking_requests.router, prefix="/parking-requests", tags=["parking"])
api_router.include_router(messages.router, prefix="/messages", tags=["messages"])
api_router.include_router(calls.router, prefix="/calls", tags=["calls"])
api_router.include_router(issues.router, prefix="/issues", tags=["issues"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])

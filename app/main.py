"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.middleware import RequestIdMiddleware
from app.api.routes import api_router
from app.domain.errors import (
    EntityNotFoundError,
    EntityValidationError,
    InvalidTransitionError,
    NotificationError,
)
from app.logging_config import setup_logging
from app.persistence.database import engine
from app.settings import settings

# Setup logging
setup_logging()

logger = logging.getLogger(__name__)

NOTIFICATION_ERROR_STATUS = {
    "entity_not_found": status.HTTP_404_NOT_FOUND,
    "template_not_found": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "unsupported_channel": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "missing_content": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "missing_recipient": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "channel_error": status.HTTP_502_BAD_GATEWAY,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Application startup", extra={"environment": settings.environment})
    yield
    # Shutdown
    await engine.dispose()


# Create FastAPI app
app = FastAPI(
    title="Concierge Desk API",
    description="Front desk dashboard backend for property management companies",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request ID middleware
app.add_middleware(RequestIdMiddleware)


@app.exception_handler(EntityValidationError)
async def validation_error_handler(request: Request, exc: EntityValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "Validation failed", "errors": exc.errors},
    )


@app.exception_handler(EntityNotFoundError)
async def not_found_handler(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(InvalidTransitionError)
async def invalid_transition_handler(request: Request, exc: InvalidTransitionError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


@app.exception_handler(NotificationError)
async def notification_error_handler(request: Request, exc: NotificationError) -> JSONResponse:
    return JSONResponse(
        status_code=NOTIFICATION_ERROR_STATUS.get(exc.reason, status.HTTP_400_BAD_REQUEST),
        content={"detail": str(exc), "reason": exc.reason},
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        f"Database error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Something went wrong. Please try again."},
    )


# Include API routes
app.include_router(api_router, prefix=settings.api_v1_prefix)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Concierge Desk API",
        "version": "0.1.0",
        "docs": "/docs",
    }

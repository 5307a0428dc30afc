"""Pytest configuration and fixtures."""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.api.deps import get_channel_factory
from app.core.auth import create_access_token
from app.domain.services.company_service import CompanyService
from app.infrastructure.channels.base import ChannelError, ChannelReceipt, NotificationChannel
from app.persistence.database import Base, get_db
from app.persistence.models import *  # noqa: F401, F403

STAFF_EMAIL = "desk@example.com"
STAFF_UID = "uid-desk"


class RecordingChannel(NotificationChannel):
    """Channel double that records every send.

    Set ``error`` to make sends raise ChannelError, ``delay`` to make them
    hang for that many seconds, or map a recipient in ``failures`` to the
    exception its sends should raise.
    """

    name = "recording"

    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.error: str | None = None
        self.delay: float | None = None
        self.failures: dict[str, Exception] = {}

    async def send(self, to: str, body: str, subject: str | None = None) -> ChannelReceipt:
        if self.delay is not None:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise ChannelError(self.error)
        if to in self.failures:
            raise self.failures[to]
        self.sent.append({"to": to, "body": body, "subject": subject})
        return ChannelReceipt(
            message_id=f"MSG{len(self.sent)}",
            status="sent",
            channel="test",
            to=to,
            provider="test",
        )


class RecordingChannelFactory:
    """Hands out the same recording channel for every channel name."""

    def __init__(self) -> None:
        self.channel = RecordingChannel()
        self.requested: list[str] = []

    def get_channel(self, channel, company_settings):
        self.requested.append(channel)
        return self.channel


@pytest.fixture
async def db_session():
    """Create a test database session."""
    # Use in-memory SQLite for testing
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def company(db_session):
    """Company administered by STAFF_EMAIL, in Toronto time."""
    return await CompanyService(db_session).create_company(
        "Maple Towers",
        staff_emails=[STAFF_EMAIL],
        settings={
            "business_hours": {"start": "09:00", "end": "17:00", "timezone": "America/Toronto"},
            "twilio_settings": {"phone_number": "+15550001111"},
            "retell_settings": {"agent_id": "agent-maple"},
        },
    )


@pytest.fixture
async def other_company(db_session):
    return await CompanyService(db_session).create_company(
        "Birch Court",
        staff_emails=["desk@birch.example.com"],
    )


@pytest.fixture
def channel_factory():
    return RecordingChannelFactory()


@pytest.fixture
def auth_headers():
    token = create_access_token({"sub": STAFF_UID, "email": STAFF_EMAIL})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(db_session, channel_factory):
    """Create a test API client."""
    from app.main import app

    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_channel_factory] = lambda: channel_factory

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()

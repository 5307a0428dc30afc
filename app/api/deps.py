"""FastAPI dependencies for identity and company resolution."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import Identity, identity_from_token
from app.core.company_context import set_company_context
from app.infrastructure.channels.factory import ChannelFactory
from app.infrastructure.channels.factory import get_channel_factory as _get_channel_factory
from app.persistence.database import get_db
from app.persistence.repositories.company_repository import CompanyRepository

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class SessionContext:
    """Signed-in staff member and the company they administer.

    Built once per request; controllers take ``company_id`` from here only.
    """

    uid: str
    email: str
    company_id: int
    company_name: str


async def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Identity:
    """Get the identity carried by the bearer token.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    identity = identity_from_token(credentials.credentials)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity


async def get_session_context(
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SessionContext:
    """Resolve the company administered by the signed-in staff email.

    Raises:
        HTTPException: 403 if the email is on no company's staff list
    """
    company = await CompanyRepository(db).get_by_staff_email(identity.email)
    if company is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No company is associated with this account",
        )

    set_company_context(company.id)
    return SessionContext(
        uid=identity.uid,
        email=identity.email,
        company_id=company.id,
        company_name=company.name,
    )


def get_channel_factory() -> ChannelFactory:
    """Channel factory used to reach SMS and email providers."""
    return _get_channel_factory()


"""Company and user profile service."""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.errors import EntityNotFoundError, EntityValidationError
from app.domain.models.company_settings import CompanySettings
from app.domain.validation import is_valid_email
from app.persistence.models.company import Company, UserProfile
from app.persistence.repositories.company_repository import CompanyRepository, UserProfileRepository

logger = logging.getLogger(__name__)

COMPANY_FIELDS = ("name", "address", "phone", "email", "amenities")
PROFILE_FIELDS = ("display_name", "role", "preferences")
DEFAULT_PREFERENCES = {"theme": "light", "language": "en", "notifications": True}


async def load_company_settings(session: AsyncSession, company_id: int) -> CompanySettings:
    """Parsed settings blob of a company; defaults when the company has none."""
    company = await CompanyRepository(session).get_by_id(None, company_id)
    return CompanySettings.from_blob(company.settings if company else None)


class CompanyService:
    """Service for company profile, staff list and settings."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.company_repo = CompanyRepository(session)
        self.profile_repo = UserProfileRepository(session)

    async def create_company(
        self,
        name: str,
        staff_emails: list[str] | None = None,
        settings: dict[str, Any] | None = None,
        **data,
    ) -> Company:
        """Create a company with its staff list and settings blob."""
        if not name or not name.strip():
            raise EntityValidationError({"name": "Company name is required"})
        self._check_staff_emails(staff_emails or [])

        company = await self.company_repo.create_company(
            staff_emails=staff_emails,
            name=name.strip(),
            settings=CompanySettings.from_blob(settings).model_dump(),
            **{key: value for key, value in data.items() if key in COMPANY_FIELDS},
        )
        logger.info("Company created", extra={"company_id": company.id})
        return company

    async def get_company(self, company_id: int) -> Company:
        company = await self.company_repo.get_by_id(None, company_id)
        if company is None:
            raise EntityNotFoundError("company", company_id)
        return company

    async def get_by_staff_email(self, email: str) -> Company | None:
        """Company administered by a staff email, or None."""
        return await self.company_repo.get_by_staff_email(email)

    async def get_settings(self, company_id: int) -> CompanySettings:
        company = await self.get_company(company_id)
        return CompanySettings.from_blob(company.settings)

    async def update_company(self, company_id: int, data: dict[str, Any]) -> Company:
        """Update the company profile, staff list and/or settings blob.

        Settings sections are merged over the stored blob, so a patch of
        ``{"business_hours": {"start": "08:00"}}`` keeps the other sections.
        """
        company = await self.get_company(company_id)

        if "staff_emails" in data and data["staff_emails"] is not None:
            self._check_staff_emails(data["staff_emails"])
            company = await self.company_repo.set_staff_emails(company_id, data["staff_emails"])

        updates = {key: value for key, value in data.items() if key in COMPANY_FIELDS}
        if "name" in updates and (not updates["name"] or not updates["name"].strip()):
            raise EntityValidationError({"name": "Company name is required"})

        if data.get("settings") is not None:
            merged = CompanySettings.from_blob(company.settings).model_dump()
            for section, values in data["settings"].items():
                if isinstance(values, dict) and isinstance(merged.get(section), dict):
                    merged[section] = {**merged[section], **values}
                else:
                    merged[section] = values
            updates["settings"] = CompanySettings.from_blob(merged).model_dump()

        if updates:
            company = await self.company_repo.update(None, company_id, **updates)
        return company

    @staticmethod
    def _check_staff_emails(staff_emails: list[str]) -> None:
        errors = {
            f"staff_emails.{index}": "Please enter a valid email address"
            for index, email in enumerate(staff_emails)
            if not is_valid_email(email.strip())
        }
        if errors:
            raise EntityValidationError(errors)

    async def get_profile(self, uid: str, email: str) -> UserProfile:
        """Get a user's profile, creating the default one on first access."""
        profile = await self.profile_repo.get_by_uid(uid)
        if profile is None:
            profile = await self.profile_repo.upsert(
                uid,
                email=email,
                display_name=email.split("@")[0],
                role="concierge",
                preferences=dict(DEFAULT_PREFERENCES),
            )
        return profile

    async def update_profile(self, uid: str, email: str, data: dict[str, Any]) -> UserProfile:
        """Update display name, role and preferences."""
        updates = {key: value for key, value in data.items() if key in PROFILE_FIELDS}
        if "display_name" in updates and not (updates["display_name"] or "").strip():
            raise EntityValidationError({"display_name": "Display name is required"})
        await self.get_profile(uid, email)
        return await self.profile_repo.upsert(uid, email=email, **updates)

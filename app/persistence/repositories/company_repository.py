"""Company and user profile repositories."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.persistence.models.company import Company, CompanyStaffMember, UserProfile
from app.persistence.repositories.base import BaseRepository


class CompanyRepository(BaseRepository[Company]):
    """Repository for Company entities.

    Companies are the scoping root, so lookups here are never company-scoped.
    """

    def __init__(self, session: AsyncSession):
        """Initialize company repository."""
        super().__init__(Company, session)

    async def get_by_id(self, company_id: int | None, id: int) -> Company | None:
        """Get company by ID."""
        stmt = select(Company).where(Company.id == id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_company(self, staff_emails: list[str] | None = None, **data) -> Company:
        """Create a company together with its authorized staff emails.

        Args:
            staff_emails: Emails allowed to administer the company
            **data: Company columns

        Returns:
            Created company
        """
        now = datetime.utcnow()
        company = Company(created_at=now, updated_at=now, **data)
        company.staff = [
            CompanyStaffMember(email=email.strip().lower())
            for email in (staff_emails or [])
            if email and email.strip()
        ]
        self.session.add(company)
        await self.session.commit()
        await self.session.refresh(company)
        return company

    async def set_staff_emails(self, company_id: int, staff_emails: list[str]) -> Company | None:
        """Replace the staff email list of a company."""
        company = await self.get_by_id(None, company_id)
        if company is None:
            return None
        company.staff = [
            CompanyStaffMember(email=email.strip().lower())
            for email in staff_emails
            if email and email.strip()
        ]
        company.updated_at = datetime.utcnow()
        await self.session.commit()
        await self.session.refresh(company)
        return company

    async def get_by_staff_email(self, email: str) -> Company | None:
        """Get the company whose staff list contains the given email.

        Returns the first company if the email is listed on several.

        Args:
            email: Staff email (case-insensitive)

        Returns:
            Company or None if the email administers no company
        """
        stmt = (
            select(Company)
            .join(CompanyStaffMember, CompanyStaffMember.company_id == Company.id)
            .where(CompanyStaffMember.email == email.strip().lower())
            .order_by(Company.id)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_sms_number(self, phone_number: str) -> Company | None:
        """Get the company whose Twilio number receives the given inbound SMS.

        Company settings live in a JSON blob, so this is a linear scan.
        """
        result = await self.session.execute(select(Company).order_by(Company.id))
        for company in result.scalars().all():
            twilio_settings = (company.settings or {}).get("twilio_settings") or {}
            if twilio_settings.get("phone_number") == phone_number:
                return company
        return None

    async def get_by_call_agent(self, agent_id: str) -> Company | None:
        """Get the company whose AI call agent reported a call."""
        result = await self.session.execute(select(Company).order_by(Company.id))
        for company in result.scalars().all():
            retell_settings = (company.settings or {}).get("retell_settings") or {}
            if agent_id and retell_settings.get("agent_id") == agent_id:
                return company
        return None


class UserProfileRepository(BaseRepository[UserProfile]):
    """Repository for UserProfile entities."""

    def __init__(self, session: AsyncSession):
        """Initialize user profile repository."""
        super().__init__(UserProfile, session)

    async def get_by_uid(self, uid: str) -> UserProfile | None:
        """Get profile by identity provider uid."""
        stmt = select(UserProfile).where(UserProfile.uid == uid)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(self, uid: str, **data) -> UserProfile:
        """Create the profile for a uid, or update it if it exists."""
        profile = await self.get_by_uid(uid)
        if profile is None:
            return await self.create(None, uid=uid, **data)
        for key, value in data.items():
            setattr(profile, key, value)
        profile.updated_at = datetime.utcnow()
        await self.session.commit()
        await self.session.refresh(profile)
        return profile

"""Company, staff and user profile models."""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.persistence.database import Base


class Company(Base):
    """Property management company; the root scoping key for all data."""

    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    amenities = Column(JSON, nullable=True)  # [{"id": "gym", "name": "Gym", ...}]
    settings = Column(JSON, nullable=True)  # see app.domain.models.company_settings.CompanySettings
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    staff = relationship(
        "CompanyStaffMember", back_populates="company", cascade="all, delete-orphan", lazy="selectin"
    )

    @property
    def staff_emails(self) -> list[str]:
        """Emails of the staff allowed to administer this company."""
        return [member.email for member in self.staff]

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, name={self.name})>"


class CompanyStaffMember(Base):
    """Staff email authorized to administer a company."""

    __tablename__ = "company_staff_members"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    email = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    company = relationship("Company", back_populates="staff")

    def __repr__(self) -> str:
        return f"<CompanyStaffMember(id={self.id}, company_id={self.company_id}, email={self.email})>"


class UserProfile(Base):
    """Per-user preferences, keyed by the identity provider's uid."""

    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True, index=True)
    uid = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=True)
    display_name = Column(String(255), nullable=True)
    role = Column(String(50), nullable=False, default="concierge")
    preferences = Column(JSON, nullable=True)  # {"theme": "light", "language": "en", ...}
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<UserProfile(id={self.id}, uid={self.uid}, role={self.role})>"

"""Resident model."""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text

from app.persistence.database import Base


class Resident(Base):
    """Resident model representing a unit occupant with a durable contact record."""

    __tablename__ = "residents"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    unit_number = Column(String(50), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True, index=True)  # exact-match key for contact association
    emergency_contact = Column(JSON, nullable=True)  # {"name", "phone", "relationship"}
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Resident(id={self.id}, company_id={self.company_id}, unit={self.unit_number}, phone={self.phone})>"

"""Amenity booking model."""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text

from app.persistence.database import Base


class Booking(Base):
    """Booking of a company amenity."""

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    amenity_id = Column(String(100), nullable=False)
    resident_id = Column(Integer, nullable=True, index=True)  # optional, guests have none
    start_date = Column(DateTime, nullable=False, index=True)
    end_date = Column(DateTime, nullable=False)
    contact_info = Column(JSON, nullable=True)  # snapshot {"name", "phone", "email"} taken at creation
    status = Column(String(20), nullable=False, default="confirmed")  # confirmed, pending, cancelled
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, company_id={self.company_id}, amenity={self.amenity_id}, status={self.status})>"

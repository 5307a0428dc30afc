"""Visitor and parking request models."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from app.persistence.database import Base


class Visitor(Base):
    """Visitor pre-registered or checked in at the front desk."""

    __tablename__ = "visitors"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    visiting = Column(JSON, nullable=False)  # snapshot {"resident_id", "resident_name", "unit_number"}
    purpose = Column(String(255), nullable=True)
    expected_arrival = Column(DateTime, nullable=True, index=True)
    expected_departure = Column(DateTime, nullable=True)
    actual_arrival = Column(DateTime, nullable=True)
    actual_departure = Column(DateTime, nullable=True)
    parking_required = Column(Boolean, default=False, nullable=False)
    vehicle_info = Column(JSON, nullable=True)  # {"make", "model", "year", "color", "license_plate"}
    parking_spot = Column(String(50), nullable=True)
    access_code = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="pre_registered")  # pre_registered, checked_in, checked_out, no_show
    checked_in_by = Column(String(255), nullable=True)

    # Notification audit
    notification_sent = Column(Boolean, default=False, nullable=False)
    notification_method = Column(String(20), nullable=True)
    notification_sent_at = Column(DateTime, nullable=True)
    notification_content = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Visitor(id={self.id}, company_id={self.company_id}, name={self.name}, status={self.status})>"


class ParkingRequest(Base):
    """Visitor parking request awaiting staff approval."""

    __tablename__ = "parking_requests"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    requester_name = Column(String(255), nullable=False)
    requester_phone = Column(String(50), nullable=True)
    requester_email = Column(String(255), nullable=True)
    visiting = Column(JSON, nullable=False)  # snapshot {"resident_id", "resident_name", "unit_number"}
    vehicle_info = Column(JSON, nullable=True)
    requested_date = Column(DateTime, nullable=False, index=True)
    start_time = Column(String(5), nullable=False)  # "HH:MM"
    end_time = Column(String(5), nullable=False)
    purpose = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="pending")  # pending, approved, denied
    approved_by = Column(String(255), nullable=True)  # staff who decided, approved or denied
    approved_at = Column(DateTime, nullable=True)
    parking_spot = Column(String(50), nullable=True)
    access_code = Column(String(50), nullable=True)

    # Notification audit
    notification_sent = Column(Boolean, default=False, nullable=False)
    notification_method = Column(String(20), nullable=True)
    notification_sent_at = Column(DateTime, nullable=True)
    notification_content = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<ParkingRequest(id={self.id}, company_id={self.company_id}, status={self.status})>"

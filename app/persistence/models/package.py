"""Package model."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from app.persistence.database import Base


class Package(Base):
    """Package received at the front desk on behalf of a resident."""

    __tablename__ = "packages"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)

    # Resident snapshot, copied at creation and never re-synced
    resident_id = Column(Integer, nullable=True, index=True)
    resident_name = Column(String(255), nullable=False)
    unit_number = Column(String(50), nullable=False, index=True)
    recipient_email = Column(String(255), nullable=True)
    recipient_phone = Column(String(50), nullable=True)

    courier = Column(String(100), nullable=True)
    tracking_number = Column(String(255), nullable=True)
    package_type = Column(String(50), nullable=True, default="Box")
    size = Column(String(50), nullable=True, default="Medium")
    description = Column(Text, nullable=True)
    delivered_at = Column(DateTime, nullable=False)
    received_by = Column(String(255), nullable=True, default="Front Desk")
    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="pending")  # pending, picked_up, returned, damaged, lost

    # Notification audit
    notification_sent = Column(Boolean, default=False, nullable=False)
    notification_method = Column(String(20), nullable=True)
    notification_sent_at = Column(DateTime, nullable=True)
    notification_content = Column(Text, nullable=True)

    # Pickup
    pickup_by = Column(String(255), nullable=True)
    picked_up_at = Column(DateTime, nullable=True)
    pickup_notes = Column(Text, nullable=True)
    verification_method = Column(String(50), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Package(id={self.id}, company_id={self.company_id}, unit={self.unit_number}, status={self.status})>"

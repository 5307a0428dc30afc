"""Message and call log models."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from app.persistence.database import Base


class Message(Base):
    """SMS exchanged between the front desk and a phone number."""

    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    phone_number = Column(String(50), nullable=False, index=True)

    # Resident snapshot, present only when the number resolved to a resident
    resident_id = Column(Integer, nullable=True, index=True)
    resident_name = Column(String(255), nullable=True)
    unit_number = Column(String(50), nullable=True)

    content = Column(Text, nullable=False)
    direction = Column(String(20), nullable=False)  # incoming, outgoing
    type = Column(String(20), nullable=False, default="sms")
    status = Column(String(50), nullable=True)  # received, queued, sent, delivered, failed
    is_read = Column(Boolean, default=False, nullable=False)
    read_at = Column(DateTime, nullable=True)
    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    reply_to = Column(Integer, ForeignKey("messages.id"), nullable=True)
    external_sid = Column(String(255), nullable=True, index=True)  # Twilio message SID
    sent_by = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, company_id={self.company_id}, direction={self.direction}, phone={self.phone_number})>"


class CallLog(Base):
    """Inbound call handled by the AI call-summary provider."""

    __tablename__ = "call_logs"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    phone_number = Column(String(50), nullable=False, index=True)

    resident_id = Column(Integer, nullable=True, index=True)
    resident_name = Column(String(255), nullable=True)
    unit_number = Column(String(50), nullable=True)

    status = Column(String(20), nullable=False, default="answered")  # answered, missed
    duration = Column(String(20), nullable=True)  # seconds ("95") or "m:ss" as reported upstream
    summary = Column(Text, nullable=True)
    ai_summary = Column(Text, nullable=True)
    transcription = Column(Text, nullable=True)
    external_call_id = Column(String(255), nullable=True, index=True)
    is_read = Column(Boolean, default=False, nullable=False)
    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<CallLog(id={self.id}, company_id={self.company_id}, status={self.status})>"

"""Denormalized copies of resident and contact data.

Snapshots are captured when a booking, package, visitor, message or call is
written. Later edits to the resident do not touch them.
"""

from typing import Any

from pydantic import BaseModel


class ResidentSnapshot(BaseModel):
    """Resident fields copied onto another entity at write time."""

    resident_id: int | None = None
    resident_name: str | None = None
    unit_number: str | None = None
    email: str | None = None
    phone: str | None = None

    @classmethod
    def from_resident(cls, resident: Any) -> "ResidentSnapshot":
        """Capture a snapshot of a Resident row."""
        return cls(
            resident_id=resident.id,
            resident_name=resident.name,
            unit_number=resident.unit_number,
            email=resident.email,
            phone=resident.phone,
        )

    def association_fields(self) -> dict[str, Any]:
        """Columns stored on messages and call logs."""
        return {
            "resident_id": self.resident_id,
            "resident_name": self.resident_name,
            "unit_number": self.unit_number,
        }

    def package_fields(self) -> dict[str, Any]:
        """Columns stored on packages."""
        return {
            "resident_id": self.resident_id,
            "resident_name": self.resident_name,
            "unit_number": self.unit_number,
            "recipient_email": self.email,
            "recipient_phone": self.phone,
        }

    def visiting(self) -> dict[str, Any]:
        """The ``visiting`` record stored on visitors and parking requests."""
        return {
            "resident_id": self.resident_id,
            "resident_name": self.resident_name,
            "unit_number": self.unit_number,
        }


class ContactSnapshot(BaseModel):
    """Contact details captured on a booking at creation."""

    name: str | None = None
    phone: str | None = None
    email: str | None = None

"""Association of phone numbers with residents."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.phone import phones_match
from app.domain.models.snapshots import ResidentSnapshot
from app.persistence.models.resident import Resident
from app.persistence.repositories.resident_repository import ResidentRepository
from app.settings import settings

logger = logging.getLogger(__name__)


class ContactAssociationResolver:
    """Finds the resident a phone number belongs to.

    By default numbers are compared as literal strings, so ``+1 555-123-4567``
    and ``5551234567`` are different contacts. With normalization enabled the
    last ten digits of both numbers are compared instead.
    """

    def __init__(self, session: AsyncSession, normalized: bool | None = None) -> None:
        self.session = session
        self.resident_repo = ResidentRepository(session)
        self.normalized = settings.phone_match_normalized if normalized is None else normalized

    async def resolve(self, company_id: int, phone_number: str | None) -> ResidentSnapshot | None:
        """Resolve a phone number to a resident snapshot.

        Args:
            company_id: Company ID
            phone_number: Phone number as received

        Returns:
            Snapshot of the first matching resident, or None for unknown
            numbers (guests and other non-residents)
        """
        if not phone_number:
            return None

        if self.normalized:
            resident = await self._find_normalized(company_id, phone_number)
        else:
            resident = await self.resident_repo.get_by_phone(company_id, phone_number)

        if resident is None:
            logger.debug(
                "No resident for phone number",
                extra={"company_id": company_id, "phone": phone_number},
            )
            return None
        return ResidentSnapshot.from_resident(resident)

    async def _find_normalized(self, company_id: int, phone_number: str) -> Resident | None:
        residents = await self.resident_repo.list(
            company_id, order_by=Resident.created_at
        )
        for resident in residents:
            if phones_match(resident.phone, phone_number):
                return resident
        return None

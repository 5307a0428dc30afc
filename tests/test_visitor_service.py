"""Tests for visitors and visitor parking requests."""

from datetime import date, datetime, timedelta

import pytest

from app.domain.errors import EntityValidationError, InvalidTransitionError
from app.domain.services.resident_service import ResidentService
from app.domain.services.visitor_service import (
    ParkingService,
    VisitorService,
    generate_access_code,
)
from app.settings import settings

VISITING = {"resident_name": "Ana Silva", "unit_number": "4B"}


def _visitor(**overrides):
    data = {
        "name": "Sam Lee",
        "phone": "+14165550123",
        "visiting": VISITING,
        "purpose": "Dinner",
        "expected_arrival": datetime.utcnow() + timedelta(hours=1),
    }
    data.update(overrides)
    return data


def _parking(**overrides):
    data = {
        "requester_name": "Sam Lee",
        "requester_phone": "+14165550123",
        "visiting": VISITING,
        "vehicle_info": {"make": "Honda", "license_plate": "ABCD 123"},
        "purpose": "Visiting family",
        "requested_date": date(2025, 6, 2),
        "start_time": "10:00",
        "end_time": "14:00",
    }
    data.update(overrides)
    return data


class TestVisitorLifecycle:
    @pytest.mark.asyncio
    async def test_check_in_then_out(self, db_session, company):
        service = VisitorService(db_session)
        visitor = await service.create_visitor(company.id, _visitor())
        assert visitor.status == "pre_registered"

        visitor = await service.check_in(company.id, visitor.id, checked_in_by="desk@example.com")
        assert visitor.status == "checked_in"
        assert visitor.actual_arrival is not None
        assert visitor.checked_in_by == "desk@example.com"

        visitor = await service.check_out(company.id, visitor.id)
        assert visitor.status == "checked_out"
        assert visitor.actual_departure is not None

    @pytest.mark.asyncio
    async def test_check_out_requires_check_in(self, db_session, company):
        service = VisitorService(db_session)
        visitor = await service.create_visitor(company.id, _visitor())

        with pytest.raises(InvalidTransitionError):
            await service.check_out(company.id, visitor.id)

    @pytest.mark.asyncio
    async def test_no_show_is_final(self, db_session, company):
        service = VisitorService(db_session)
        visitor = await service.create_visitor(company.id, _visitor())
        await service.mark_no_show(company.id, visitor.id)

        with pytest.raises(InvalidTransitionError):
            await service.check_in(company.id, visitor.id)

    @pytest.mark.asyncio
    async def test_checked_in_today(self, db_session, company):
        service = VisitorService(db_session)
        arrived = await service.create_visitor(company.id, _visitor())
        await service.create_visitor(company.id, _visitor(name="Not Yet"))
        await service.check_in(company.id, arrived.id)

        visitors = await service.list_checked_in_today(company.id)

        assert [v.id for v in visitors] == [arrived.id]

    @pytest.mark.asyncio
    async def test_visiting_snapshot_from_resident(self, db_session, company):
        resident = await ResidentService(db_session).create_resident(
            company.id,
            {"name": "Ana Silva", "unit_number": "4B", "email": "ana@example.com", "phone": "+14165550199"},
        )

        visitor = await VisitorService(db_session).create_visitor(
            company.id, _visitor(visiting={"resident_id": resident.id})
        )

        assert visitor.visiting == {"resident_id": resident.id, "resident_name": "Ana Silva", "unit_number": "4B"}

    @pytest.mark.asyncio
    async def test_parking_requires_vehicle(self, db_session, company):
        with pytest.raises(EntityValidationError) as exc_info:
            await VisitorService(db_session).create_visitor(company.id, _visitor(parking_required=True))

        assert "vehicle_info.license_plate" in exc_info.value.errors


class TestParkingRequests:
    @pytest.mark.asyncio
    async def test_approve_assigns_spot_and_code(self, db_session, company):
        service = ParkingService(db_session)
        request = await service.create_request(company.id, _parking(), today=date(2025, 6, 1))
        assert request.status == "pending"

        request = await service.approve(company.id, request.id, approved_by="desk@example.com")

        assert request.status == "approved"
        assert request.approved_by == "desk@example.com"
        assert request.approved_at is not None
        assert request.parking_spot in settings.visitor_parking_spots
        assert request.access_code.startswith("VIS")

    @pytest.mark.asyncio
    async def test_deny_records_decider(self, db_session, company):
        service = ParkingService(db_session)
        request = await service.create_request(company.id, _parking(), today=date(2025, 6, 1))

        request = await service.deny(company.id, request.id, denied_by="desk@example.com")

        assert request.status == "denied"
        assert request.approved_by == "desk@example.com"
        assert request.parking_spot is None

    @pytest.mark.asyncio
    async def test_decision_is_final(self, db_session, company):
        service = ParkingService(db_session)
        request = await service.create_request(company.id, _parking(), today=date(2025, 6, 1))
        await service.deny(company.id, request.id)

        with pytest.raises(InvalidTransitionError):
            await service.approve(company.id, request.id)

    @pytest.mark.asyncio
    async def test_past_date_rejected(self, db_session, company):
        with pytest.raises(EntityValidationError) as exc_info:
            await ParkingService(db_session).create_request(
                company.id, _parking(), today=date(2025, 6, 3)
            )

        assert "requested_date" in exc_info.value.errors

    @pytest.mark.asyncio
    async def test_pending_list(self, db_session, company):
        service = ParkingService(db_session)
        first = await service.create_request(company.id, _parking(), today=date(2025, 6, 1))
        second = await service.create_request(company.id, _parking(), today=date(2025, 6, 1))
        await service.approve(company.id, first.id)

        assert [r.id for r in await service.list_pending(company.id)] == [second.id]


def test_access_code_format():
    code = generate_access_code()
    assert len(code) == 7
    assert code.startswith("VIS")
    assert code[3:].isalnum() and code[3:].upper() == code[3:]

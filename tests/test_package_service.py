"""Tests for the package center."""

from datetime import datetime, timedelta

import pytest

from app.domain.errors import EntityValidationError, InvalidTransitionError
from app.domain.services.package_service import PackageService
from app.domain.services.resident_service import ResidentService


def _data(**overrides):
    data = {
        "resident_name": "Ana Silva",
        "unit_number": "4B",
        "courier": "UPS",
        "description": "Small box",
        "delivered_at": datetime.utcnow() - timedelta(minutes=5),
    }
    data.update(overrides)
    return data


@pytest.mark.asyncio
async def test_new_package_is_pending_and_unnotified(db_session, company):
    package = await PackageService(db_session).create_package(company.id, _data())

    assert package.status == "pending"
    assert package.notification_sent is False
    assert package.received_by == "Front Desk"
    assert package.package_type == "Box"


@pytest.mark.asyncio
async def test_future_delivery_rejected(db_session, company):
    service = PackageService(db_session)

    with pytest.raises(EntityValidationError) as exc_info:
        await service.create_package(company.id, _data(delivered_at=datetime.utcnow() + timedelta(hours=1)))

    assert "delivered_at" in exc_info.value.errors
    assert await service.list_packages(company.id) == []


@pytest.mark.asyncio
async def test_resident_details_fill_blank_fields(db_session, company):
    resident = await ResidentService(db_session).create_resident(
        company.id,
        {"name": "Ana Silva", "unit_number": "4B", "email": "ana@example.com", "phone": "+14165550199"},
    )

    package = await PackageService(db_session).create_package(
        company.id, _data(resident_name=None, unit_number=None, resident_id=resident.id)
    )

    assert package.resident_name == "Ana Silva"
    assert package.unit_number == "4B"
    assert package.recipient_phone == "+14165550199"
    assert package.recipient_email == "ana@example.com"


@pytest.mark.asyncio
async def test_pickup_updates_stats(db_session, company):
    service = PackageService(db_session)
    package = await service.create_package(company.id, _data())
    await service.create_package(company.id, _data(courier="FedEx"))
    before = await service.get_stats(company.id)

    picked_up = await service.mark_picked_up(company.id, package.id, pickup_by="Ana Silva")
    after = await service.get_stats(company.id)

    assert picked_up.status == "picked_up"
    assert picked_up.picked_up_at is not None
    assert picked_up.pickup_by == "Ana Silva"
    assert after["pending"] == before["pending"] - 1
    assert after["picked_up"] == before["picked_up"] + 1
    assert after["total"] == before["total"]


@pytest.mark.asyncio
async def test_pickup_of_collected_package_rejected(db_session, company):
    service = PackageService(db_session)
    package = await service.create_package(company.id, _data())
    await service.mark_picked_up(company.id, package.id)

    with pytest.raises(InvalidTransitionError):
        await service.mark_picked_up(company.id, package.id)


@pytest.mark.asyncio
async def test_bulk_pickup_skips_non_pending(db_session, company):
    service = PackageService(db_session)
    first = await service.create_package(company.id, _data())
    second = await service.create_package(company.id, _data())
    returned = await service.create_package(company.id, _data())
    await service.mark_exception(company.id, returned.id, "returned")

    updated = await service.mark_many_picked_up(company.id, [first.id, second.id, returned.id, 999])

    assert updated == 2
    assert (await service.get_package(company.id, returned.id)).status == "returned"


@pytest.mark.asyncio
async def test_exception_status_must_be_known(db_session, company):
    service = PackageService(db_session)
    package = await service.create_package(company.id, _data())

    with pytest.raises(EntityValidationError):
        await service.mark_exception(company.id, package.id, "misplaced")


@pytest.mark.asyncio
async def test_search(db_session, company):
    service = PackageService(db_session)
    await service.create_package(company.id, _data(tracking_number="1Z999AA10123456784"))
    await service.create_package(company.id, _data(courier="Canada Post", unit_number="12C"))

    assert len(await service.search(company.id, "1z999")) == 1
    assert len(await service.search(company.id, "canada")) == 1
    assert len(await service.search(company.id, "")) == 2


@pytest.mark.asyncio
async def test_report(db_session, company):
    service = PackageService(db_session)
    await service.create_package(company.id, _data())
    await service.create_package(company.id, _data(unit_number="7A"))
    await service.create_package(company.id, _data(unit_number="7A"))
    now = datetime.utcnow()

    report = await service.generate_report(company.id, now - timedelta(days=7), now + timedelta(minutes=1))

    assert report["summary"]["total"] == 3
    assert report["insights"]["most_active_unit"] == {"unit": "7A", "count": 2}
    assert report["insights"]["busiest_day"]["count"] == 3


@pytest.mark.asyncio
async def test_report_range_must_be_ordered(db_session, company):
    now = datetime.utcnow()

    with pytest.raises(EntityValidationError):
        await PackageService(db_session).generate_report(company.id, now, now - timedelta(days=1))

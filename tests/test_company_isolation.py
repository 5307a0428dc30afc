"""Tests for company isolation."""

from datetime import datetime, timedelta

import pytest

from app.persistence.repositories.company_repository import CompanyRepository
from app.persistence.repositories.package_repository import PackageRepository
from app.persistence.repositories.resident_repository import ResidentRepository


@pytest.mark.asyncio
async def test_company_isolation_in_queries(db_session, company, other_company):
    """Queries only ever see rows of the requested company."""
    resident_repo = ResidentRepository(db_session)
    resident1 = await resident_repo.create(company.id, name="Ana Silva", unit_number="4B", phone="+14165550199")
    resident2 = await resident_repo.create(other_company.id, name="Bo Chen", unit_number="9F", phone="+14165550199")

    company1_residents = await resident_repo.list_by_company(company.id)
    assert [r.id for r in company1_residents] == [resident1.id]

    company2_residents = await resident_repo.list_by_company(other_company.id)
    assert [r.id for r in company2_residents] == [resident2.id]

    assert await resident_repo.get_by_id(company.id, resident2.id) is None
    assert (await resident_repo.get_by_phone(company.id, "+14165550199")).id == resident1.id


@pytest.mark.asyncio
async def test_update_and_delete_are_scoped(db_session, company, other_company):
    package_repo = PackageRepository(db_session)
    package = await package_repo.create(
        company.id,
        resident_name="Ana Silva",
        unit_number="4B",
        courier="UPS",
        description="Small box",
        delivered_at=datetime.utcnow() - timedelta(minutes=1),
        status="pending",
    )

    assert await package_repo.update(other_company.id, package.id, status="picked_up") is None
    assert await package_repo.delete(other_company.id, package.id) is False
    assert (await package_repo.get_by_id(company.id, package.id)).status == "pending"


@pytest.mark.asyncio
async def test_company_lookup_by_staff_email(db_session, company, other_company):
    company_repo = CompanyRepository(db_session)

    assert (await company_repo.get_by_staff_email("desk@example.com")).id == company.id
    assert (await company_repo.get_by_staff_email("DESK@example.com")).id == company.id
    assert await company_repo.get_by_staff_email("stranger@example.com") is None


@pytest.mark.asyncio
async def test_company_lookup_by_inbound_numbers(db_session, company, other_company):
    company_repo = CompanyRepository(db_session)

    assert (await company_repo.get_by_sms_number("+15550001111")).id == company.id
    assert (await company_repo.get_by_call_agent("agent-maple")).id == company.id
    assert await company_repo.get_by_call_agent("agent-unknown") is None

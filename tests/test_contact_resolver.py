"""Tests for phone number to resident association."""

import pytest

from app.domain.services.contact_resolver import ContactAssociationResolver
from app.domain.services.resident_service import ResidentService


async def _resident(db_session, company_id, name, unit, phone):
    return await ResidentService(db_session).create_resident(
        company_id,
        {"name": name, "unit_number": unit, "email": f"{unit.lower()}@example.com", "phone": phone},
    )


@pytest.mark.asyncio
async def test_unknown_number_resolves_to_none(db_session, company):
    await _resident(db_session, company.id, "Ana Silva", "4B", "+14165550199")
    resolver = ContactAssociationResolver(db_session, normalized=False)

    assert await resolver.resolve(company.id, "+14165550000") is None
    assert await resolver.resolve(company.id, None) is None


@pytest.mark.asyncio
async def test_exact_match(db_session, company):
    resident = await _resident(db_session, company.id, "Ana Silva", "4B", "+14165550199")
    resolver = ContactAssociationResolver(db_session, normalized=False)

    snapshot = await resolver.resolve(company.id, "+14165550199")

    assert snapshot.resident_id == resident.id
    assert snapshot.resident_name == "Ana Silva"
    assert snapshot.unit_number == "4B"


@pytest.mark.asyncio
async def test_formatting_differences_do_not_match_by_default(db_session, company):
    await _resident(db_session, company.id, "Ana Silva", "4B", "+14165550199")
    resolver = ContactAssociationResolver(db_session, normalized=False)

    assert await resolver.resolve(company.id, "(416) 555-0199") is None


@pytest.mark.asyncio
async def test_normalized_matching(db_session, company):
    resident = await _resident(db_session, company.id, "Ana Silva", "4B", "+14165550199")
    resolver = ContactAssociationResolver(db_session, normalized=True)

    snapshot = await resolver.resolve(company.id, "(416) 555-0199")

    assert snapshot.resident_id == resident.id


@pytest.mark.asyncio
async def test_first_created_resident_wins(db_session, company):
    first = await _resident(db_session, company.id, "Ana Silva", "4B", "+14165550199")
    await _resident(db_session, company.id, "Bo Silva", "4B", "+14165550199")
    resolver = ContactAssociationResolver(db_session, normalized=False)

    snapshot = await resolver.resolve(company.id, "+14165550199")

    assert snapshot.resident_id == first.id


@pytest.mark.asyncio
async def test_other_company_residents_are_invisible(db_session, company, other_company):
    await _resident(db_session, other_company.id, "Ana Silva", "4B", "+14165550199")
    resolver = ContactAssociationResolver(db_session, normalized=False)

    assert await resolver.resolve(company.id, "+14165550199") is None

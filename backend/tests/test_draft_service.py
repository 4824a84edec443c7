import json
from datetime import datetime, timedelta

import pytest

from accountkit.core.keys import DRAFT_REGISTRATION_KEY
from accountkit.services.draft_service import RegistrationDraftService

FORM = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "email": "a@x.com",
    "phoneNumber": "+14155550100",
    "country": "GB",
    "password": "Aa1!aaaa",
    "confirmPassword": "Aa1!aaaa",
    "agreeToTerms": True,
}


@pytest.fixture
def draft_service(store):
    return RegistrationDraftService(store)


@pytest.mark.asyncio
async def test_draft_never_contains_passwords(draft_service, store):
    assert await draft_service.save_draft_registration(FORM)

    record = json.loads(await store.get(DRAFT_REGISTRATION_KEY))
    assert "password" not in record
    assert "confirmPassword" not in record
    assert record["firstName"] == "Ada"
    datetime.fromisoformat(record["lastUpdated"])


@pytest.mark.asyncio
async def test_draft_timestamp_is_utc(draft_service, store):
    await draft_service.save_draft_registration({"firstName": "Ada"})

    last_updated = datetime.fromisoformat(json.loads(await store.get(DRAFT_REGISTRATION_KEY))["lastUpdated"])
    assert last_updated.tzinfo is not None
    assert last_updated.utcoffset() == timedelta(0)


@pytest.mark.asyncio
async def test_partial_draft_round_trip(draft_service):
    await draft_service.save_draft_registration({"firstName": "Ada", "country": "GB"})

    draft = await draft_service.get_draft_registration()
    assert draft.first_name == "Ada"
    assert draft.country == "GB"
    assert draft.email is None


@pytest.mark.asyncio
async def test_save_overwrites_previous_draft(draft_service):
    await draft_service.save_draft_registration({"firstName": "Ada"})
    await draft_service.save_draft_registration({"lastName": "Lovelace"})

    draft = await draft_service.get_draft_registration()
    assert draft.first_name is None
    assert draft.last_name == "Lovelace"


@pytest.mark.asyncio
async def test_clear(draft_service):
    await draft_service.save_draft_registration(FORM)

    assert await draft_service.clear_draft_registration()
    assert await draft_service.get_draft_registration() is None


@pytest.mark.asyncio
async def test_failures_are_reported_not_raised(failing_store):
    failing_store.fail_set.add(DRAFT_REGISTRATION_KEY)
    failing_store.fail_get.add(DRAFT_REGISTRATION_KEY)
    failing_store.fail_remove.add(DRAFT_REGISTRATION_KEY)
    service = RegistrationDraftService(failing_store)

    assert await service.save_draft_registration(FORM) is False
    assert await service.get_draft_registration() is None
    assert await service.clear_draft_registration() is False


@pytest.mark.asyncio
async def test_registration_flow_clears_draft(auth_service, draft_service, profile):
    await draft_service.save_draft_registration(FORM)

    result = await auth_service.register(FORM["email"], FORM["password"], profile)
    if result.success:
        await draft_service.clear_draft_registration()

    assert await draft_service.get_draft_registration() is None

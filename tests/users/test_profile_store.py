from __future__ import annotations

from datetime import datetime, timezone

import pytest

from gym_tracker.core.exceptions import NotFound
from gym_tracker.users.repository import DocumentProfileRepository, KeyValueProfileRepository
from gym_tracker.users.service import UserProfileStore


@pytest.fixture(params=["remote", "fallback"])
def profiles(request, document_client, kv_store):
    times = iter(
        [
            datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc),
            datetime(2024, 1, 2, 9, 0, tzinfo=timezone.utc),
        ]
    )
    repo = DocumentProfileRepository(document_client) if request.param == "remote" else KeyValueProfileRepository(kv_store)
    return UserProfileStore(repo, clock=lambda: next(times))


@pytest.mark.asyncio
async def test_create_and_read_profile(profiles):
    await profiles.create_profile("u1", email="a@example.com", display_name="Ann")

    profile = await profiles.get_profile("u1")
    assert profile.email == "a@example.com"
    assert profile.display_name == "Ann"
    assert profile.created_at == profile.last_login_at


@pytest.mark.asyncio
async def test_update_last_login_keeps_created_at(profiles):
    await profiles.create_profile("u1", email="a@example.com")
    await profiles.update_last_login("u1")

    profile = await profiles.get_profile("u1")
    assert profile.created_at == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
    assert profile.last_login_at == datetime(2024, 1, 2, 9, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_default_training_type_is_merged_into_preferences(profiles):
    await profiles.create_profile("u1", email="a@example.com")
    await profiles.set_default_training_type("u1", "t1")

    profile = await profiles.get_profile("u1")
    assert profile.default_training_type == "t1"
    assert profile.email == "a@example.com"


@pytest.mark.asyncio
async def test_missing_profile(profiles):
    assert await profiles.get_profile("nobody") is None
    with pytest.raises(NotFound):
        await profiles.update_last_login("nobody")

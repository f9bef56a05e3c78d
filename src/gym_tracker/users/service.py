from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_utc, to_iso_instant
from ..common.validators import require_non_empty, require_user_id
from ..core.exceptions import NotFound
from .model import UserProfile
from .repository import ProfileRepository


class UserProfileStore:
    def __init__(self, profiles: ProfileRepository, *, clock: Optional[Callable[[], datetime]] = None):
        self._profiles = profiles
        self._clock = clock or now_utc

    async def create_profile(self, user_id: str, *, email: str, display_name: Optional[str] = None) -> None:
        user_id = require_user_id(user_id)
        now = to_iso_instant(self._clock())
        changes = {
            "email": require_non_empty(email, "email"),
            "createdAt": now,
            "lastLoginAt": now,
        }
        if display_name:
            changes["displayName"] = display_name.strip()
        await asyncio.to_thread(self._profiles.merge, user_id, changes)

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        user_id = require_user_id(user_id)
        data = await asyncio.to_thread(self._profiles.get, user_id)
        return UserProfile.from_document(data) if data else None

    async def update_last_login(self, user_id: str) -> None:
        await self._update(user_id, {"lastLoginAt": to_iso_instant(self._clock())})

    async def set_default_training_type(self, user_id: str, type_id: Optional[str]) -> None:
        await self._update(user_id, {"preferences": {"defaultTrainingType": type_id or None}})

    async def _update(self, user_id: str, changes: dict) -> None:
        user_id = require_user_id(user_id)
        if not await asyncio.to_thread(self._profiles.get, user_id):
            raise NotFound(f"Profile for {user_id!r} not found")
        await asyncio.to_thread(self._profiles.merge, user_id, changes)

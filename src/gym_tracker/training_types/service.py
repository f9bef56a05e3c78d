from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from ..common.datetime_utils import now_utc
from ..common.validators import optional_text, require_hex_color, require_non_empty, require_user_id
from ..core.exceptions import NotFound, ValidationError
from .model import TrainingType
from .repository import TrainingTypeRepository

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = frozenset({"name", "color", "icon"})


def generate_type_id() -> str:
    return uuid.uuid4().hex


class TrainingTypeRegistry:
    """Per-user catalog of workout types.

    Update and delete of an unknown id raise ``NotFound`` whichever backend is
    active. Deleting a type never touches attendance that references it.
    """

    def __init__(
        self,
        types: TrainingTypeRepository,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._types = types
        self._clock = clock or now_utc
        self._id_factory = id_factory or generate_type_id

    async def list_types(self, user_id: str) -> list[TrainingType]:
        user_id = require_user_id(user_id)
        types = await asyncio.to_thread(self._types.list_for_user, user_id)
        logger.debug("Loaded %d training types for %s", len(types), user_id)
        return list(types)

    async def get_type(self, user_id: str, type_id: str) -> Optional[TrainingType]:
        user_id = require_user_id(user_id)
        return await asyncio.to_thread(self._types.get, user_id, type_id)

    async def create_type(self, user_id: str, *, name: str, color: str, icon: Optional[str] = None) -> str:
        user_id = require_user_id(user_id)
        training_type = TrainingType(
            id=self._id_factory(),
            name=require_non_empty(name, "name"),
            color=require_hex_color(color),
            icon=optional_text(icon, "icon"),
            created_at=self._clock(),
        )
        await asyncio.to_thread(self._types.save, user_id, training_type)
        logger.info("Training type created: %s", training_type.name)
        return training_type.id

    async def update_type(self, user_id: str, type_id: str, changes: Mapping[str, Any]) -> TrainingType:
        user_id = require_user_id(user_id)
        changes = dict(changes)
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        current = await self._require(user_id, type_id)
        if "name" in changes:
            changes["name"] = require_non_empty(changes["name"], "name")
        if "color" in changes:
            changes["color"] = require_hex_color(changes["color"])
        if "icon" in changes:
            changes["icon"] = optional_text(changes["icon"], "icon")

        updated = replace(current, **changes)
        await asyncio.to_thread(self._types.save, user_id, updated)
        logger.info("Training type updated: %s", type_id)
        return updated

    async def delete_type(self, user_id: str, type_id: str) -> None:
        user_id = require_user_id(user_id)
        await self._require(user_id, type_id)
        await asyncio.to_thread(self._types.delete, user_id, type_id)
        logger.info("Training type deleted: %s", type_id)

    async def _require(self, user_id: str, type_id: str) -> TrainingType:
        current = await asyncio.to_thread(self._types.get, user_id, type_id)
        if current is None:
            raise NotFound(f"Training type {type_id!r} not found")
        return current

from __future__ import annotations

from typing import Optional, Sequence

from ..keyvalue.store import KeyValueStore
from .model import TrainingType
from .repository import TrainingTypeRepository


def training_types_key(user_id: str) -> str:
    return f"trainingTypes_{user_id}"


class KeyValueTrainingTypeRepository(TrainingTypeRepository):
    """Fallback variant: the catalog is a JSON list, kept in creation order."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    def list_for_user(self, user_id: str) -> Sequence[TrainingType]:
        items = self._store.get(training_types_key(user_id)) or []
        return [TrainingType.from_document(str(item["id"]), item) for item in items]

    def get(self, user_id: str, type_id: str) -> Optional[TrainingType]:
        return next((t for t in self.list_for_user(user_id) if t.id == type_id), None)

    def save(self, user_id: str, training_type: TrainingType) -> None:
        doc = {"id": training_type.id, **training_type.to_document()}

        def _upsert(items: Optional[list]) -> list:
            items = list(items or [])
            for i, item in enumerate(items):
                if item.get("id") == training_type.id:
                    items[i] = doc
                    return items
            items.append(doc)
            return items

        self._store.update(training_types_key(user_id), _upsert)

    def delete(self, user_id: str, type_id: str) -> None:
        self._store.update(
            training_types_key(user_id),
            lambda items: [item for item in (items or []) if item.get("id") != type_id],
        )

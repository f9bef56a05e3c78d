from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence

from ..documents.client import DocumentClient
from .model import TrainingType
from .repository import TrainingTypeRepository

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _types_collection(user_id: str) -> tuple[str, ...]:
    return ("users", user_id, "trainingTypes")


class DocumentTrainingTypeRepository(TrainingTypeRepository):
    """Remote variant: ``users/{uid}/trainingTypes/{id}``."""

    def __init__(self, client: DocumentClient):
        self._client = client

    def list_for_user(self, user_id: str) -> Sequence[TrainingType]:
        types = [
            TrainingType.from_document(doc_id, data)
            for doc_id, data in self._client.list_documents(_types_collection(user_id))
        ]
        # Ids are random, so creation order comes from createdAt.
        types.sort(key=lambda t: (t.created_at or _EPOCH, t.id))
        return types

    def get(self, user_id: str, type_id: str) -> Optional[TrainingType]:
        data = self._client.get_document((*_types_collection(user_id), type_id))
        return TrainingType.from_document(type_id, data) if data is not None else None

    def save(self, user_id: str, training_type: TrainingType) -> None:
        self._client.set_document((*_types_collection(user_id), training_type.id), training_type.to_document())

    def delete(self, user_id: str, type_id: str) -> None:
        self._client.delete_document((*_types_collection(user_id), type_id))

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import TrainingType


class TrainingTypeRepository(Protocol):
    def list_for_user(self, user_id: str) -> Sequence[TrainingType]:
        """Catalog in creation order."""

        raise NotImplementedError

    def get(self, user_id: str, type_id: str) -> Optional[TrainingType]:
        raise NotImplementedError

    def save(self, user_id: str, training_type: TrainingType) -> None:
        """Insert or fully replace a type, keeping its catalog position."""

        raise NotImplementedError

    def delete(self, user_id: str, type_id: str) -> None:
        raise NotImplementedError

from __future__ import annotations

from typing import Any, Optional, Protocol

from ..documents.client import DocumentClient, deep_merge
from ..keyvalue.store import KeyValueStore


class ProfileRepository(Protocol):
    def get(self, user_id: str) -> Optional[dict[str, Any]]:
        raise NotImplementedError

    def merge(self, user_id: str, changes: dict[str, Any]) -> None:
        raise NotImplementedError


class DocumentProfileRepository(ProfileRepository):
    """Remote variant: ``users/{uid}``."""

    def __init__(self, client: DocumentClient):
        self._client = client

    def get(self, user_id: str) -> Optional[dict[str, Any]]:
        return self._client.get_document(("users", user_id))

    def merge(self, user_id: str, changes: dict[str, Any]) -> None:
        self._client.set_document(("users", user_id), changes, merge=True)


class KeyValueProfileRepository(ProfileRepository):
    """Fallback variant: ``user_{uid}`` key."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    def get(self, user_id: str) -> Optional[dict[str, Any]]:
        return self._store.get(f"user_{user_id}")

    def merge(self, user_id: str, changes: dict[str, Any]) -> None:
        self._store.update(f"user_{user_id}", lambda current: deep_merge(current or {}, changes))

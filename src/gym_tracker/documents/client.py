from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol, Sequence

# A path is a sequence of segments alternating collection / document id.
# Collections have an odd number of segments, documents an even number.
DocumentPath = Sequence[str]


def split_document_path(path: DocumentPath) -> tuple[str, str]:
    """Split ``("users", "u1", "trainingTypes", "t1")`` into ``("users/u1/trainingTypes", "t1")``."""
    if len(path) < 2 or len(path) % 2:
        raise ValueError(f"Not a document path: {'/'.join(path)!r}")
    return collection_key(path[:-1]), str(path[-1])


def collection_key(path: DocumentPath) -> str:
    if len(path) % 2 == 0:
        raise ValueError(f"Not a collection path: {'/'.join(path)!r}")
    return "/".join(str(p) for p in path)


def deep_merge(base: dict[str, Any], changes: dict[str, Any]) -> dict[str, Any]:
    """Merge nested maps the way a document store's merge write does."""
    merged = dict(base)
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class DocumentClient(Protocol):
    def get_document(self, path: DocumentPath) -> Optional[dict[str, Any]]:
        raise NotImplementedError

    def list_documents(self, collection: DocumentPath) -> list[tuple[str, dict[str, Any]]]:
        """All ``(doc_id, data)`` pairs in a collection, ordered by document id."""

        raise NotImplementedError

    def set_document(self, path: DocumentPath, data: dict[str, Any], *, merge: bool = False) -> None:
        raise NotImplementedError

    def delete_document(self, path: DocumentPath) -> None:
        """Delete a document; deleting a missing document is not an error."""

        raise NotImplementedError

    def server_timestamp(self) -> datetime:
        raise NotImplementedError

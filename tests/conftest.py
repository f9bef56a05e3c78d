from __future__ import annotations

import copy
import json
import threading
import time
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional

import pytest

from gym_tracker.backend.selector import BackendDecision
from gym_tracker.container import build_services
from gym_tracker.core.exceptions import StoreUnavailable
from gym_tracker.documents.client import DocumentClient, collection_key, deep_merge, split_document_path


class InMemoryDocumentClient(DocumentClient):
    """Mocked remote store. Values are JSON round-tripped like a real backend.

    ``delay`` maps a collection path to seconds to sleep before listing, which
    lets tests force shard fetches to complete out of order. ``now`` pins the
    store clock.
    """

    def __init__(self, *, delay: Optional[Callable[[str], float]] = None, now: Optional[datetime] = None):
        self._docs: dict[str, dict[str, dict]] = {}
        self._now = now
        self._lock = threading.Lock()
        self._delay = delay
        self.list_calls: list[str] = []

    def get_document(self, path):
        collection, doc_id = split_document_path(path)
        with self._lock:
            data = self._docs.get(collection, {}).get(doc_id)
            return copy.deepcopy(data) if data is not None else None

    def list_documents(self, collection):
        key = collection_key(collection)
        if self._delay:
            time.sleep(self._delay(key))
        with self._lock:
            self.list_calls.append(key)
            docs = self._docs.get(key, {})
            return [(doc_id, copy.deepcopy(docs[doc_id])) for doc_id in sorted(docs)]

    def set_document(self, path, data, *, merge=False):
        collection, doc_id = split_document_path(path)
        data = json.loads(json.dumps(data))
        with self._lock:
            docs = self._docs.setdefault(collection, {})
            if merge and doc_id in docs:
                data = deep_merge(docs[doc_id], data)
            docs[doc_id] = data

    def delete_document(self, path):
        collection, doc_id = split_document_path(path)
        with self._lock:
            self._docs.get(collection, {}).pop(doc_id, None)

    def server_timestamp(self):
        return self._now or datetime.now(timezone.utc)

    def raw(self, *path) -> Optional[dict]:
        collection, doc_id = split_document_path(path)
        return self._docs.get(collection, {}).get(doc_id)


class UnavailableDocumentClient(InMemoryDocumentClient):
    def list_documents(self, collection):
        raise StoreUnavailable("network down")

    def set_document(self, path, data, *, merge=False):
        raise StoreUnavailable("network down")


class InMemoryKeyValueStore:
    def __init__(self):
        self._values: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            raw = self._values.get(key)
            return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._values[key] = json.dumps(value)

    def update(self, key, mutate):
        with self._lock:
            raw = self._values.get(key)
            value = mutate(json.loads(raw) if raw is not None else None)
            self._values[key] = json.dumps(value)
            return value


REMOTE = BackendDecision(remote_available=True)
FALLBACK = BackendDecision(remote_available=False, reason="Remote store setting 'password' is a placeholder")


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 2, 15, 8, 30, tzinfo=timezone.utc)


@pytest.fixture
def today() -> date:
    return date(2024, 2, 15)


@pytest.fixture
def document_client() -> InMemoryDocumentClient:
    return InMemoryDocumentClient()


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def remote_container(document_client):
    return build_services(REMOTE, document_client=document_client)


@pytest.fixture
def fallback_container(kv_store):
    return build_services(FALLBACK, kv_store=kv_store)


@pytest.fixture(params=["remote", "fallback"])
def container(request, document_client, kv_store):
    """Runs a test once per backend variant."""
    if request.param == "remote":
        return build_services(REMOTE, document_client=document_client)
    return build_services(FALLBACK, kv_store=kv_store)

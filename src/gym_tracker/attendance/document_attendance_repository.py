from __future__ import annotations

from typing import Sequence

from ..documents.client import DocumentClient
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _days_collection(user_id: str, shard: str) -> tuple[str, ...]:
    return ("users", user_id, "attendances", shard, "days")


class DocumentAttendanceRepository(AttendanceRepository):
    """Remote variant: ``users/{uid}/attendances/{YYYY-MM}/days/{date}``."""

    def __init__(self, client: DocumentClient):
        self._client = client

    def put(self, user_id: str, shard: str, record: AttendanceRecord) -> None:
        self._client.set_document((*_days_collection(user_id, shard), record.date), record.to_document())

    def delete(self, user_id: str, shard: str, date: str) -> None:
        self._client.delete_document((*_days_collection(user_id, shard), date))

    def list_shard(self, user_id: str, shard: str) -> Sequence[AttendanceRecord]:
        docs = self._client.list_documents(_days_collection(user_id, shard))
        records = [AttendanceRecord.from_document(data) for _, data in docs]
        records.sort(key=lambda r: r.date)
        return records

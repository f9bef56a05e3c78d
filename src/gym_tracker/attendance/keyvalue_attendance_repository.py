from __future__ import annotations

from typing import Optional, Sequence

from ..keyvalue.store import KeyValueStore
from .model import AttendanceRecord
from .repository import AttendanceRepository


def attendance_key(user_id: str) -> str:
    return f"attendance_{user_id}"


class KeyValueAttendanceRepository(AttendanceRepository):
    """Fallback variant: one ``date -> record`` blob per user.

    Sharding is logical only; a shard read filters the blob by its
    ``YYYY-MM`` prefix.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    def put(self, user_id: str, shard: str, record: AttendanceRecord) -> None:
        def _upsert(blob: Optional[dict]) -> dict:
            blob = dict(blob or {})
            blob[record.date] = record.to_document()
            return blob

        self._store.update(attendance_key(user_id), _upsert)

    def delete(self, user_id: str, shard: str, date: str) -> None:
        def _drop(blob: Optional[dict]) -> dict:
            blob = dict(blob or {})
            blob.pop(date, None)
            return blob

        self._store.update(attendance_key(user_id), _drop)

    def list_shard(self, user_id: str, shard: str) -> Sequence[AttendanceRecord]:
        blob = self._store.get(attendance_key(user_id)) or {}
        records = [
            AttendanceRecord.from_document(data)
            for day, data in blob.items()
            if day.startswith(f"{shard}-")
        ]
        records.sort(key=lambda r: r.date)
        return records

from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Shard-level persistence for one backend variant.

    Implementations must be indistinguishable by behavior: upsert by date,
    delete of a missing date is a no-op, an empty shard reads as ``[]`` and
    shard reads are ordered by date.
    """

    def put(self, user_id: str, shard: str, record: AttendanceRecord) -> None:
        raise NotImplementedError

    def delete(self, user_id: str, shard: str, date: str) -> None:
        raise NotImplementedError

    def list_shard(self, user_id: str, shard: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

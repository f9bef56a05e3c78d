from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import from_iso_instant, to_iso_instant


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attended day for a user, identified by its date."""

    date: str
    timestamp: Optional[datetime]
    training_type_id: Optional[str] = None
    notes: Optional[str] = None

    @property
    def shard_key(self) -> str:
        return self.date[:7]

    def to_document(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "timestamp": to_iso_instant(self.timestamp) if self.timestamp else None,
            "trainingTypeId": self.training_type_id,
            "notes": self.notes,
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "AttendanceRecord":
        return cls(
            date=str(data["date"]),
            timestamp=from_iso_instant(data.get("timestamp")),
            training_type_id=data.get("trainingTypeId") or None,
            notes=data.get("notes") or None,
        )

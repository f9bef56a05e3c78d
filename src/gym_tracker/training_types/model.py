from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import from_iso_instant, to_iso_instant


@dataclass(frozen=True)
class TrainingType:
    """User-defined workout tag attachable to attendance records."""

    id: str
    name: str
    color: str
    icon: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "color": self.color,
            "icon": self.icon,
            "createdAt": to_iso_instant(self.created_at) if self.created_at else None,
        }

    @classmethod
    def from_document(cls, type_id: str, data: dict[str, Any]) -> "TrainingType":
        return cls(
            id=type_id,
            name=str(data.get("name", "")),
            color=str(data.get("color", "")),
            icon=data.get("icon") or None,
            created_at=from_iso_instant(data.get("createdAt")),
        )

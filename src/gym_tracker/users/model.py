from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import from_iso_instant


@dataclass(frozen=True)
class UserProfile:
    email: str
    display_name: Optional[str] = None
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
    default_training_type: Optional[str] = None

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "UserProfile":
        preferences = data.get("preferences") or {}
        return cls(
            email=str(data.get("email", "")),
            display_name=data.get("displayName") or None,
            created_at=from_iso_instant(data.get("createdAt")),
            last_login_at=from_iso_instant(data.get("lastLoginAt")),
            default_training_type=preferences.get("defaultTrainingType") or None,
        )

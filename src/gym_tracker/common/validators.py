from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import ValidationError

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_hex_color(value: str, field_name: str = "color") -> str:
    if not isinstance(value, str) or not _HEX_COLOR.match(value.strip()):
        raise ValidationError(f"{field_name} must be a hex color like #6366f1")
    return value.strip()


def optional_text(value: Optional[str], field_name: str) -> Optional[str]:
    """Blank or missing text becomes ``None``."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value.strip() or None


def require_month(month: int) -> int:
    if not 1 <= int(month) <= 12:
        raise ValidationError(f"month must be between 1 and 12, got {month}")
    return int(month)


def require_user_id(user_id: str) -> str:
    """A missing user id is a caller bug, not a recoverable condition."""
    if not user_id or not str(user_id).strip():
        raise ValueError("user_id is required")
    return str(user_id)

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Optional

from ..core.exceptions import ValidationError

_ISO_DAY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def require_iso_day(value: str) -> str:
    """Return ``value`` unchanged if it is a real calendar day in YYYY-MM-DD form."""
    if not isinstance(value, str) or not _ISO_DAY.match(value):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    try:
        parse_iso_date(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date {value!r}: {e}") from e
    return value


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def to_iso_instant(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def from_iso_instant(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

"""Year-month sharding of attendance records."""

from __future__ import annotations

from ..common.datetime_utils import require_iso_day
from ..common.validators import require_month


def shard_key_for_date(date: str) -> str:
    """``"2024-02-29"`` -> ``"2024-02"``. The date is validated first."""
    return require_iso_day(date)[:7]


def shard_key(year: int, month: int) -> str:
    return f"{int(year):04d}-{require_month(month):02d}"


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``(year, month)`` by ``delta`` months, rolling the year over."""
    index = int(year) * 12 + (int(month) - 1) + delta
    return index // 12, index % 12 + 1


def range_shards(center_year: int, center_month: int) -> list[tuple[int, int]]:
    """Previous, current and next month around the center, in calendar order."""
    require_month(center_month)
    return [shift_month(center_year, center_month, delta) for delta in (-1, 0, 1)]

"""Count-based statistics over a window of attendance records.

Everything here is pure and total: empty input yields zero counts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..core.constants import (
    DEFAULT_TYPE_COLOR,
    DEFAULT_TYPE_ICON,
    MONTH_NAMES,
    MONTHS_PER_YEAR,
    UNTYPED_COLOR,
    UNTYPED_ICON,
    UNTYPED_ID,
    UNTYPED_NAME,
)
from ..training_types.model import TrainingType


@dataclass(frozen=True)
class MonthCount:
    month: int
    name: str
    count: int

    def to_dict(self) -> dict:
        return {"month": self.month, "name": self.name, "count": self.count}


@dataclass(frozen=True)
class WorkoutTypeStat:
    type_id: str
    name: str
    icon: str
    color: str
    count: int

    def to_dict(self) -> dict:
        return {"typeId": self.type_id, "name": self.name, "icon": self.icon, "color": self.color, "count": self.count}


def _month_prefix(year: int, month: int) -> str:
    return f"{int(year):04d}-{int(month):02d}-"


def count_in_month(records: Iterable[AttendanceRecord], year: int, month: int) -> int:
    prefix = _month_prefix(year, month)
    return sum(1 for r in records if r.date.startswith(prefix))


def monthly_breakdown(records: Sequence[AttendanceRecord], year: int) -> list[MonthCount]:
    counts = [0] * MONTHS_PER_YEAR
    year_prefix = f"{int(year):04d}-"
    for record in records:
        if record.date.startswith(year_prefix):
            counts[int(record.date[5:7]) - 1] += 1
    return [MonthCount(month=i, name=MONTH_NAMES[i], count=c) for i, c in enumerate(counts)]


def type_frequency(records: Iterable[AttendanceRecord], catalog: Sequence[TrainingType]) -> list[WorkoutTypeStat]:
    known = {t.id for t in catalog}
    counts: dict[str, int] = {}
    untyped = 0
    for record in records:
        if record.training_type_id and record.training_type_id in known:
            counts[record.training_type_id] = counts.get(record.training_type_id, 0) + 1
        else:
            untyped += 1

    stats = [
        WorkoutTypeStat(
            type_id=t.id,
            name=t.name,
            icon=t.icon or DEFAULT_TYPE_ICON,
            color=t.color or DEFAULT_TYPE_COLOR,
            count=counts[t.id],
        )
        for t in catalog
        if counts.get(t.id)
    ]
    if untyped:
        stats.append(
            WorkoutTypeStat(type_id=UNTYPED_ID, name=UNTYPED_NAME, icon=UNTYPED_ICON, color=UNTYPED_COLOR, count=untyped)
        )

    # sort is stable: ties keep catalog order, untyped last
    stats.sort(key=lambda s: s.count, reverse=True)
    return stats


def month_type_frequency(
    records: Iterable[AttendanceRecord],
    catalog: Sequence[TrainingType],
    year: int,
    month: int,
) -> list[WorkoutTypeStat]:
    prefix = _month_prefix(year, month)
    return type_frequency([r for r in records if r.date.startswith(prefix)], catalog)


def max_count(counts: Iterable[int]) -> int:
    """Largest count, never below 1, for scaling bar charts."""
    return max([1, *counts])

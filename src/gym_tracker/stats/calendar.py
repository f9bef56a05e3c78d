"""Calendar grid projections of attendance.

Cells are rebuilt from the record window on every call; nothing here is
mutated in place, so an edited record or training type shows up the next time
a grid is generated.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Mapping, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import format_iso_date
from ..core.constants import CALENDAR_GRID_CELLS, MONTH_NAMES, MONTHS_PER_YEAR
from ..training_types.model import TrainingType


@dataclass(frozen=True)
class CalendarDayCell:
    day_number: int
    full_date: str
    is_current_period: bool
    is_today: bool
    attended: bool
    training_type_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "dayNumber": self.day_number,
            "fullDate": self.full_date,
            "isCurrentPeriod": self.is_current_period,
            "isToday": self.is_today,
            "attended": self.attended,
            "trainingTypeId": self.training_type_id,
        }


@dataclass(frozen=True)
class MonthGrid:
    month: int
    name: str
    days: list[CalendarDayCell]

    def to_dict(self) -> dict:
        return {"month": self.month, "name": self.name, "days": [d.to_dict() for d in self.days]}


_BLANK = CalendarDayCell(day_number=0, full_date="", is_current_period=False, is_today=False, attended=False)


def _index(records: Iterable[AttendanceRecord]) -> dict[str, AttendanceRecord]:
    return {r.date: r for r in records}


def _leading_days(first: date) -> int:
    # Weeks start on Sunday.
    return (first.weekday() + 1) % 7


def _cell(day: date, *, current: bool, today: Optional[date], by_date: Mapping[str, AttendanceRecord]) -> CalendarDayCell:
    full_date = format_iso_date(day)
    record = by_date.get(full_date)
    return CalendarDayCell(
        day_number=day.day,
        full_date=full_date,
        is_current_period=current,
        is_today=current and day == today,
        attended=record is not None,
        training_type_id=record.training_type_id if record else None,
    )


def build_month_grid(
    year: int,
    month: int,
    records: Sequence[AttendanceRecord],
    *,
    today: Optional[date] = None,
) -> list[CalendarDayCell]:
    """Six whole weeks around ``month``, padded with neighbouring-month days."""
    first = date(int(year), int(month), 1)
    start = first - timedelta(days=_leading_days(first))
    by_date = _index(records)

    cells = []
    for offset in range(CALENDAR_GRID_CELLS):
        day = start + timedelta(days=offset)
        cells.append(_cell(day, current=day.month == first.month, today=today, by_date=by_date))
    return cells


def build_year_grid(year: int, records: Sequence[AttendanceRecord], *, today: Optional[date] = None) -> list[MonthGrid]:
    by_date = _index(records)
    grids = []
    for month in range(1, MONTHS_PER_YEAR + 1):
        first = date(int(year), month, 1)
        days = [_BLANK] * _leading_days(first)
        total = calendar.monthrange(int(year), month)[1]
        days.extend(
            _cell(first + timedelta(days=i), current=True, today=today, by_date=by_date)
            for i in range(total)
        )
        grids.append(MonthGrid(month=month - 1, name=MONTH_NAMES[month - 1], days=days))
    return grids


def resolve_day_types(
    records: Iterable[AttendanceRecord],
    catalog: Sequence[TrainingType],
) -> dict[str, TrainingType]:
    """``date -> TrainingType`` for records whose type id resolves."""
    by_id = {t.id: t for t in catalog}
    resolved = {}
    for record in records:
        training_type = by_id.get(record.training_type_id) if record.training_type_id else None
        if training_type is not None:
            resolved[record.date] = training_type
    return resolved

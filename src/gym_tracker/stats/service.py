from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.service import ShardedAttendanceStore
from ..common.validators import require_month
from ..training_types.service import TrainingTypeRegistry
from .aggregation import (
    MonthCount,
    WorkoutTypeStat,
    count_in_month,
    max_count,
    month_type_frequency,
    monthly_breakdown,
    type_frequency,
)
from .calendar import CalendarDayCell, MonthGrid, build_month_grid, build_year_grid, resolve_day_types


@dataclass(frozen=True)
class YearStats:
    year: int
    month: int
    monthly_count: int
    yearly_count: int
    monthly_data: list[MonthCount]
    workout_type_stats: list[WorkoutTypeStat]
    monthly_workout_stats: list[WorkoutTypeStat]

    @property
    def total_count(self) -> int:
        # Only the current year is loaded.
        return self.yearly_count

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "monthlyCount": self.monthly_count,
            "yearlyCount": self.yearly_count,
            "totalCount": self.total_count,
            "monthlyData": [m.to_dict() for m in self.monthly_data],
            "maxMonthlyCount": max_count(m.count for m in self.monthly_data),
            "workoutTypeStats": [s.to_dict() for s in self.workout_type_stats],
            "monthlyWorkoutStats": [s.to_dict() for s in self.monthly_workout_stats],
            "maxWorkoutCount": max_count(s.count for s in self.workout_type_stats),
        }


@dataclass(frozen=True)
class CalendarMonthView:
    year: int
    month: int
    days: list[CalendarDayCell]
    icons: dict[str, str]

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "days": [d.to_dict() for d in self.days],
            "icons": self.icons,
        }


class StatsService:
    """Feeds store reads into the aggregation functions.

    Records and catalog are fetched concurrently and every view is rebuilt
    from both on each call.
    """

    def __init__(self, attendance: ShardedAttendanceStore, training_types: TrainingTypeRegistry):
        self._attendance = attendance
        self._types = training_types

    async def year_stats(self, user_id: str, year: int, month: int) -> YearStats:
        month = require_month(month)
        records, catalog = await asyncio.gather(
            self._attendance.get_year(user_id, year),
            self._types.list_types(user_id),
        )
        return YearStats(
            year=int(year),
            month=month,
            monthly_count=count_in_month(records, year, month),
            yearly_count=len(records),
            monthly_data=monthly_breakdown(records, year),
            workout_type_stats=type_frequency(records, catalog),
            monthly_workout_stats=month_type_frequency(records, catalog, year, month),
        )

    async def calendar_month(self, user_id: str, year: int, month: int, *, today: Optional[date] = None) -> CalendarMonthView:
        month = require_month(month)
        records, catalog = await asyncio.gather(
            self._attendance.get_range(user_id, year, month),
            self._types.list_types(user_id),
        )
        icons = {day: t.icon for day, t in resolve_day_types(records, catalog).items() if t.icon}
        return CalendarMonthView(
            year=int(year),
            month=month,
            days=build_month_grid(year, month, records, today=today or date.today()),
            icons=icons,
        )

    async def calendar_year(self, user_id: str, year: int, *, today: Optional[date] = None) -> list[MonthGrid]:
        records = await self._attendance.get_year(user_id, year)
        return build_year_grid(year, records, today=today or date.today())

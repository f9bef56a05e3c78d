from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..backend.selector import BackendDecision
from ..common.datetime_utils import now_utc, require_iso_day
from ..common.validators import require_month, require_user_id
from ..core.constants import MONTHS_PER_YEAR
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .sharding import range_shards, shard_key, shard_key_for_date

logger = logging.getLogger(__name__)


class ShardedAttendanceStore:
    """Attendance reads and writes over year-month shards.

    The repository is whichever backend variant the process resolved at
    startup; callers never branch on it. Multi-shard reads fire every shard
    fetch before awaiting any and reassemble in calendar order.
    """

    def __init__(
        self,
        repository: AttendanceRepository,
        decision: BackendDecision,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._repo = repository
        self._decision = decision
        self._clock = clock or now_utc

    def is_using_fallback(self) -> bool:
        return self._decision.using_fallback

    async def mark(
        self,
        user_id: str,
        date: str,
        training_type_id: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        user_id = require_user_id(user_id)
        shard = shard_key_for_date(date)
        record = AttendanceRecord(
            date=date,
            timestamp=self._clock(),
            training_type_id=training_type_id or None,
            notes=notes or None,
        )
        await asyncio.to_thread(self._repo.put, user_id, shard, record)
        logger.debug("Attendance marked for %s on %s", user_id, date)

    async def remove(self, user_id: str, date: str) -> None:
        user_id = require_user_id(user_id)
        shard = shard_key_for_date(date)
        await asyncio.to_thread(self._repo.delete, user_id, shard, date)
        logger.debug("Attendance removed for %s on %s", user_id, date)

    async def get_record(self, user_id: str, date: str) -> Optional[AttendanceRecord]:
        user_id = require_user_id(user_id)
        shard = shard_key_for_date(date)
        records = await asyncio.to_thread(self._repo.list_shard, user_id, shard)
        return next((r for r in records if r.date == date), None)

    async def toggle(self, user_id: str, date: str) -> bool:
        """Flip attendance for a day; returns whether the day is now attended."""
        if await self.get_record(user_id, date):
            await self.remove(user_id, date)
            return False
        await self.mark(user_id, date)
        return True

    async def get_month(self, user_id: str, year: int, month: int) -> list[AttendanceRecord]:
        user_id = require_user_id(user_id)
        shard = shard_key(year, require_month(month))
        records = await asyncio.to_thread(self._repo.list_shard, user_id, shard)
        return list(records)

    async def get_year(self, user_id: str, year: int) -> list[AttendanceRecord]:
        months = [(int(year), month) for month in range(1, MONTHS_PER_YEAR + 1)]
        records = await self._fetch_shards(user_id, months)
        logger.debug("Loaded %d records for %s in %s", len(records), user_id, year)
        return records

    async def get_range(self, user_id: str, center_year: int, center_month: int) -> list[AttendanceRecord]:
        return await self._fetch_shards(user_id, range_shards(center_year, center_month))

    async def _fetch_shards(self, user_id: str, months: Sequence[tuple[int, int]]) -> list[AttendanceRecord]:
        user_id = require_user_id(user_id)
        tasks = [
            asyncio.ensure_future(asyncio.to_thread(self._repo.list_shard, user_id, shard_key(year, month)))
            for year, month in months
        ]
        # gather keeps argument order, so results line up with ``months``
        # no matter which fetch finishes first.
        results = await asyncio.gather(*tasks)
        return [record for shard_records in results for record in shard_records]

import asyncio
import json

import pytest

from conftest import FALLBACK
from gym_tracker.container import build_services
from gym_tracker.core.exceptions import StoreUnavailable
from gym_tracker.keyvalue.store import JsonFileKeyValueStore


def test_values_round_trip_through_json_files(tmp_path):
    store = JsonFileKeyValueStore(tmp_path / "data")

    assert store.get("attendance_u1") is None
    store.set("attendance_u1", {"2024-01-01": {"date": "2024-01-01"}})

    assert store.get("attendance_u1") == {"2024-01-01": {"date": "2024-01-01"}}
    assert json.loads((tmp_path / "data" / "attendance_u1.json").read_text(encoding="utf-8"))


def test_keys_are_escaped_into_file_names(tmp_path):
    store = JsonFileKeyValueStore(tmp_path)
    store.set("user_a/../b", {"email": "x"})

    assert store.get("user_a/../b") == {"email": "x"}
    assert [p.parent for p in tmp_path.iterdir()] == [tmp_path]


def test_update_is_read_modify_write(tmp_path):
    store = JsonFileKeyValueStore(tmp_path)
    store.update("counter", lambda v: (v or 0) + 1)

    assert store.update("counter", lambda v: (v or 0) + 1) == 2


def test_corrupt_file_surfaces_as_store_unavailable(tmp_path):
    (tmp_path / "attendance_u1.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreUnavailable):
        JsonFileKeyValueStore(tmp_path).get("attendance_u1")


@pytest.mark.asyncio
async def test_concurrent_marks_for_one_user_are_all_kept(tmp_path):
    container = build_services(FALLBACK, kv_store=JsonFileKeyValueStore(tmp_path))
    store = container.attendance_store

    await asyncio.gather(*(store.mark("u1", f"2024-03-{day:02d}") for day in range(1, 32)))
    records = await store.get_month("u1", 2024, 3)

    assert len(records) == 31

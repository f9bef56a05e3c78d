from __future__ import annotations

import pytest

from conftest import FALLBACK, REMOTE, InMemoryDocumentClient, UnavailableDocumentClient
from gym_tracker.attendance.document_attendance_repository import DocumentAttendanceRepository
from gym_tracker.attendance.service import ShardedAttendanceStore
from gym_tracker.core.exceptions import StoreUnavailable, ValidationError


@pytest.mark.asyncio
async def test_mark_twice_keeps_one_record_with_latest_type(container):
    store = container.attendance_store

    await store.mark("u1", "2024-01-10", training_type_id="A")
    await store.mark("u1", "2024-01-10", training_type_id="B", notes="legs")

    records = await store.get_month("u1", 2024, 1)
    assert [r.date for r in records] == ["2024-01-10"]
    assert records[0].training_type_id == "B"
    assert records[0].notes == "legs"


@pytest.mark.asyncio
async def test_mark_same_arguments_is_idempotent(container):
    store = container.attendance_store

    for _ in range(3):
        await store.mark("u1", "2024-01-10", training_type_id="A")

    records = await store.get_month("u1", 2024, 1)
    assert len(records) == 1
    assert records[0].training_type_id == "A"


@pytest.mark.asyncio
async def test_remove_missing_date_is_noop(container):
    store = container.attendance_store

    await store.remove("u1", "2024-01-10")
    await store.mark("u1", "2024-01-11")
    await store.remove("u1", "2024-01-11")
    await store.remove("u1", "2024-01-11")

    assert await store.get_month("u1", 2024, 1) == []


@pytest.mark.asyncio
async def test_month_reads_only_their_shard(container):
    store = container.attendance_store
    for day in ["2024-01-31", "2024-02-01", "2024-02-29", "2024-03-01", "2023-02-10"]:
        await store.mark("u1", day)

    feb = await store.get_month("u1", 2024, 2)
    assert [r.date for r in feb] == ["2024-02-01", "2024-02-29"]
    assert await store.get_month("u1", 2024, 4) == []


@pytest.mark.asyncio
async def test_records_are_scoped_by_user(container):
    store = container.attendance_store
    await store.mark("u1", "2024-05-01")
    await store.mark("u2", "2024-05-02")

    assert [r.date for r in await store.get_month("u1", 2024, 5)] == ["2024-05-01"]
    assert [r.date for r in await store.get_month("u2", 2024, 5)] == ["2024-05-02"]


@pytest.mark.asyncio
async def test_year_matches_concatenated_months(container):
    store = container.attendance_store
    for day in ["2024-12-24", "2024-01-02", "2024-06-15", "2024-06-01", "2025-01-01"]:
        await store.mark("u1", day)

    year = await store.get_year("u1", 2024)
    months = [r for m in range(1, 13) for r in await store.get_month("u1", 2024, m)]

    assert [r.date for r in year] == [r.date for r in months]
    assert [r.date for r in year] == ["2024-01-02", "2024-06-01", "2024-06-15", "2024-12-24"]


@pytest.mark.asyncio
async def test_year_order_ignores_fetch_completion_order():
    # Later months answer first.
    client = InMemoryDocumentClient(delay=lambda key: (13 - int(key.split("/")[3][5:7])) * 0.01)
    store = ShardedAttendanceStore(DocumentAttendanceRepository(client), REMOTE)
    for day in ["2024-11-05", "2024-03-03", "2024-07-07", "2024-01-01"]:
        await store.mark("u1", day)

    year = await store.get_year("u1", 2024)

    assert [r.date for r in year] == ["2024-01-01", "2024-03-03", "2024-07-07", "2024-11-05"]
    assert len(client.list_calls) == 12


@pytest.mark.asyncio
async def test_range_rolls_over_year_boundaries(container):
    store = container.attendance_store
    for day in ["2023-12-31", "2024-01-15", "2024-02-01", "2024-03-01"]:
        await store.mark("u1", day)

    january = await store.get_range("u1", 2024, 1)
    assert [r.date for r in january] == ["2023-12-31", "2024-01-15", "2024-02-01"]

    await store.mark("u1", "2025-01-02")
    december = await store.get_range("u1", 2024, 12)
    assert [r.date for r in december] == ["2025-01-02"]


@pytest.mark.asyncio
async def test_toggle_flips_attendance(container):
    store = container.attendance_store

    assert await store.toggle("u1", "2024-04-04") is True
    assert await store.get_record("u1", "2024-04-04") is not None
    assert await store.toggle("u1", "2024-04-04") is False
    assert await store.get_record("u1", "2024-04-04") is None


@pytest.mark.parametrize("bad", ["2024-2-01", "2024-02-30", "20240201", "", "2024-13-01"])
@pytest.mark.asyncio
async def test_malformed_dates_are_rejected(container, bad):
    with pytest.raises(ValidationError):
        await container.attendance_store.mark("u1", bad)


@pytest.mark.asyncio
async def test_month_outside_range_is_rejected(container):
    with pytest.raises(ValidationError):
        await container.attendance_store.get_month("u1", 2024, 13)


@pytest.mark.asyncio
async def test_missing_user_fails_fast(container):
    with pytest.raises(ValueError):
        await container.attendance_store.mark("", "2024-01-01")


@pytest.mark.asyncio
async def test_backend_failure_propagates_as_store_unavailable():
    store = ShardedAttendanceStore(DocumentAttendanceRepository(UnavailableDocumentClient()), REMOTE)

    with pytest.raises(StoreUnavailable):
        await store.mark("u1", "2024-01-01")
    with pytest.raises(StoreUnavailable):
        await store.get_year("u1", 2024)


@pytest.mark.asyncio
async def test_mark_stamps_timestamp_from_clock(document_client, fixed_now):
    store = ShardedAttendanceStore(DocumentAttendanceRepository(document_client), REMOTE, clock=lambda: fixed_now)

    await store.mark("u1", "2024-02-15", training_type_id="A")

    assert document_client.raw("users", "u1", "attendances", "2024-02", "days", "2024-02-15") == {
        "date": "2024-02-15",
        "timestamp": "2024-02-15T08:30:00+00:00",
        "trainingTypeId": "A",
        "notes": None,
    }


def test_is_using_fallback_reflects_decision(remote_container, fallback_container):
    assert remote_container.attendance_store.is_using_fallback() is False
    assert fallback_container.attendance_store.is_using_fallback() is True
    assert FALLBACK.reason


@pytest.mark.asyncio
async def test_record_stored_without_timestamp_reads_back_as_none(document_client):
    document_client.set_document(("users", "u1", "attendances", "2024-02", "days", "2024-02-01"), {"date": "2024-02-01"})
    store = ShardedAttendanceStore(DocumentAttendanceRepository(document_client), REMOTE)

    [record] = await store.get_month("u1", 2024, 2)

    assert record.timestamp is None
    assert record.to_document()["timestamp"] is None

from datetime import date

import pytest


async def _seed(container):
    registry = container.training_type_registry
    store = container.attendance_store
    cardio = await registry.create_type("u1", name="Cardio", color="#ef4444", icon="🏃")
    strength = await registry.create_type("u1", name="Strength", color="#6366f1")
    for day, type_id in [
        ("2024-02-01", cardio),
        ("2024-02-02", strength),
        ("2024-02-03", cardio),
        ("2024-03-01", None),
        ("2024-01-31", cardio),
    ]:
        await store.mark("u1", day, training_type_id=type_id)
    return cardio, strength


@pytest.mark.asyncio
async def test_year_stats(container):
    await _seed(container)

    stats = await container.stats_service.year_stats("u1", 2024, 2)
    data = stats.to_dict()

    assert data["yearlyCount"] == 5
    assert data["totalCount"] == 5
    assert data["monthlyCount"] == 3
    assert [m["count"] for m in data["monthlyData"][:4]] == [1, 3, 1, 0]
    assert data["maxMonthlyCount"] == 3
    assert [(s["name"], s["count"]) for s in data["workoutTypeStats"]] == [("Cardio", 3), ("Strength", 1), ("No type", 1)]
    assert [(s["name"], s["count"]) for s in data["monthlyWorkoutStats"]] == [("Cardio", 2), ("Strength", 1)]
    assert data["maxWorkoutCount"] == 3


@pytest.mark.asyncio
async def test_empty_year_stats_degrade_to_zero(container):
    data = (await container.stats_service.year_stats("u1", 2030, 1)).to_dict()

    assert data["yearlyCount"] == 0
    assert data["workoutTypeStats"] == []
    assert data["maxMonthlyCount"] == 1


@pytest.mark.asyncio
async def test_calendar_month_uses_live_catalog(container):
    cardio, _ = await _seed(container)
    view = await container.stats_service.calendar_month("u1", 2024, 2, today=date(2024, 2, 2))

    assert len(view.days) == 42
    assert view.icons["2024-01-31"] == "🏃"
    assert "2024-02-02" not in view.icons

    await container.training_type_registry.update_type("u1", cardio, {"icon": "🚴"})
    view = await container.stats_service.calendar_month("u1", 2024, 2, today=date(2024, 2, 2))

    assert view.icons["2024-02-01"] == "🚴"


@pytest.mark.asyncio
async def test_calendar_year(container):
    await _seed(container)

    grids = await container.stats_service.calendar_year("u1", 2024, today=date(2024, 2, 2))

    attended = [d.full_date for g in grids for d in g.days if d.attended]
    assert attended == ["2024-01-31", "2024-02-01", "2024-02-02", "2024-02-03", "2024-03-01"]

"""Seed a demo user with training types and a few months of attendance.

Goes through the services, so it fills whichever backend the settings select.
"""

from __future__ import annotations

import argparse
import asyncio
import importlib
import random
from datetime import date, timedelta

from gym_tracker.config import get_settings_module
from gym_tracker.container import build_container

DEMO_TYPES = [
    ("Cardio", "#ef4444", "🏃"),
    ("Strength", "#6366f1", "🏋️"),
    ("Yoga", "#22c55e", "🧘"),
]


async def seed(container, user_id: str, *, days: int, seed: int) -> int:
    rng = random.Random(seed)
    await container.profile_store.create_profile(user_id, email=f"{user_id}@example.com", display_name="Demo")

    existing = {t.name for t in await container.training_type_registry.list_types(user_id)}
    for name, color, icon in DEMO_TYPES:
        if name not in existing:
            await container.training_type_registry.create_type(user_id, name=name, color=color, icon=icon)
    type_ids = [t.id for t in await container.training_type_registry.list_types(user_id)]

    marked = 0
    today = date.today()
    for offset in range(days):
        if rng.random() < 0.45:
            day = today - timedelta(days=offset)
            type_id = rng.choice(type_ids + [None])
            await container.attendance_store.mark(user_id, day.strftime("%Y-%m-%d"), training_type_id=type_id)
            marked += 1
    return marked


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--user", default="demo")
    parser.add_argument("--days", type=int, default=120)
    parser.add_argument("--seed", type=int, default=7)
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG), data_dir=str(settings.DATA_DIR))
    marked = asyncio.run(seed(container, args.user, days=args.days, seed=args.seed))

    backend = "local fallback" if container.decision.using_fallback else "remote store"
    print(f"OK: Seeded {marked} attendance days for {args.user!r} ({backend})")


if __name__ == "__main__":
    main()

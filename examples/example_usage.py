"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the storage and statistics live in the services.
"""

import asyncio
import importlib
from datetime import date

from gym_tracker.config import get_settings_module
from gym_tracker.container import build_container


async def run(container, user_id: str) -> None:
    today = date.today()
    cardio = await container.training_type_registry.create_type(user_id, name="Cardio", color="#ef4444", icon="🏃")
    await container.attendance_store.mark(user_id, today.strftime("%Y-%m-%d"), training_type_id=cardio)

    stats = await container.stats_service.year_stats(user_id, today.year, today.month)
    print(stats.to_dict())


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, data_dir=settings.DATA_DIR)
    print("using fallback:", container.attendance_store.is_using_fallback())
    asyncio.run(run(container, "example-user"))


if __name__ == "__main__":
    main()

"""Print what the on-device store currently holds (history size, active workout)."""

import asyncio

from dropset.core.config import get_settings
from dropset.db.session import async_session_maker, engine
from dropset.services.calculations import format_duration
from dropset.services.session_manager import SessionManager
from dropset.services.storage import SqlKeyValueStore, storage_keys


async def check_store():
    settings = get_settings()
    keys = storage_keys(settings.storage_namespace)
    print(f"Store: {settings.database_url}")
    print(f"Keys: {keys.workouts}, {keys.active_workout}")
    manager = SessionManager(SqlKeyValueStore(async_session_maker), keys)
    try:
        await manager.load()
    finally:
        await engine.dispose()

    print(f"Completed workouts: {len(manager.workouts)}")
    print(f"Total volume: {manager.total_volume}")
    for w in manager.history(limit=5):
        print(f"  {w.id} {w.date:%Y-%m-%d} volume={w.total_volume} duration={format_duration(w.duration or 0)}")
    active = manager.active_workout
    if active:
        n_sets = sum(len(ex.sets) for ex in active.exercises)
        print(f"Active workout: {active.id} started {active.started_at.isoformat()} ({n_sets} sets)")
    else:
        print("Active workout: none")


if __name__ == "__main__":
    asyncio.run(check_store())

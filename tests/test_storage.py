"""Tests for the key-value store adapters."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from dropset.core.exceptions import StorageFailure
from dropset.db.session import build_session_maker, create_tables
from dropset.schemas.workout import Workout
from dropset.services.storage import InMemoryStore, SqlKeyValueStore, storage_keys

from factories import START, completed_workout, make_set, make_workout_exercise


def test_storage_keys_are_namespaced():
    keys = storage_keys("dropset_pro")
    assert keys.workouts == "@dropset_pro:workouts"
    assert keys.active_workout == "@dropset_pro:active_workout"


@pytest_asyncio.fixture
async def sql_store(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    await create_tables(engine)
    yield SqlKeyValueStore(build_session_maker(engine))
    await engine.dispose()


class TestInMemoryStore:
    @pytest.mark.asyncio
    async def test_get_missing_key_is_none(self):
        assert await InMemoryStore().get("@x:missing") is None

    @pytest.mark.asyncio
    async def test_set_get_remove(self):
        store = InMemoryStore()
        await store.set("@x:a", {"n": 1, "items": [1, 2]})
        assert await store.get("@x:a") == {"n": 1, "items": [1, 2]}
        await store.remove("@x:a")
        assert await store.get("@x:a") is None

    @pytest.mark.asyncio
    async def test_remove_missing_key_is_fine(self):
        await InMemoryStore().remove("@x:never-set")

    @pytest.mark.asyncio
    async def test_unserializable_value_raises_storage_failure(self):
        store = InMemoryStore()
        with pytest.raises(StorageFailure) as exc_info:
            await store.set("@x:bad", {"when": object()})
        assert exc_info.value.operation == "set"
        assert store.keys() == []

    @pytest.mark.asyncio
    async def test_returned_values_are_copies(self):
        store = InMemoryStore()
        await store.set("@x:a", [1])
        value = await store.get("@x:a")
        value.append(2)
        assert await store.get("@x:a") == [1]


class TestSqlKeyValueStore:
    @pytest.mark.asyncio
    async def test_upsert_and_remove(self, sql_store):
        await sql_store.set("@x:k", [1])
        await sql_store.set("@x:k", [1, 2])
        assert await sql_store.get("@x:k") == [1, 2]
        await sql_store.remove("@x:k")
        assert await sql_store.get("@x:k") is None
        await sql_store.remove("@x:k")

    @pytest.mark.asyncio
    async def test_workout_round_trip(self, sql_store, bench_press):
        workout = completed_workout(
            "w1",
            START,
            exercises=[
                make_workout_exercise(
                    bench_press,
                    sets=[make_set("s1", 100, 5, rpe=8.5, rest_seconds=120), make_set("s2", 40, 10, warmup=True)],
                )
            ],
            total_volume=500,
        )
        workout.notes = "felt strong"
        await sql_store.set("@x:workouts", [workout.to_json_dict()])

        loaded = [Workout.model_validate(w) for w in await sql_store.get("@x:workouts")]

        assert loaded == [workout]

    @pytest.mark.asyncio
    async def test_missing_table_raises_storage_failure(self, tmp_path):
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
        store = SqlKeyValueStore(build_session_maker(engine))
        try:
            with pytest.raises(StorageFailure):
                await store.get("@x:k")
            with pytest.raises(StorageFailure):
                await store.set("@x:k", 1)
        finally:
            await engine.dispose()


def test_stored_json_uses_camel_case(bench_press):
    workout = completed_workout(
        "w1", START, exercises=[make_workout_exercise(bench_press, sets=[make_set("s1", 60, 8)])]
    )
    data = workout.to_json_dict()
    assert {"id", "userId", "date", "startedAt", "completedAt", "duration", "exercises", "totalVolume"} <= set(data)
    assert "notes" not in data
    ex = data["exercises"][0]
    assert ex["exerciseId"] == "ex-bench"
    assert ex["exercise"]["muscleGroup"] == "chest"
    assert ex["sets"][0]["isWarmup"] is False
    assert ex["sets"][0]["isDropset"] is False


def test_old_documents_without_optional_fields_load():
    legacy = {
        "id": "w-old",
        "userId": "u1",
        "date": "2025-01-05T09:00:00Z",
        "startedAt": "2025-01-05T09:00:00Z",
        "exercises": [
            {
                "id": "we1",
                "exerciseId": "ex-squat",
                "exercise": {"id": "ex-squat", "name": "Squat", "muscleGroup": "quadriceps", "equipment": "barbell"},
                "sets": [{"id": "s1", "reps": 5, "weight": 140, "completedAt": "2025-01-05T09:10:00Z"}],
                "order": 0,
            }
        ],
        "someFutureField": {"ignored": True},
    }
    workout = Workout.model_validate(legacy)
    assert workout.is_active
    assert workout.total_volume == 0
    assert workout.exercises[0].sets[0].is_warmup is False
    assert workout.exercises[0].exercise.is_custom is False

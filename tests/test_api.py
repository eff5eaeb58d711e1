"""HTTP surface tests through FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from dropset.main import create_application

from factories import FlakyStore

PREFIX = "/api/v1"

BENCH = {
    "id": "ex-bench",
    "name": "Bench Press",
    "muscleGroup": "chest",
    "equipment": "barbell",
}


@pytest.fixture
def api_store():
    return FlakyStore()


@pytest.fixture
def client(api_store):
    with TestClient(create_application(store=api_store)) as c:
        yield c


def _start_with_exercise(client):
    client.post(f"{PREFIX}/session/start", json={"userId": "u1"})
    client.post(
        f"{PREFIX}/session/exercises",
        json={"id": "we1", "exerciseId": "ex-bench", "exercise": BENCH, "order": 0},
    )


def _add_set(client, set_id, weight, reps, warmup=False):
    return client.post(
        f"{PREFIX}/session/exercises/we1/sets",
        json={"id": set_id, "weight": weight, "reps": reps, "isWarmup": warmup},
    )


def test_health(client):
    assert client.get(f"{PREFIX}/health").json()["status"] == "ok"
    assert client.get(f"{PREFIX}/health/ready").json() == {"status": "ok", "store": "reachable"}


def test_no_active_workout_initially(client):
    response = client.get(f"{PREFIX}/session/active")

    assert response.status_code == 200
    assert response.json() is None


def test_full_session_flow(client):
    _start_with_exercise(client)
    _add_set(client, "s1", 100, 5)
    _add_set(client, "s2", 80, 8)
    _add_set(client, "s0", 40, 10, warmup=True)

    active = client.get(f"{PREFIX}/session/active").json()
    assert [s["id"] for s in active["exercises"][0]["sets"]] == ["s1", "s2", "s0"]

    body = client.post(f"{PREFIX}/session/complete").json()
    assert body["outcome"] == "applied"
    assert body["workout"]["totalVolume"] == 1140
    assert body["workout"]["completedAt"] is not None

    assert client.get(f"{PREFIX}/session/active").json() is None
    history = client.get(f"{PREFIX}/workouts").json()
    assert [w["id"] for w in history] == [body["workout"]["id"]]
    assert client.get(f"{PREFIX}/workouts/{body['workout']['id']}").status_code == 200

    records = client.get(f"{PREFIX}/analytics/personal-records").json()
    assert records["ex-bench"]["oneRepMax"] == 117
    assert client.get(f"{PREFIX}/analytics/volume").json()["totalVolume"] == 1140
    assert client.get(f"{PREFIX}/analytics/volume", params={"days": 30}).json()["totalVolume"] == 1140
    assert client.get(f"{PREFIX}/analytics/summary").json()["workoutCount"] == 1

    streak = client.get(f"{PREFIX}/analytics/streak").json()
    assert streak["currentStreak"] == 1
    assert streak["longestStreak"] == 1

    grid = client.get(f"{PREFIX}/analytics/consistency").json()
    assert len(grid) == 35
    assert grid[-1]["intensity"] == "low"

    previous = client.get(f"{PREFIX}/analytics/previous-session/ex-bench").json()
    assert [s["id"] for s in previous["sets"]] == ["s1", "s2", "s0"]


def test_muscle_xp_and_challenges(client):
    _start_with_exercise(client)
    _add_set(client, "s1", 100, 5)
    _add_set(client, "s2", 80, 8)
    _add_set(client, "s0", 40, 10, warmup=True)
    client.post(f"{PREFIX}/session/complete")

    xp = {m["muscleGroup"]: m for m in client.get(f"{PREFIX}/analytics/muscle-xp").json()}
    assert xp["chest"] == {"muscleGroup": "chest", "xp": 20, "level": 1}
    assert xp["back"]["xp"] == 0

    body = client.get(f"{PREFIX}/analytics/challenges").json()
    progress = {c["type"]: c["current"] for c in body["challenges"]}
    assert progress == {"workouts": 1, "reps": 13, "streak": 1}
    assert body["totalPoints"] == 0


def test_update_and_remove_set(client):
    _start_with_exercise(client)
    _add_set(client, "s1", 60, 10)

    patched = client.patch(f"{PREFIX}/session/exercises/we1/sets/s1", json={"weight": 62.5})
    assert patched.json()["outcome"] == "applied"
    set_ = patched.json()["workout"]["exercises"][0]["sets"][0]
    assert (set_["weight"], set_["reps"]) == (62.5, 10)

    removed = client.delete(f"{PREFIX}/session/exercises/we1/sets/s1")
    assert removed.json()["workout"]["exercises"][0]["sets"] == []


def test_null_for_required_set_field_rejected(client):
    _start_with_exercise(client)
    _add_set(client, "s1", 100, 5)

    for body in ({"reps": None}, {"weight": None, "notes": "x"}, {"completedAt": None}):
        response = client.patch(f"{PREFIX}/session/exercises/we1/sets/s1", json=body)
        assert response.status_code == 422

    set_ = client.get(f"{PREFIX}/session/active").json()["exercises"][0]["sets"][0]
    assert (set_["weight"], set_["reps"]) == (100, 5)
    assert "notes" not in set_

    completed = client.post(f"{PREFIX}/session/complete")
    assert completed.status_code == 200
    assert completed.json()["outcome"] == "applied"
    assert completed.json()["workout"]["totalVolume"] == 500


def test_soft_no_ops_report_outcome(client):
    assert client.post(f"{PREFIX}/session/cancel").json()["outcome"] == "no_active_workout"

    _start_with_exercise(client)
    added = _add_set(client, "s1", 60, 10).json()
    assert added["outcome"] == "applied"
    response = client.post(
        f"{PREFIX}/session/exercises/nope/sets",
        json={"id": "s2", "weight": 60, "reps": 10},
    )
    assert response.json()["outcome"] == "exercise_not_found"

    again = client.post(f"{PREFIX}/session/start", json={"userId": "u2"}).json()
    assert again["outcome"] == "workout_already_active"
    assert again["workout"]["userId"] == "u1"


def test_invalid_set_payload_rejected(client):
    _start_with_exercise(client)

    assert _add_set(client, "s1", -5, 10).status_code == 422


def test_unknown_workout_404(client):
    assert client.get(f"{PREFIX}/workouts/missing").status_code == 404


def test_storage_failure_maps_to_503(client, api_store):
    api_store.fail_set = True

    response = client.post(f"{PREFIX}/session/start", json={"userId": "u1"})

    assert response.status_code == 503
    assert client.get(f"{PREFIX}/session/active").json() is None


def test_tools(client):
    assert client.get(f"{PREFIX}/tools/one-rep-max", params={"weight": 100, "reps": 5}).json()["one_rep_max"] == 117
    assert client.get(f"{PREFIX}/tools/volume", params={"weight": 80, "reps": 8}).json()["volume"] == 640
    drops = client.get(f"{PREFIX}/tools/dropset-weights", params={"current_weight": 100, "units": "lbs"}).json()
    assert drops["weights"] == [80, 60]
    assert client.get(f"{PREFIX}/tools/format-duration", params={"seconds": 3725}).json()["label"] == "1h 2m"
    assert client.get(f"{PREFIX}/tools/one-rep-max", params={"weight": 100, "reps": 0}).status_code == 422

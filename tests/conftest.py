"""Shared fixtures: in-memory store, controllable clock, sample catalog data."""

from itertools import count

import pytest

from dropset.core.enums import Equipment, MuscleGroup
from dropset.schemas.exercise import Exercise
from dropset.services.session_manager import SessionManager

from factories import FakeClock, FlakyStore


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return FlakyStore()


@pytest.fixture
def manager(store, clock):
    ids = count(1)
    return SessionManager(store, clock=clock, id_factory=lambda: f"w{next(ids)}")


@pytest.fixture
def bench_press():
    return Exercise(
        id="ex-bench",
        name="Bench Press",
        muscle_group=MuscleGroup.CHEST,
        equipment=Equipment.BARBELL,
    )

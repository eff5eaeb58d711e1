"""Workout, WorkoutExercise and WorkoutSet schemas.

These are both the stored JSON documents and the API payloads; field names on
the wire are camelCase.
"""

from datetime import datetime, timezone

from pydantic import Field, field_validator

from dropset.core.enums import CommandOutcome
from dropset.schemas.base import CamelModel
from dropset.schemas.exercise import Exercise


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WorkoutSet(CamelModel):
    """One performed set. Warm-up sets never count toward volume or PRs."""

    id: str
    reps: int = Field(ge=0)
    weight: float = Field(ge=0)
    rpe: float | None = Field(None, ge=1, le=10)
    rest_seconds: int | None = Field(None, ge=0)
    is_dropset: bool = False
    is_warmup: bool = False
    notes: str | None = None
    completed_at: datetime = Field(default_factory=utcnow)


class WorkoutSetUpdate(CamelModel):
    """Partial set update; only explicitly provided fields are merged."""

    reps: int | None = Field(None, ge=0)
    weight: float | None = Field(None, ge=0)
    rpe: float | None = Field(None, ge=1, le=10)
    rest_seconds: int | None = Field(None, ge=0)
    is_dropset: bool | None = None
    is_warmup: bool | None = None
    notes: str | None = None
    completed_at: datetime | None = None

    @field_validator("reps", "weight", "is_dropset", "is_warmup", "completed_at")
    @classmethod
    def _required_on_set(cls, value, info):
        # rpe, restSeconds and notes may be cleared with null; these may not
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class WorkoutExercise(CamelModel):
    id: str
    exercise_id: str
    exercise: Exercise
    sets: list[WorkoutSet] = []
    order: int = 0
    is_superset_with: str | None = None


class Workout(CamelModel):
    """Aggregate root. No completed_at means the workout is still in progress."""

    id: str
    user_id: str
    date: datetime
    started_at: datetime
    completed_at: datetime | None = None
    duration: int | None = None  # seconds, set on completion
    exercises: list[WorkoutExercise] = []
    notes: str | None = None
    total_volume: float = 0

    @property
    def is_active(self) -> bool:
        return self.completed_at is None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    def find_exercise(self, exercise_id: str) -> WorkoutExercise | None:
        return next((ex for ex in self.exercises if ex.id == exercise_id), None)


class StartWorkoutRequest(CamelModel):
    user_id: str = Field(..., min_length=1)


class SessionCommandResponse(CamelModel):
    """Outcome of a session command plus the workout it produced or kept."""

    outcome: CommandOutcome
    workout: Workout | None = None

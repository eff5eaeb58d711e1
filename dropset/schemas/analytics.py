"""Derived analytics schemas (computed on read, never stored)."""

from datetime import date, datetime

from dropset.core.enums import ChallengeType, IntensityTier, MuscleGroup, Units
from dropset.schemas.base import CamelModel
from dropset.schemas.workout import WorkoutSet


class PersonalRecord(CamelModel):
    exercise_id: str
    weight: float
    reps: int
    one_rep_max: float
    achieved_at: datetime


class WeeklyVolume(CamelModel):
    week_start: date  # Monday
    total_volume: float
    workout_count: int


class StreakSummary(CamelModel):
    current_streak: int
    longest_streak: int
    last_workout_date: date | None = None
    total_workouts: int = 0


class ConsistencyDay(CamelModel):
    date: date
    volume: float
    workout_count: int
    intensity: IntensityTier


class PeriodSummary(CamelModel):
    days: int
    workout_count: int
    total_volume: float
    average_duration_seconds: float | None = None


class VolumeTotal(CamelModel):
    days: int | None = None
    total_volume: float


class DropsetSuggestion(CamelModel):
    current_weight: float
    units: Units
    weights: list[float]


class PreviousSession(CamelModel):
    """Sets from the most recent completed workout that included an exercise."""

    exercise_id: str
    workout_id: str | None = None
    completed_at: datetime | None = None
    sets: list[WorkoutSet] = []


class MuscleXP(CamelModel):
    muscle_group: MuscleGroup
    xp: int
    level: int


class Challenge(CamelModel):
    id: str
    title: str
    description: str
    type: ChallengeType
    target: int
    current: int
    reward: int  # points
    expires_at: date  # last day of the challenge week (Sunday)
    completed: bool


class WeeklyChallenges(CamelModel):
    week_start: date
    challenges: list[Challenge]
    total_points: int

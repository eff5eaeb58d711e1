"""Shared enums for models and API."""

from enum import Enum


class Units(str, Enum):
    """Weight units; picks the plate increment for rounding."""

    KG = "kg"
    LBS = "lbs"


class MuscleGroup(str, Enum):
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    QUADRICEPS = "quadriceps"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    ABS = "abs"
    ARMS = "arms"
    LEGS = "legs"
    CORE = "core"
    CARDIO = "cardio"


class Equipment(str, Enum):
    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    MACHINE = "machine"
    CABLE = "cable"
    BODYWEIGHT = "bodyweight"
    BAND = "band"
    KETTLEBELL = "kettlebell"
    BENCH = "bench"
    OTHER = "other"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class CommandOutcome(str, Enum):
    """Result of a session command. Anything but APPLIED left state untouched."""

    APPLIED = "applied"
    NO_ACTIVE_WORKOUT = "no_active_workout"
    WORKOUT_ALREADY_ACTIVE = "workout_already_active"
    EXERCISE_NOT_FOUND = "exercise_not_found"
    SET_NOT_FOUND = "set_not_found"


class IntensityTier(str, Enum):
    """Consistency grid tiers by daily volume."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ChallengeType(str, Enum):
    WORKOUTS = "workouts"
    REPS = "reps"
    STREAK = "streak"

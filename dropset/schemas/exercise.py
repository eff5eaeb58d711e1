"""Exercise catalog schema (embedded as a snapshot in workouts)."""

from pydantic import ConfigDict, Field

from dropset.core.enums import Difficulty, Equipment, MuscleGroup
from dropset.schemas.base import CamelModel


class Exercise(CamelModel):
    """Reference data; copied into a workout when the exercise is added."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = Field(..., min_length=1, max_length=255)
    muscle_group: MuscleGroup
    secondary_muscles: list[MuscleGroup] | None = None
    equipment: Equipment
    difficulty: Difficulty | None = None
    description: str | None = None
    instructions: str | None = None
    photo: str | None = None
    tags: list[str] | None = None
    is_custom: bool = False
    created_by: str | None = None

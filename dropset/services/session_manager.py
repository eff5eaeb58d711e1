"""Active-workout state machine with durable persistence.

A SessionManager owns one active-workout slot (Empty or Active) and the list of
completed workouts. Every command computes the next state on a copy, awaits the
store write, and only then publishes the new state. A StorageFailure therefore
leaves the previous state in place. Commands that reference something missing
are soft no-ops reported through CommandOutcome instead of exceptions.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from dropset.core.enums import CommandOutcome
from dropset.core.exceptions import StorageFailure
from dropset.schemas.analytics import PersonalRecord
from dropset.schemas.workout import Workout, WorkoutExercise, WorkoutSet, WorkoutSetUpdate
from dropset.services import analytics
from dropset.services.calculations import generate_id, volume
from dropset.services.storage import KeyValueStore, StorageKeys, storage_keys

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionResult:
    """What a command did, and the workout it produced (or left in place)."""

    outcome: CommandOutcome
    workout: Workout | None = None

    @property
    def applied(self) -> bool:
        return self.outcome == CommandOutcome.APPLIED


def workout_volume(workout: Workout) -> float:
    """Sum of weight * reps over every non-warm-up set."""
    return sum(
        volume(s.weight, s.reps)
        for ex in workout.exercises
        for s in ex.sets
        if not s.is_warmup
    )


class SessionManager:
    def __init__(
        self,
        store: KeyValueStore,
        keys: StorageKeys | None = None,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._store = store
        self._keys = keys or storage_keys()
        self._clock = clock or _utcnow
        self._new_id = id_factory or generate_id
        self._active: Workout | None = None
        self._workouts: list[Workout] = []
        self._lock = asyncio.Lock()

    # ---- Queries ----

    @property
    def active_workout(self) -> Workout | None:
        return self._active

    @property
    def workouts(self) -> tuple[Workout, ...]:
        """Completed workouts in completion order."""
        return tuple(self._workouts)

    def history(self, limit: int | None = None) -> list[Workout]:
        return analytics.sort_history(self._workouts, limit)

    def get_workout(self, workout_id: str) -> Workout | None:
        return next((w for w in self._workouts if w.id == workout_id), None)

    @property
    def personal_records(self) -> dict[str, PersonalRecord]:
        return analytics.personal_records(self._workouts)

    @property
    def total_volume(self) -> float:
        return analytics.total_volume(self._workouts)

    # ---- Loading ----

    async def load(self) -> None:
        """Read history and the active slot from the store."""
        async with self._lock:
            raw_history = await self._store.get(self._keys.workouts)
            raw_active = await self._store.get(self._keys.active_workout)
            try:
                workouts = [Workout.model_validate(w) for w in raw_history or []]
                active = Workout.model_validate(raw_active) if raw_active else None
            except ValidationError as e:
                raise StorageFailure("load", self._keys.workouts, str(e)) from e
            self._workouts = workouts
            self._active = active
        logger.info(
            "Loaded %d workouts (active workout: %s)",
            len(workouts),
            active.id if active else None,
        )

    # ---- Commands ----

    async def start_workout(self, user_id: str) -> SessionResult:
        async with self._lock:
            if self._active is not None:
                return SessionResult(CommandOutcome.WORKOUT_ALREADY_ACTIVE, self._active)
            now = self._clock()
            workout = Workout(
                id=self._new_id(),
                user_id=user_id,
                date=now,
                started_at=now,
                exercises=[],
                total_volume=0,
            )
            await self._publish_active(workout)
        logger.info("Started workout %s for user %s", workout.id, user_id)
        return SessionResult(CommandOutcome.APPLIED, workout)

    async def add_exercise(self, workout_exercise: WorkoutExercise) -> SessionResult:
        async with self._lock:
            draft = self._draft()
            if draft is None:
                return SessionResult(CommandOutcome.NO_ACTIVE_WORKOUT)
            draft.exercises.append(workout_exercise.model_copy(deep=True))
            await self._publish_active(draft)
        logger.debug("Added exercise %s to workout %s", workout_exercise.id, draft.id)
        return SessionResult(CommandOutcome.APPLIED, draft)

    async def add_set(self, exercise_id: str, workout_set: WorkoutSet) -> SessionResult:
        async with self._lock:
            draft, outcome = self._draft_with_exercise(exercise_id)
            if outcome is not None:
                return SessionResult(outcome, self._active)
            draft.find_exercise(exercise_id).sets.append(workout_set.model_copy(deep=True))
            await self._publish_active(draft)
        logger.debug("Added set %s to exercise %s", workout_set.id, exercise_id)
        return SessionResult(CommandOutcome.APPLIED, draft)

    async def update_set(
        self,
        exercise_id: str,
        set_id: str,
        updates: WorkoutSetUpdate | dict[str, Any],
    ) -> SessionResult:
        """Merge only the fields present in updates into the matching set."""
        if isinstance(updates, dict):
            updates = WorkoutSetUpdate.model_validate(updates)
        changes = updates.model_dump(exclude_unset=True)

        async with self._lock:
            draft, outcome = self._draft_with_exercise(exercise_id)
            if outcome is not None:
                return SessionResult(outcome, self._active)
            exercise = draft.find_exercise(exercise_id)
            for i, s in enumerate(exercise.sets):
                if s.id == set_id:
                    exercise.sets[i] = WorkoutSet.model_validate({**s.model_dump(), **changes})
                    break
            else:
                return SessionResult(CommandOutcome.SET_NOT_FOUND, self._active)
            await self._publish_active(draft)
        logger.debug("Updated set %s (%s)", set_id, ", ".join(changes) or "no fields")
        return SessionResult(CommandOutcome.APPLIED, draft)

    async def remove_set(self, exercise_id: str, set_id: str) -> SessionResult:
        async with self._lock:
            draft, outcome = self._draft_with_exercise(exercise_id)
            if outcome is not None:
                return SessionResult(outcome, self._active)
            exercise = draft.find_exercise(exercise_id)
            remaining = [s for s in exercise.sets if s.id != set_id]
            if len(remaining) == len(exercise.sets):
                return SessionResult(CommandOutcome.SET_NOT_FOUND, self._active)
            exercise.sets = remaining
            await self._publish_active(draft)
        logger.debug("Removed set %s from exercise %s", set_id, exercise_id)
        return SessionResult(CommandOutcome.APPLIED, draft)

    async def complete_workout(self) -> SessionResult:
        """
        Freeze volume and duration, append to history, clear the active slot.
        History is written first; a retry after a failed slot removal replaces
        the history entry with the same id instead of duplicating it.
        """
        async with self._lock:
            draft = self._draft()
            if draft is None:
                return SessionResult(CommandOutcome.NO_ACTIVE_WORKOUT)
            completed_at = self._clock()
            draft.completed_at = completed_at
            draft.duration = max(0, int((completed_at - draft.started_at).total_seconds()))
            draft.total_volume = workout_volume(draft)

            history = [w for w in self._workouts if w.id != draft.id]
            history.append(draft)
            await self._store.set(
                self._keys.workouts, [w.to_json_dict() for w in history]
            )
            self._workouts = history

            await self._store.remove(self._keys.active_workout)
            self._active = None
        logger.info(
            "Completed workout %s: volume=%s duration=%ss",
            draft.id,
            draft.total_volume,
            draft.duration,
        )
        return SessionResult(CommandOutcome.APPLIED, draft)

    async def cancel_workout(self) -> SessionResult:
        async with self._lock:
            if self._active is None:
                return SessionResult(CommandOutcome.NO_ACTIVE_WORKOUT)
            cancelled = self._active
            await self._store.remove(self._keys.active_workout)
            self._active = None
        logger.info("Cancelled workout %s", cancelled.id)
        return SessionResult(CommandOutcome.APPLIED, cancelled)

    # ---- Internals ----

    def _draft(self) -> Workout | None:
        """Deep copy of the active workout to mutate before persisting."""
        if self._active is None:
            return None
        return self._active.model_copy(deep=True)

    def _draft_with_exercise(
        self, exercise_id: str
    ) -> tuple[Workout | None, CommandOutcome | None]:
        draft = self._draft()
        if draft is None:
            return None, CommandOutcome.NO_ACTIVE_WORKOUT
        if draft.find_exercise(exercise_id) is None:
            return None, CommandOutcome.EXERCISE_NOT_FOUND
        return draft, None

    async def _publish_active(self, workout: Workout) -> None:
        await self._store.set(self._keys.active_workout, workout.to_json_dict())
        self._active = workout

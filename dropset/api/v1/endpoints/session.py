"""Active workout session commands."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dropset.api.deps import get_session_manager
from dropset.schemas.workout import (
    SessionCommandResponse,
    StartWorkoutRequest,
    Workout,
    WorkoutExercise,
    WorkoutSet,
    WorkoutSetUpdate,
)
from dropset.services.session_manager import SessionManager, SessionResult

router = APIRouter()


def _response(result: SessionResult) -> SessionCommandResponse:
    return SessionCommandResponse(outcome=result.outcome, workout=result.workout)


@router.get("/active", response_model=Workout | None)
async def get_active_workout(manager: SessionManager = Depends(get_session_manager)):
    """The workout in progress, or null when the slot is empty."""
    return manager.active_workout


@router.post("/start", response_model=SessionCommandResponse)
async def start_workout(
    payload: StartWorkoutRequest,
    manager: SessionManager = Depends(get_session_manager),
):
    """Start a new workout. Keeps the existing one if a workout is already active."""
    return _response(await manager.start_workout(payload.user_id))


@router.post("/exercises", response_model=SessionCommandResponse)
async def add_exercise(
    payload: WorkoutExercise,
    manager: SessionManager = Depends(get_session_manager),
):
    return _response(await manager.add_exercise(payload))


@router.post("/exercises/{exercise_id}/sets", response_model=SessionCommandResponse)
async def add_set(
    exercise_id: str,
    payload: WorkoutSet,
    manager: SessionManager = Depends(get_session_manager),
):
    """Append a set to a workout exercise (by its workout-exercise id)."""
    return _response(await manager.add_set(exercise_id, payload))


@router.patch("/exercises/{exercise_id}/sets/{set_id}", response_model=SessionCommandResponse)
async def update_set(
    exercise_id: str,
    set_id: str,
    payload: WorkoutSetUpdate,
    manager: SessionManager = Depends(get_session_manager),
):
    """Partial update: fields left out of the body are unchanged."""
    return _response(await manager.update_set(exercise_id, set_id, payload))


@router.delete("/exercises/{exercise_id}/sets/{set_id}", response_model=SessionCommandResponse)
async def remove_set(
    exercise_id: str,
    set_id: str,
    manager: SessionManager = Depends(get_session_manager),
):
    return _response(await manager.remove_set(exercise_id, set_id))


@router.post("/complete", response_model=SessionCommandResponse)
async def complete_workout(manager: SessionManager = Depends(get_session_manager)):
    """Freeze volume and duration and move the workout into history."""
    return _response(await manager.complete_workout())


@router.post("/cancel", response_model=SessionCommandResponse)
async def cancel_workout(manager: SessionManager = Depends(get_session_manager)):
    """Discard the active workout without saving it to history."""
    return _response(await manager.cancel_workout())

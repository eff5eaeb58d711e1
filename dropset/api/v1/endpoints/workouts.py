"""Completed workout history."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from dropset.api.deps import get_session_manager
from dropset.schemas.workout import Workout
from dropset.services.session_manager import SessionManager

router = APIRouter()


@router.get("", response_model=list[Workout])
async def list_workouts(
    limit: int | None = Query(None, ge=1),
    manager: SessionManager = Depends(get_session_manager),
):
    """Completed workouts, newest first."""
    return manager.history(limit)


@router.get("/{workout_id}", response_model=Workout)
async def get_workout(
    workout_id: str,
    manager: SessionManager = Depends(get_session_manager),
):
    workout = manager.get_workout(workout_id)
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout

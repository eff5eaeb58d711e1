"""Data insights: personal records, volume, streaks, consistency grid, XP and challenges."""

from __future__ import annotations

from datetime import tzinfo

from fastapi import APIRouter, Depends, Query

from dropset.api.deps import get_local_tz, get_session_manager
from dropset.core.constants import (
    CONSISTENCY_WINDOW_DAYS,
    DEFAULT_SUMMARY_WINDOW_DAYS,
    STREAK_LOOKBACK_DAYS,
)
from dropset.schemas.analytics import (
    ConsistencyDay,
    MuscleXP,
    PeriodSummary,
    PersonalRecord,
    PreviousSession,
    StreakSummary,
    VolumeTotal,
    WeeklyChallenges,
    WeeklyVolume,
)
from dropset.services import analytics
from dropset.services.session_manager import SessionManager

router = APIRouter()


@router.get("/personal-records", response_model=dict[str, PersonalRecord])
async def personal_records(manager: SessionManager = Depends(get_session_manager)):
    """Best estimated 1RM per exercise id, recomputed from history."""
    return manager.personal_records


@router.get("/volume", response_model=VolumeTotal)
async def volume_total(
    days: int | None = Query(None, ge=1),
    manager: SessionManager = Depends(get_session_manager),
):
    """All-time volume, or the trailing `days` window when given."""
    if days is None:
        return VolumeTotal(total_volume=manager.total_volume)
    return VolumeTotal(days=days, total_volume=analytics.trailing_volume(manager.workouts, days))


@router.get("/streak", response_model=StreakSummary)
async def streak(
    window_days: int = Query(STREAK_LOOKBACK_DAYS, ge=1),
    manager: SessionManager = Depends(get_session_manager),
    tz: tzinfo | None = Depends(get_local_tz),
):
    """
    Current streak (ending today or yesterday), longest streak within the
    look-back window, and the last workout day.
    """
    return analytics.streak_summary(manager.workouts, window_days=window_days, tz=tz)


@router.get("/consistency", response_model=list[ConsistencyDay])
async def consistency(
    days: int = Query(CONSISTENCY_WINDOW_DAYS, ge=1, le=366),
    manager: SessionManager = Depends(get_session_manager),
    tz: tzinfo | None = Depends(get_local_tz),
):
    """Trailing grid of days, oldest first, tiered by daily volume."""
    return analytics.consistency_grid(manager.workouts, days=days, tz=tz)


@router.get("/weekly-volume", response_model=list[WeeklyVolume])
async def weekly_volume(
    weeks: int | None = Query(None, ge=1, le=104),
    manager: SessionManager = Depends(get_session_manager),
    tz: tzinfo | None = Depends(get_local_tz),
):
    return analytics.weekly_volume(manager.workouts, weeks=weeks, tz=tz)


@router.get("/summary", response_model=PeriodSummary)
async def summary(
    days: int = Query(DEFAULT_SUMMARY_WINDOW_DAYS, ge=1),
    manager: SessionManager = Depends(get_session_manager),
):
    """Workout count, volume and average duration for the trailing window."""
    return analytics.period_summary(manager.workouts, days=days)


@router.get("/previous-session/{exercise_id}", response_model=PreviousSession)
async def previous_session(
    exercise_id: str,
    exclude_workout_id: str | None = None,
    manager: SessionManager = Depends(get_session_manager),
):
    """
    Sets for a catalog exercise from the most recent completed workout that included it
    ("last time you did X").
    """
    return analytics.previous_session(manager.workouts, exercise_id, exclude_workout_id)


@router.get("/muscle-xp", response_model=list[MuscleXP])
async def muscle_xp(manager: SessionManager = Depends(get_session_manager)):
    """XP and level per muscle group, earned from non-warm-up sets."""
    return analytics.muscle_xp(manager.workouts)


@router.get("/challenges", response_model=WeeklyChallenges)
async def weekly_challenges(
    manager: SessionManager = Depends(get_session_manager),
    tz: tzinfo | None = Depends(get_local_tz),
):
    """Progress on this week's workout, rep and streak challenges."""
    return analytics.weekly_challenges(manager.workouts, tz=tz)

"""Read-side analytics over workout history: PRs, volume, streaks, consistency, XP.

Everything here is a pure function of the workouts passed in. Nothing is cached;
callers recompute on every read. Only completed workouts count.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta, timezone, tzinfo

from dropset.core.constants import (
    CONSISTENCY_LOW_MAX_VOLUME,
    CONSISTENCY_MEDIUM_MAX_VOLUME,
    CONSISTENCY_WINDOW_DAYS,
    DEFAULT_SUMMARY_WINDOW_DAYS,
    STREAK_CHALLENGE_REWARD,
    STREAK_CHALLENGE_TARGET,
    STREAK_LOOKBACK_DAYS,
    WEEKLY_REPS_REWARD,
    WEEKLY_REPS_TARGET,
    WEEKLY_WORKOUTS_REWARD,
    WEEKLY_WORKOUTS_TARGET,
    XP_PER_LEVEL,
    XP_PER_SET,
)
from dropset.core.enums import ChallengeType, IntensityTier, MuscleGroup
from dropset.schemas.analytics import (
    Challenge,
    ConsistencyDay,
    MuscleXP,
    PeriodSummary,
    PersonalRecord,
    PreviousSession,
    StreakSummary,
    WeeklyChallenges,
    WeeklyVolume,
)
from dropset.schemas.workout import Workout
from dropset.services.calculations import one_rep_max


def _completed(workouts: Iterable[Workout]) -> list[Workout]:
    return [w for w in workouts if w.completed_at is not None]


def local_date(ts: datetime, tz: tzinfo | None = None) -> date:
    """Calendar day of a timestamp in tz (system local time when tz is None)."""
    return ts.astimezone(tz).date()


def _today(tz: tzinfo | None) -> date:
    return datetime.now(timezone.utc).astimezone(tz).date()


# ---- Personal records ----


def personal_records(workouts: Iterable[Workout]) -> dict[str, PersonalRecord]:
    """
    Best estimated 1RM per catalog exercise id over non-warm-up sets.
    Ties keep the set seen first (history order, then exercise and set order).
    """
    records: dict[str, PersonalRecord] = {}
    for workout in _completed(workouts):
        for ex in workout.exercises:
            for s in ex.sets:
                if s.is_warmup or s.reps < 1:
                    continue
                estimate = one_rep_max(s.weight, s.reps)
                existing = records.get(ex.exercise_id)
                if existing is None or estimate > existing.one_rep_max:
                    records[ex.exercise_id] = PersonalRecord(
                        exercise_id=ex.exercise_id,
                        weight=s.weight,
                        reps=s.reps,
                        one_rep_max=estimate,
                        achieved_at=s.completed_at,
                    )
    return records


# ---- Volume ----


def total_volume(workouts: Iterable[Workout], since: datetime | None = None) -> float:
    """Sum of frozen totalVolume; optionally only workouts completed at/after since."""
    return sum(
        w.total_volume
        for w in _completed(workouts)
        if since is None or w.completed_at >= since
    )


def trailing_volume(
    workouts: Iterable[Workout],
    days: int,
    now: datetime | None = None,
) -> float:
    now = now or datetime.now(timezone.utc)
    return total_volume(workouts, since=now - timedelta(days=days))


def _week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def weekly_volume(
    workouts: Iterable[Workout],
    weeks: int | None = None,
    today: date | None = None,
    tz: tzinfo | None = None,
) -> list[WeeklyVolume]:
    """
    Volume and workout count per Monday-start week, newest first.
    With weeks set, returns exactly that many weeks ending at the current one
    (empty weeks included); otherwise only weeks that have workouts.
    """
    buckets: dict[date, list[float]] = {}
    for w in _completed(workouts):
        key = _week_start(local_date(w.completed_at, tz))
        buckets.setdefault(key, []).append(w.total_volume)

    if weeks is None:
        starts = sorted(buckets, reverse=True)
    else:
        current = _week_start(today or _today(tz))
        starts = [current - timedelta(weeks=i) for i in range(weeks)]

    return [
        WeeklyVolume(
            week_start=start,
            total_volume=sum(buckets.get(start, [])),
            workout_count=len(buckets.get(start, [])),
        )
        for start in starts
    ]


# ---- Streaks ----


def workout_dates(workouts: Iterable[Workout], tz: tzinfo | None = None) -> list[date]:
    """Distinct local days with at least one completed workout, ascending."""
    return sorted({local_date(w.completed_at, tz) for w in _completed(workouts)})


def _longest_run(dates: Sequence[date]) -> int:
    longest = 0
    run = 0
    previous: date | None = None
    for d in dates:
        if previous is not None and d - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = d
    return longest


def longest_streak(
    workouts: Iterable[Workout],
    window_days: int | None = STREAK_LOOKBACK_DAYS,
    today: date | None = None,
    tz: tzinfo | None = None,
) -> int:
    """Longest run of consecutive workout days inside the look-back window."""
    dates = workout_dates(workouts, tz)
    if window_days is not None:
        cutoff = (today or _today(tz)) - timedelta(days=window_days)
        dates = [d for d in dates if d >= cutoff]
    return _longest_run(dates)


def current_streak(
    workouts: Iterable[Workout],
    today: date | None = None,
    tz: tzinfo | None = None,
) -> int:
    """Consecutive workout days ending today or yesterday; 0 when the run is broken."""
    dates = workout_dates(workouts, tz)
    if not dates:
        return 0
    today = today or _today(tz)
    if dates[-1] < today - timedelta(days=1):
        return 0
    streak = 1
    for i in range(len(dates) - 1, 0, -1):
        if dates[i] - dates[i - 1] == timedelta(days=1):
            streak += 1
        else:
            break
    return streak


def streak_summary(
    workouts: Sequence[Workout],
    window_days: int | None = STREAK_LOOKBACK_DAYS,
    today: date | None = None,
    tz: tzinfo | None = None,
) -> StreakSummary:
    dates = workout_dates(workouts, tz)
    return StreakSummary(
        current_streak=current_streak(workouts, today=today, tz=tz),
        longest_streak=longest_streak(workouts, window_days=window_days, today=today, tz=tz),
        last_workout_date=dates[-1] if dates else None,
        total_workouts=len(_completed(workouts)),
    )


# ---- Consistency grid ----


def intensity_tier(day_volume: float) -> IntensityTier:
    if day_volume <= 0:
        return IntensityTier.NONE
    if day_volume < CONSISTENCY_LOW_MAX_VOLUME:
        return IntensityTier.LOW
    if day_volume < CONSISTENCY_MEDIUM_MAX_VOLUME:
        return IntensityTier.MEDIUM
    return IntensityTier.HIGH


def consistency_grid(
    workouts: Iterable[Workout],
    days: int = CONSISTENCY_WINDOW_DAYS,
    today: date | None = None,
    tz: tzinfo | None = None,
) -> list[ConsistencyDay]:
    """One cell per day of the trailing window, oldest first, tiered by volume."""
    today = today or _today(tz)
    first = today - timedelta(days=days - 1)
    volume_by_day: dict[date, float] = {}
    count_by_day: dict[date, int] = {}
    for w in _completed(workouts):
        d = local_date(w.completed_at, tz)
        if first <= d <= today:
            volume_by_day[d] = volume_by_day.get(d, 0) + w.total_volume
            count_by_day[d] = count_by_day.get(d, 0) + 1

    grid = []
    for offset in range(days):
        d = first + timedelta(days=offset)
        day_volume = volume_by_day.get(d, 0)
        grid.append(
            ConsistencyDay(
                date=d,
                volume=day_volume,
                workout_count=count_by_day.get(d, 0),
                intensity=intensity_tier(day_volume),
            )
        )
    return grid


# ---- Period summary / history helpers ----


def period_summary(
    workouts: Iterable[Workout],
    days: int = DEFAULT_SUMMARY_WINDOW_DAYS,
    now: datetime | None = None,
) -> PeriodSummary:
    """Workout count, volume and average duration over the trailing window."""
    now = now or datetime.now(timezone.utc)
    since = now - timedelta(days=days)
    in_window = [w for w in _completed(workouts) if since <= w.completed_at <= now]
    durations = [w.duration for w in in_window if w.duration is not None]
    return PeriodSummary(
        days=days,
        workout_count=len(in_window),
        total_volume=sum(w.total_volume for w in in_window),
        average_duration_seconds=(sum(durations) / len(durations)) if durations else None,
    )


def sort_history(workouts: Iterable[Workout], limit: int | None = None) -> list[Workout]:
    """Newest first by workout date, optionally truncated."""
    ordered = sorted(workouts, key=lambda w: w.date, reverse=True)
    return ordered[:limit] if limit is not None else ordered


def previous_session(
    workouts: Iterable[Workout],
    exercise_id: str,
    exclude_workout_id: str | None = None,
) -> PreviousSession:
    """
    Sets for a catalog exercise from the most recent completed workout that had it.
    Pass exclude_workout_id to skip a given workout.
    """
    candidates = [
        w
        for w in _completed(workouts)
        if w.id != exclude_workout_id and any(ex.exercise_id == exercise_id for ex in w.exercises)
    ]
    if not candidates:
        return PreviousSession(exercise_id=exercise_id)
    latest = max(candidates, key=lambda w: w.completed_at)
    sets = [
        s
        for ex in sorted(latest.exercises, key=lambda ex: ex.order)
        if ex.exercise_id == exercise_id
        for s in ex.sets
    ]
    return PreviousSession(
        exercise_id=exercise_id,
        workout_id=latest.id,
        completed_at=latest.completed_at,
        sets=sets,
    )


# ---- Muscle XP and weekly challenges ----

# Always reported, even at zero XP; other groups appear once they earn XP
TRACKED_MUSCLE_GROUPS = (
    MuscleGroup.CHEST,
    MuscleGroup.BACK,
    MuscleGroup.SHOULDERS,
    MuscleGroup.BICEPS,
    MuscleGroup.TRICEPS,
    MuscleGroup.QUADRICEPS,
    MuscleGroup.HAMSTRINGS,
    MuscleGroup.GLUTES,
    MuscleGroup.CALVES,
    MuscleGroup.ABS,
)


def xp_level(xp: int) -> int:
    return xp // XP_PER_LEVEL + 1


def muscle_xp(workouts: Iterable[Workout]) -> list[MuscleXP]:
    """
    XP per muscle group: XP_PER_SET for every non-warm-up set, credited to the
    muscle group of the exercise it was logged under.
    """
    totals: dict[MuscleGroup, int] = {group: 0 for group in TRACKED_MUSCLE_GROUPS}
    for workout in _completed(workouts):
        for ex in workout.exercises:
            earned = XP_PER_SET * sum(1 for s in ex.sets if not s.is_warmup)
            if earned:
                group = ex.exercise.muscle_group
                totals[group] = totals.get(group, 0) + earned
    return [
        MuscleXP(muscle_group=group, xp=xp, level=xp_level(xp))
        for group, xp in totals.items()
    ]


def _challenge(
    challenge_id: str,
    title: str,
    description: str,
    challenge_type: ChallengeType,
    target: int,
    reward: int,
    progress: int,
    expires_at: date,
) -> Challenge:
    return Challenge(
        id=challenge_id,
        title=title,
        description=description,
        type=challenge_type,
        target=target,
        current=min(target, progress),
        reward=reward,
        expires_at=expires_at,
        completed=progress >= target,
    )


def weekly_challenges(
    workouts: Sequence[Workout],
    today: date | None = None,
    tz: tzinfo | None = None,
) -> WeeklyChallenges:
    """
    Progress on this week's challenges (Monday to Sunday, local days).
    Derived from history on every call, so nothing has to be reset when a
    new week starts. totalPoints sums the rewards of completed challenges.
    """
    today = today or _today(tz)
    week_start = _week_start(today)
    week_end = week_start + timedelta(days=6)
    this_week = [
        w for w in _completed(workouts)
        if week_start <= local_date(w.completed_at, tz) <= week_end
    ]
    reps = sum(s.reps for w in this_week for ex in w.exercises for s in ex.sets if not s.is_warmup)

    challenges = [
        _challenge(
            "weekly_workouts",
            "Weekly Warrior",
            f"Complete {WEEKLY_WORKOUTS_TARGET} workouts this week",
            ChallengeType.WORKOUTS,
            WEEKLY_WORKOUTS_TARGET,
            WEEKLY_WORKOUTS_REWARD,
            len(this_week),
            week_end,
        ),
        _challenge(
            "weekly_reps",
            "Rep Master",
            f"Complete {WEEKLY_REPS_TARGET} reps this week",
            ChallengeType.REPS,
            WEEKLY_REPS_TARGET,
            WEEKLY_REPS_REWARD,
            reps,
            week_end,
        ),
        _challenge(
            "streak",
            "Streak Keeper",
            f"Maintain a {STREAK_CHALLENGE_TARGET}-day streak",
            ChallengeType.STREAK,
            STREAK_CHALLENGE_TARGET,
            STREAK_CHALLENGE_REWARD,
            current_streak(workouts, today=today, tz=tz),
            week_end,
        ),
    ]
    return WeeklyChallenges(
        week_start=week_start,
        challenges=challenges,
        total_points=sum(c.reward for c in challenges if c.completed),
    )

"""Pure workout math: 1RM estimate, volume, dropset weights, formatting, ids."""

from __future__ import annotations

import math
import random
import string
import time
from datetime import date, datetime

from dropset.core.constants import (
    DROPSET_FIRST_RATIO,
    DROPSET_SECOND_RATIO,
    KG_INCREMENT,
    LBS_INCREMENT,
)
from dropset.core.enums import Units

_ID_ALPHABET = string.digits + string.ascii_lowercase


def round_half_up(value: float) -> int:
    """Nearest integer, halves rounded up (not Python's banker's rounding)."""
    return math.floor(value + 0.5)


def round_to_increment(value: float, increment: float) -> float:
    return round_half_up(value / increment) * increment


def one_rep_max(weight: float, reps: int) -> float:
    """Epley estimate: weight * (1 + reps/30), rounded. Requires reps >= 1."""
    if reps == 1:
        return weight
    return round_half_up(weight * (1 + reps / 30))


def volume(weight: float, reps: int) -> float:
    return weight * reps


def suggest_dropset_weights(current_weight: float, units: Units | str) -> list[float]:
    """Two drops (~80% then ~60%) rounded to the nearest plate increment."""
    increment = KG_INCREMENT if Units(units) == Units.KG else LBS_INCREMENT
    first_drop = round_half_up(current_weight * DROPSET_FIRST_RATIO)
    second_drop = round_half_up(current_weight * DROPSET_SECOND_RATIO)
    return [
        round_to_increment(first_drop, increment),
        round_to_increment(second_drop, increment),
    ]


def format_duration(seconds: int) -> str:
    """'1h 2m', '2m 5s' or '45s'."""
    seconds = int(seconds)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_date(value: datetime | date, today: date | None = None) -> str:
    """'Today', 'Yesterday', 'Mar 4', or 'Mar 4, 2023' for other years."""
    day = value.date() if isinstance(value, datetime) else value
    today = today or date.today()
    if day == today:
        return "Today"
    if (today - day).days == 1:
        return "Yesterday"
    label = f"{day.strftime('%b')} {day.day}"
    if day.year != today.year:
        label += f", {day.year}"
    return label


def generate_id() -> str:
    """'<epoch millis>-<9 base36 chars>'. Unique per device, not a secret."""
    millis = time.time_ns() // 1_000_000
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{millis}-{suffix}"

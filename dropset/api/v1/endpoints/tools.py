"""QoL tools: 1RM estimate, set volume, dropset weights, duration labels."""

from fastapi import APIRouter, Query

from dropset.core.enums import Units
from dropset.schemas.analytics import DropsetSuggestion
from dropset.services.calculations import (
    format_duration,
    one_rep_max,
    suggest_dropset_weights,
    volume,
)

router = APIRouter()


@router.get("/one-rep-max")
async def estimate_one_rep_max(
    weight: float = Query(..., ge=0),
    reps: int = Query(..., ge=1),
):
    """Epley estimate; a single rep returns the weight itself."""
    return {"weight": weight, "reps": reps, "one_rep_max": one_rep_max(weight, reps)}


@router.get("/volume")
async def set_volume(
    weight: float = Query(..., ge=0),
    reps: int = Query(..., ge=0),
):
    return {"weight": weight, "reps": reps, "volume": volume(weight, reps)}


@router.get("/dropset-weights", response_model=DropsetSuggestion)
async def dropset_weights(
    current_weight: float = Query(..., gt=0),
    units: Units = Units.KG,
):
    """
    Two drops (~80% and ~60%) rounded to the nearest plate increment:
    2.5 for kg, 5 for lbs.
    """
    return DropsetSuggestion(
        current_weight=current_weight,
        units=units,
        weights=suggest_dropset_weights(current_weight, units),
    )


@router.get("/format-duration")
async def duration_label(seconds: int = Query(..., ge=0)):
    return {"seconds": seconds, "label": format_duration(seconds)}

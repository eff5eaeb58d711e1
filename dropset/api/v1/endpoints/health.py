"""Health check endpoints."""

import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from dropset.api.deps import get_store
from dropset.core.exceptions import StorageFailure
from dropset.services.storage import KeyValueStore

router = APIRouter()


@router.get("")
async def health():
    """Simple liveness check. Optionally includes built_at if BACKEND_BUILT_AT env is set."""
    payload: dict = {"status": "ok"}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(store: KeyValueStore = Depends(get_store)):
    """Readiness: app + store reachability."""
    try:
        await store.get("@health:ping")
        return {"status": "ok", "store": "reachable"}
    except StorageFailure as e:
        return JSONResponse(
            status_code=503,
            content={"status": "error", "store": str(e)},
        )

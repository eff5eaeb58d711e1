"""Request dependencies shared by the v1 endpoints."""

from datetime import tzinfo
from zoneinfo import ZoneInfo

from fastapi import Request

from dropset.core.config import get_settings
from dropset.services.session_manager import SessionManager
from dropset.services.storage import KeyValueStore


def get_session_manager(request: Request) -> SessionManager:
    """The app's single SessionManager, created and loaded in the lifespan."""
    return request.app.state.session_manager


def get_store(request: Request) -> KeyValueStore:
    return request.app.state.store


def get_local_tz() -> tzinfo | None:
    """Configured zone for calendar-day bucketing; None means system local time."""
    name = get_settings().local_timezone
    return ZoneInfo(name) if name else None

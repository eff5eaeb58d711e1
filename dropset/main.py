"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dropset.api.v1 import api_router
from dropset.core.config import get_settings
from dropset.core.exceptions import StorageFailure
from dropset.db.session import async_session_maker, create_tables, engine
from dropset.services.session_manager import SessionManager
from dropset.services.storage import KeyValueStore, SqlKeyValueStore, storage_keys

settings = get_settings()

logger = logging.getLogger(__name__)


def create_application(store: KeyValueStore | None = None) -> FastAPI:
    """Build the app. Pass a store to bypass the SQL-backed default (tests, ephemeral sessions)."""
    logging.basicConfig(level=settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup: open the store and load the session; shutdown: dispose the engine."""
        owns_engine = store is None
        if owns_engine:
            if settings.create_tables_on_startup:
                await create_tables(engine)
            app.state.store = SqlKeyValueStore(async_session_maker)
        else:
            app.state.store = store
        manager = SessionManager(app.state.store, storage_keys(settings.storage_namespace))
        await manager.load()
        app.state.session_manager = manager
        yield
        if owns_engine:
            await engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    # CORS: allow everything in debug, localhost in development, CORS_ORIGINS otherwise
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:8081", "http://127.0.0.1:8081"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StorageFailure)
    async def storage_failure_handler(request: Request, exc: StorageFailure):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=503,
            content={"detail": "Storage unavailable, retry the request", "error": str(exc)},
        )

    @app.get("/")
    def root():
        return {"status": "ok", "message": settings.app_name}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()

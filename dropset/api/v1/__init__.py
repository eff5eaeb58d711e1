"""API v1 router aggregation."""

from fastapi import APIRouter

from dropset.api.v1.endpoints import analytics, health, session, tools, workouts

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(session.router, prefix="/session", tags=["session"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(tools.router, prefix="/tools", tags=["tools"])

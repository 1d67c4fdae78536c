"""API v1 router aggregation."""

from fastapi import APIRouter

from liftlog.api.v1.endpoints import (
    analytics,
    exercises,
    health,
    pr,
    rest_timer,
    sessions,
    templates,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(rest_timer.router, prefix="/rest-timer", tags=["rest-timer"])
api_router.include_router(pr.router, prefix="/pr", tags=["pr"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])

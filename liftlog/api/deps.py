"""Shared FastAPI dependencies."""

from fastapi import Request

from liftlog.services.engine import WorkoutEngine


def get_engine(request: Request) -> WorkoutEngine:
    """The process-wide engine built in the application lifespan."""
    return request.app.state.workout_engine

"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from liftlog.api.v1 import api_router
from liftlog.core.config import Settings, get_settings
from liftlog.core.exceptions import WorkoutEngineError
from liftlog.core.log_config import configure_logging
from liftlog.db.session import build_engine, build_session_maker
from liftlog.db.store import create_schema
from liftlog.services.engine import WorkoutEngine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: build the store and engine, restore an open session; shutdown: cleanup."""
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)
    db_engine = build_engine(settings)
    if settings.auto_create_schema:
        await create_schema(db_engine)
    engine = WorkoutEngine.from_settings(settings, build_session_maker(db_engine))
    await engine.startup()
    app.state.workout_engine = engine
    logger.info("%s started (%s)", settings.app_name, settings.environment)
    try:
        yield
    finally:
        await engine.shutdown()
        await db_engine.dispose()


async def workout_engine_error_handler(request: Request, exc: WorkoutEngineError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def create_application(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    # CORS: allow localhost in dev; in production use CORS_ORIGINS env (comma-separated)
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(WorkoutEngineError, workout_engine_error_handler)

    # Root health path for load balancers
    @app.get("/")
    def root():
        return {"status": "ok", "message": settings.app_name}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from fittrack.api.exercises import router as exercises_router
from fittrack.api.progress import router as progress_router
from fittrack.api.sessions import router as sessions_router
from fittrack.api.templates import router as templates_router
from fittrack.api.workouts import router as workouts_router
from fittrack.core.config import settings
from fittrack.core.errors import (
    AlreadyActiveError,
    InvalidOrderError,
    InvalidRepsError,
    InvalidStateError,
    PersistenceError,
)
from fittrack.core.logger import setup_logger
from fittrack.db import Base, engine
from fittrack.models import exercise, exercise_template, progress, route, workout  # noqa: F401  (registers tables)
from fittrack.services.tracking import SessionSlot, TrackingSession


ERROR_STATUS = {
    AlreadyActiveError: 409,
    InvalidStateError: 409,
    InvalidOrderError: 409,
    InvalidRepsError: 422,
    PersistenceError: 503,
}


def _error_handler(status_code: int):
    async def handler(request: Request, exc: Exception):
        logger.warning(f"{request.method} {request.url.path} -> {status_code}: {exc}")
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return handler


def create_app(session_factory=None) -> FastAPI:
    """Build the API. `session_factory` overrides how tracking sessions are made (tests inject a clock)."""
    setup_logger(settings)

    app = FastAPI(title="FitTrack")

    # Allow CORS for local frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Create DB tables on startup
    Base.metadata.create_all(bind=engine)

    def default_factory(**kwargs) -> TrackingSession:
        return TrackingSession(
            split_km=settings.split_distance_km,
            best_segment_km=settings.best_pace_segment_km,
            **kwargs,
        )

    # One tracking session per device, owned here and injected into routes
    app.state.tracking = SessionSlot(session_factory or default_factory)

    for exc_type, status_code in ERROR_STATUS.items():
        app.add_exception_handler(exc_type, _error_handler(status_code))

    app.include_router(sessions_router)
    app.include_router(workouts_router)
    app.include_router(exercises_router)
    app.include_router(templates_router)
    app.include_router(progress_router)

    @app.get("/")
    def root():
        return {"message": "FitTrack backend is running"}

    logger.info("FastAPI application initialized")
    return app


app = create_app()

"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from diet_tracker.api.dishes import router as dishes_router
from diet_tracker.api.foods import router as foods_router
from diet_tracker.api.history import router as history_router
from diet_tracker.api.meals import router as meals_router
from diet_tracker.api.profile import router as profile_router
from diet_tracker.app_logging import configure_logging
from diet_tracker.containers import AppContainer
from diet_tracker.errors import (
    AccessDenied,
    DietTrackerError,
    InvalidInput,
    NotAuthenticated,
    PersistenceFailure,
    RecordDecodeError,
    RecordNotFound,
    UnitNotFound,
)

_RETRY_MESSAGE = "The database is unavailable, please retry"

_ERROR_STATUS: tuple[tuple[type[DietTrackerError], int], ...] = (
    (InvalidInput, 422),
    (UnitNotFound, 422),
    (NotAuthenticated, status.HTTP_401_UNAUTHORIZED),
    (AccessDenied, status.HTTP_403_FORBIDDEN),
    (RecordNotFound, status.HTTP_404_NOT_FOUND),
    (PersistenceFailure, status.HTTP_503_SERVICE_UNAVAILABLE),
    (RecordDecodeError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.container.settings.seed_default_foods:
            try:
                app.state.container.catalog_seeder.populate_default_foods()
            except DietTrackerError:
                logger.exception("Failed to seed the default food catalog")
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(foods_router)
    app.include_router(dishes_router)
    app.include_router(meals_router)
    app.include_router(profile_router)
    app.include_router(history_router)

    @app.exception_handler(DietTrackerError)
    async def handle_domain_error(
        request: Request, exc: DietTrackerError
    ) -> JSONResponse:
        status_code = status_for(exc)
        if status_code == status.HTTP_503_SERVICE_UNAVAILABLE:
            logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
            return JSONResponse({"detail": _RETRY_MESSAGE}, status_code=status_code)
        return JSONResponse({"detail": str(exc)}, status_code=status_code)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def status_for(exc: DietTrackerError) -> int:
    """Return the HTTP status code for an application error."""
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR

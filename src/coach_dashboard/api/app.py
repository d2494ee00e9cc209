"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from coach_dashboard.api.clients import router as clients_router
from coach_dashboard.api.library import router as library_router
from coach_dashboard.api.nutrition import router as nutrition_router
from coach_dashboard.api.plans import meals_router
from coach_dashboard.api.plans import router as plans_router
from coach_dashboard.app_logging import configure_logging
from coach_dashboard.containers import AppContainer
from coach_dashboard.errors import NotFoundError, ValidationError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Coach Dashboard")
    app.state.container = container

    app.include_router(clients_router)
    app.include_router(nutrition_router)
    app.include_router(library_router)
    app.include_router(plans_router)
    app.include_router(meals_router)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        logger.info("Rejected request", extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            content={"detail": str(exc)},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app

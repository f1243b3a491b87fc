"""
Example FastAPI Application

Small service instrumented with request metrics and exposing them on a
Prometheus endpoint.

Author: Development Team
Version: 1.0.0
"""

import logging
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import REGISTRY, CollectorRegistry
from starlette.exceptions import HTTPException as StarletteHTTPException

from route_metrics.config import Config, Settings, get_settings
from route_metrics.middleware import get_metrics, instrument_app
from route_metrics.models import ErrorResponse
from route_metrics.routes import health_router, users_router


logger = logging.getLogger(__name__)


def error_response(status_code: int, detail: str) -> JSONResponse:
    """Build the JSON error body shared by all exception handlers."""
    try:
        error = HTTPStatus(status_code).phrase
    except ValueError:
        error = f"HTTP {status_code}"
    body = ErrorResponse(error=error, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def configure_logging(settings: Settings) -> None:
    """Configure root logging at the configured level."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(
    settings: Optional[Settings] = None,
    registry: CollectorRegistry = REGISTRY,
) -> FastAPI:
    """
    Application factory.

    Args:
        settings: Application settings, defaults to ``get_settings()``
        registry: Registry for request metrics and exposition

    Returns:
        FastAPI: Configured application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
    )

    app.include_router(health_router, prefix="", tags=["Health"])
    app.include_router(users_router, prefix="", tags=["Users"])

    if settings.enable_metrics:
        instrument_app(app, Config.from_settings(settings), registry)

        @app.get(settings.metrics_path, include_in_schema=False)
        async def metrics():
            """Prometheus metrics endpoint."""
            metrics_data, content_type = get_metrics(registry)
            return Response(content=metrics_data, media_type=content_type)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Name the offending fields in the error body."""
        fields = sorted({".".join(str(x) for x in error["loc"]) for error in exc.errors()})
        logger.warning(f"Invalid request to {request.url.path}: {fields}")
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            f"Invalid {', '.join(fields)}",
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Generic body for errors no other handler claimed."""
        logger.error(f"Unexpected error: {exc!r}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Unexpected error")

    logger.info(
        f"✅ {settings.app_title} ready "
        f"(metrics: {settings.metrics_path if settings.enable_metrics else 'disabled'})"
    )
    return app


settings = get_settings()
configure_logging(settings)
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "route_metrics.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower()
    )

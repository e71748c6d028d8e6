from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from thumbor_url.api.health import router as health_router
from thumbor_url.api.thumbor import router as thumbor_router
from thumbor_url.core.config import settings
from thumbor_url.core.errors import ThumborUrlError, get_error_response
from thumbor_url.core.logging import get_logger, setup_logging
from thumbor_url.core.middleware import RequestLoggingMiddleware
from thumbor_url.services.thumbor import thumbor_service
from thumbor_url.version import __version__

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for the FastAPI application."""
    setup_logging()
    logger.info(
        f"Starting thumbor-url service (server: {thumbor_service.server or 'unset'}, "
        f"signing: {thumbor_service.is_signing_enabled})"
    )
    if not thumbor_service.server:
        logger.warning("THUMBOR_SERVER is not set; URL generation requests will fail")

    yield

    logger.info("thumbor-url service stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="thumbor-url API",
        description="""
        # thumbor-url API

        Generates unsafe or HMAC-signed thumbor URLs for resizing, cropping
        and filtering images. The service never contacts thumbor itself.
        """,
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "thumbor",
                "description": "Operations for generating thumbor URLs"
            },
            {
                "name": "health",
                "description": "Operations for checking the health and status of the service"
            }
        ]
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(ThumborUrlError)
    async def thumbor_url_error_handler(request: Request, exc: ThumborUrlError):
        request_id = getattr(request.state, "request_id", "unknown")

        logger.error(f"ThumborUrlError: {exc.message} (request_id: {request_id})")

        error_response = exc.to_dict()
        error_response["request_id"] = request_id

        return JSONResponse(
            status_code=exc.http_status,
            content=error_response,
            headers={"X-Request-ID": request_id}
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        request_id = getattr(request.state, "request_id", "unknown")

        logger.exception(f"Unhandled exception in request handler (request_id: {request_id})")

        error_response = get_error_response(exc)
        error_response["request_id"] = request_id

        return JSONResponse(
            status_code=500,
            content=error_response,
            headers={"X-Request-ID": request_id}
        )

    # Include API routers
    app.include_router(thumbor_router, prefix=settings.api_prefix)
    app.include_router(health_router, prefix=settings.api_prefix)

    return app


app = create_app()

"""
Application factory - builds FastAPI app with all middleware and routes.
"""

import time
import traceback
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pdfgateway import SERVICE_NAME, __version__
from pdfgateway.config import Settings, get_settings, init_settings
from pdfgateway.modules.browser import BrowserSessionManager

# Import routers
from pdfgateway.modules.catalog.router import router as catalog_router
from pdfgateway.modules.health.router import router as health_router
from pdfgateway.modules.render.router import router as render_router
from pdfgateway.shared.errors import PdfGatewayError, ValidationError
from pdfgateway.shared.ids import generate_request_id
from pdfgateway.shared.logging import (
    clear_request_context,
    get_logger,
    set_request_context,
    setup_logging,
)
from pdfgateway.shared.rate_limit import RateLimiter, RateLimitMiddleware
from pdfgateway.shared.types import RequestContext

logger = get_logger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}

ENDPOINTS = {
    "POST /generate-pdf": "Render raw HTML to PDF (shared browser)",
    "GET /test-pdf": "Render a canned test page",
    "POST /api/generate-pdf": "Render a product catalog to PDF (browser per request)",
    "POST /api/test-pdf": "Render a sample catalog",
    "GET /health": "Service health",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()

    setup_logging(settings.log_level)
    app.state.started_at = time.monotonic()
    logger.info(f"Starting {SERVICE_NAME} {__version__} ({settings.environment})")

    yield

    # uvicorn maps SIGINT/SIGTERM to this shutdown phase
    logger.info(f"Shutting down {SERVICE_NAME}...")
    await app.state.browser_manager.shutdown()
    logger.info(f"{SERVICE_NAME} stopped")


def _error_body(request: Request, exc: Exception, payload: dict[str, Any]) -> dict[str, Any]:
    payload["request_id"] = getattr(request.state, "request_id", None)
    if get_settings().is_development:
        payload["stack"] = "".join(traceback.format_exception(exc))
    return payload


def build_app(
    settings: Settings | None = None,
    browser_manager: BrowserSessionManager | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Optional settings override (useful for testing)
        browser_manager: Optional browser session manager override

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()
    else:
        init_settings(settings)

    app = FastAPI(
        title="PDF Gateway",
        description="Render HTML and product catalogs to PDF with headless Chromium",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.browser_manager = browser_manager or BrowserSessionManager.from_settings(settings)
    app.state.started_at = time.monotonic()

    if settings.rate_limit_enabled:
        app.add_middleware(
            RateLimitMiddleware,
            limiter=RateLimiter(
                max_requests=settings.rate_limit_max_requests,
                window_seconds=settings.rate_limit_window_seconds,
            ),
            path_prefix="/api/",
        )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request context middleware
    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next: Any) -> Response:
        """Attach request context for logging and add security headers."""
        ctx = RequestContext(
            request_id=request.headers.get("X-Request-ID", generate_request_id()),
            client_ip=request.client.host if request.client else None,
            path=request.url.path,
        )
        request.state.request_id = ctx.request_id
        set_request_context(ctx)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = ctx.request_id
            for name, value in SECURITY_HEADERS.items():
                response.headers.setdefault(name, value)
            return response
        finally:
            clear_request_context()

    @app.exception_handler(PdfGatewayError)
    async def gateway_error_handler(request: Request, exc: PdfGatewayError) -> JSONResponse:
        """Handle PdfGatewayError with consistent JSON response."""
        if exc.http_status >= 500:
            logger.error(f"{exc.code}: {exc.message} ({exc.details})")
        else:
            logger.info(f"{exc.code}: {exc.message}")

        return JSONResponse(
            status_code=exc.http_status,
            content=_error_body(request, exc, exc.to_dict()),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed bodies are client errors (400), not 422."""
        problems = [
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', 'invalid')}"
            for err in exc.errors()
        ]
        err = ValidationError("Invalid request body", details=problems)
        return JSONResponse(
            status_code=err.http_status,
            content=_error_body(request, exc, err.to_dict()),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Last resort: never let an error escape as a bare 500."""
        logger.exception("Unhandled error", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request, exc, {"error": "Internal server error", "code": "INTERNAL_ERROR"}
            ),
        )

    # Register routers
    app.include_router(health_router)
    app.include_router(render_router)
    app.include_router(catalog_router)

    # Root endpoint
    @app.get("/")
    async def root() -> dict[str, Any]:
        return {
            "service": SERVICE_NAME,
            "version": __version__,
            "endpoints": ENDPOINTS,
        }

    return app

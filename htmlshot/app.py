"""
Application factory - builds FastAPI app with all middleware and routes.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from htmlshot import __version__
from htmlshot.config import Settings, get_settings
from htmlshot.modules.health.router import router as health_router
from htmlshot.modules.render.engine import BrowserEngine, PlaywrightEngine
from htmlshot.modules.render.router import ALLOWED_METHODS, CORS_HEADERS, SCREENSHOT_PATH
from htmlshot.modules.render.router import router as render_router
from htmlshot.shared.errors import HtmlShotError, MethodNotAllowedError
from htmlshot.shared.ids import generate_request_id
from htmlshot.shared.logging import (
    clear_request_context,
    get_logger,
    set_request_context,
    setup_logging,
)
from htmlshot.shared.types import RequestContext

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - startup and shutdown."""
    settings: Settings = app.state.settings

    setup_logging(settings.log_level)
    logger.info(f"Starting htmlshot ({settings.environment})...")
    logger.info(
        f"Browser: headless={settings.headless}, "
        f"executable={settings.browser_executable_path or 'bundled'}"
    )

    yield

    logger.info("htmlshot stopped")


def build_app(
    settings: Settings | None = None,
    engine: BrowserEngine | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Optional settings override (useful for testing)
        engine: Optional browser engine override; defaults to Playwright

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="htmlshot",
        description="Render HTML/CSS markup to PNG or JPEG screenshots",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine or PlaywrightEngine(settings)

    # Request context middleware
    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next: Any) -> Response:
        """Attach request context for logging and tracing."""
        ctx = RequestContext(
            request_id=request.headers.get("X-Request-ID", generate_request_id()),
            method=request.method,
            path=request.url.path,
        )
        set_request_context(ctx)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = ctx.request_id
            return response
        finally:
            clear_request_context()

    @app.exception_handler(HtmlShotError)
    async def htmlshot_error_handler(request: Request, exc: HtmlShotError) -> JSONResponse:
        """Render service errors as ``{message, error?}``."""
        # 5xx failures are logged with their traceback where they are classified
        if exc.http_status < 500:
            logger.warning(f"{exc.code}: {exc.message}")

        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_dict(include_detail=request.app.state.settings.is_development),
            headers=CORS_HEADERS,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        """Unsupported methods on the screenshot endpoint get the service's 405 body."""
        if exc.status_code == 405 and request.url.path == SCREENSHOT_PATH:
            logger.warning(f"method_not_allowed: {request.method}")
            return JSONResponse(
                status_code=405,
                content=MethodNotAllowedError().to_dict(),
                headers={**CORS_HEADERS, "Allow": ALLOWED_METHODS},
            )

        return await http_exception_handler(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Malformed bodies are client errors, reported as 400."""
        logger.warning(f"Invalid request body: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content={
                "message": "Invalid request body",
                "errors": jsonable_encoder(exc.errors()),
            },
            headers=CORS_HEADERS,
        )

    # Register routers
    app.include_router(health_router, tags=["health"])
    app.include_router(render_router)

    # Root endpoint
    @app.get("/")
    async def root() -> dict[str, str]:
        return {"service": "htmlshot", "version": __version__}

    return app

"""Render module routes."""

import time

from fastapi import APIRouter, Body, Depends, Request, Response

from htmlshot.shared.logging import get_logger

from .schemas import ScreenshotRequest
from .service import ScreenshotService

logger = get_logger(__name__)
router = APIRouter(prefix="/api", tags=["render"])

SCREENSHOT_PATH = "/api/screenshot"
ALLOWED_METHODS = "POST, OPTIONS"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ALLOWED_METHODS,
    "Access-Control-Allow-Headers": "Content-Type",
}


def get_service(request: Request) -> ScreenshotService:
    """Dependency injection for service."""
    return ScreenshotService(request.app.state.engine, request.app.state.settings)


@router.options("/screenshot", include_in_schema=False)
async def screenshot_preflight() -> Response:
    """CORS preflight. Always succeeds with an empty body."""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post(
    "/screenshot",
    responses={
        200: {
            "description": "Rendered image.",
            "content": {"image/png": {}, "image/jpeg": {}},
        },
        400: {"description": "Missing HTML/CSS code or invalid options."},
        500: {"description": "Rendering failed (timeout, invalid content, engine error)."},
    },
)
async def render_screenshot(
    body: ScreenshotRequest | None = Body(default=None),
    service: ScreenshotService = Depends(get_service),
) -> Response:
    """
    Render HTML/CSS to a PNG or JPEG screenshot.

    Returns the image as binary content. Errors are JSON ``{"message": ...}``.
    """
    started = time.perf_counter()
    shot = await service.screenshot(body)
    elapsed_ms = int((time.perf_counter() - started) * 1000)

    return Response(
        content=shot.content,
        media_type=shot.content_type,
        headers={
            **CORS_HEADERS,
            "Content-Length": str(len(shot.content)),
            "X-Generation-Time": f"{elapsed_ms}ms",
        },
    )

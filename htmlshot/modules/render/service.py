"""Render service - HTML/CSS to PNG/JPEG screenshots."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from htmlshot.config import Settings
from htmlshot.shared.errors import (
    InvalidContentError,
    InvalidInputError,
    RenderTimeoutError,
    ScreenshotError,
)
from htmlshot.shared.logging import get_logger

from .engine import BrowserEngine, BrowserSession, Viewport
from .schemas import (
    DEFAULT_FORMAT,
    DEFAULT_HEIGHT,
    DEFAULT_QUALITY,
    DEFAULT_SCALE,
    DEFAULT_WIDTH,
    RenderOptions,
    Screenshot,
    ScreenshotOptions,
    ScreenshotRequest,
)

logger = get_logger(__name__)


def resolve_options(
    options: ScreenshotOptions | None,
    max_dimension: int,
    max_scale: float,
) -> RenderOptions:
    """
    Apply defaults to caller options and enforce the configured bounds.

    Raises:
        InvalidInputError: width, height or scale exceed the bounds, or a jpeg
            quality lies outside 0-100
    """
    options = options or ScreenshotOptions()

    width = options.width or DEFAULT_WIDTH
    height = options.height or DEFAULT_HEIGHT
    scale = options.scale or DEFAULT_SCALE
    image_format = options.format or DEFAULT_FORMAT

    if width > max_dimension or height > max_dimension:
        raise InvalidInputError(
            f"Viewport must be at most {max_dimension}x{max_dimension} pixels"
        )
    if scale > max_scale:
        raise InvalidInputError(f"Scale must be at most {max_scale:g}")

    quality = None
    if image_format == "jpeg":
        quality = options.quality or DEFAULT_QUALITY
        if not 0 <= quality <= 100:
            raise InvalidInputError("Quality must be between 0 and 100")

    return RenderOptions(
        width=width,
        height=height,
        scale=scale,
        format=image_format,
        quality=quality,
        full_page=options.full_page is not False,
    )


def classify_error(exc: BaseException) -> ScreenshotError:
    """Map an engine failure onto the caller-facing error taxonomy."""
    detail = str(exc)

    if isinstance(exc, (TimeoutError, PlaywrightTimeoutError)):
        return RenderTimeoutError(detail=detail)
    if "navigation" in detail.lower():
        return InvalidContentError(detail=detail)
    return ScreenshotError(detail=detail)


class ScreenshotService:
    """Service for rendering markup in a per-request browser session."""

    def __init__(self, engine: BrowserEngine, settings: Settings) -> None:
        self.engine = engine
        self.settings = settings

    @asynccontextmanager
    async def session(self) -> AsyncIterator[BrowserSession]:
        """
        Launch a browser session and close it exactly once on exit.

        A failure while closing is logged and never replaces the error (or
        result) of the block.
        """
        session = await self.engine.launch()
        try:
            yield session
        finally:
            try:
                await session.close()
            except Exception:
                logger.exception("Error closing browser")

    async def screenshot(self, request: ScreenshotRequest | None) -> Screenshot:
        """
        Render the request's markup and capture it.

        Raises:
            InvalidInputError: markup missing/blank or options out of bounds.
                No browser is launched in this case.
            ScreenshotError: rendering failed (timeouts and invalid content
                are reported as the matching subclasses)
        """
        code = request.code if request else None
        if not code or not code.strip():
            raise InvalidInputError()

        options = resolve_options(
            request.options,
            max_dimension=self.settings.max_dimension,
            max_scale=self.settings.max_scale,
        )
        return await self.capture(code, options)

    async def capture(self, markup: str, options: RenderOptions) -> Screenshot:
        """Drive one browser session through viewport, content and capture."""
        settings = self.settings
        logger.info(
            f"Starting screenshot generation: {options.width}x{options.height}"
            f"@{options.scale:g}x {options.format}"
        )

        try:
            async with self.session() as session:
                page = await session.new_page(
                    Viewport(options.width, options.height, options.scale)
                )

                logger.info("Setting page content...")
                await page.set_content(
                    markup,
                    wait_until=settings.wait_until,
                    timeout_ms=settings.content_timeout_ms,
                )

                logger.info("Taking screenshot...")
                image = await page.screenshot(
                    image_type=options.format,
                    quality=options.quality,
                    full_page=options.full_page,
                    timeout_ms=settings.capture_timeout_ms,
                )
        except Exception as e:
            logger.exception("Screenshot error")
            raise classify_error(e) from e

        logger.info(f"Screenshot generated: {len(image)} bytes")
        return Screenshot(content=image, content_type=options.content_type)

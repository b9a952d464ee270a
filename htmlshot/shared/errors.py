"""
Error hierarchy.

Every error carries the HTTP status it maps to and a caller-facing message.
``detail`` holds the raw underlying error text, which is only exposed to
callers in development mode.
"""

from typing import Any


class HtmlShotError(Exception):
    """Base error for the service."""

    http_status: int = 500
    code: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, detail: str | None = None) -> None:
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)

    def to_dict(self, include_detail: bool = False) -> dict[str, Any]:
        """Serialize to the response body shape ``{message, error?}``."""
        body: dict[str, Any] = {"message": self.message}
        if include_detail and self.detail is not None:
            body["error"] = self.detail
        return body


class InvalidInputError(HtmlShotError):
    """The request body is missing or malformed."""
    http_status = 400
    code = "invalid_input"
    default_message = "HTML/CSS code is required"


class MethodNotAllowedError(HtmlShotError):
    http_status = 405
    code = "method_not_allowed"
    default_message = "Method not allowed"


class ScreenshotError(HtmlShotError):
    """Rendering failed for a reason we could not classify."""
    http_status = 500
    code = "screenshot_failed"
    default_message = "Screenshot generation failed"


class RenderTimeoutError(ScreenshotError):
    """The page did not settle before the deadline."""
    code = "timeout"
    default_message = "Generation timed out. Try simpler HTML/CSS."


class InvalidContentError(ScreenshotError):
    """The page failed to load the supplied markup."""
    code = "invalid_content"
    default_message = "Invalid HTML content. Check your code syntax."

"""Render module schemas."""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ImageFormat = Literal["png", "jpeg"]

DEFAULT_WIDTH = 1200
DEFAULT_HEIGHT = 800
DEFAULT_SCALE = 2
DEFAULT_FORMAT: ImageFormat = "png"
DEFAULT_QUALITY = 90

CONTENT_TYPES = {
    "png": "image/png",
    "jpeg": "image/jpeg",
}


class ScreenshotOptions(BaseModel):
    """
    Rendering options as sent by the caller.

    Every field is optional. ``0`` and ``null`` fall back to the default.
    Upper bounds depend on settings and are checked when options are resolved.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    width: int | None = Field(default=None, ge=0, description="Viewport width in pixels")
    height: int | None = Field(default=None, ge=0, description="Viewport height in pixels")
    scale: float | None = Field(default=None, ge=0, description="Device scale factor")
    format: ImageFormat | None = Field(default=None, description="Output image format")
    quality: int | None = Field(
        default=None, description="JPEG quality 0-100 (ignored, and not checked, for png)"
    )
    full_page: bool | None = Field(
        default=None,
        alias="fullPage",
        description="Capture the full scrollable page; false captures the viewport only",
    )


class ScreenshotRequest(BaseModel):
    """Request to render markup to an image."""

    code: str | None = Field(default=None, description="HTML/CSS markup to render")
    options: ScreenshotOptions | None = None


@dataclass(frozen=True)
class RenderOptions:
    """Options after defaults have been applied."""
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    scale: float = DEFAULT_SCALE
    format: ImageFormat = DEFAULT_FORMAT
    quality: int | None = None
    full_page: bool = True

    @property
    def content_type(self) -> str:
        return CONTENT_TYPES[self.format]


@dataclass(frozen=True)
class Screenshot:
    """Encoded image ready to be returned."""
    content: bytes
    content_type: str

"""Render module - HTML/CSS to image rendering using Playwright."""

from .engine import BrowserEngine, BrowserPage, BrowserSession, PlaywrightEngine, Viewport
from .router import router
from .schemas import RenderOptions, Screenshot, ScreenshotOptions, ScreenshotRequest
from .service import ScreenshotService

__all__ = [
    "router",
    "BrowserEngine",
    "BrowserPage",
    "BrowserSession",
    "PlaywrightEngine",
    "Viewport",
    "RenderOptions",
    "Screenshot",
    "ScreenshotOptions",
    "ScreenshotRequest",
    "ScreenshotService",
]

"""Shared fixtures: settings, a recording fake browser engine, and a test client."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from htmlshot.app import build_app
from htmlshot.config import Settings, init_settings, reset_settings
from htmlshot.modules.render.engine import BrowserEngine, BrowserPage, BrowserSession, Viewport

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 56
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 28 + b"\xff\xd9"


class FakePage(BrowserPage):
    """Records calls; fails on demand."""

    def __init__(self, engine: "FakeEngine") -> None:
        self.engine = engine

    async def set_content(self, markup: str, *, wait_until: str, timeout_ms: float) -> None:
        self.engine.calls.append("set_content")
        self.engine.content_calls.append(
            {"markup": markup, "wait_until": wait_until, "timeout_ms": timeout_ms}
        )
        if self.engine.content_error is not None:
            raise self.engine.content_error

    async def screenshot(
        self,
        *,
        image_type: str,
        quality: int | None,
        full_page: bool,
        timeout_ms: float,
    ) -> bytes:
        self.engine.calls.append("screenshot")
        self.engine.screenshot_calls.append(
            {
                "image_type": image_type,
                "quality": quality,
                "full_page": full_page,
                "timeout_ms": timeout_ms,
            }
        )
        if self.engine.screenshot_error is not None:
            raise self.engine.screenshot_error
        return JPEG_BYTES if image_type == "jpeg" else PNG_BYTES


class FakeSession(BrowserSession):

    def __init__(self, engine: "FakeEngine") -> None:
        self.engine = engine

    async def new_page(self, viewport: Viewport) -> BrowserPage:
        self.engine.calls.append("new_page")
        self.engine.viewports.append(viewport)
        return FakePage(self.engine)

    async def close(self) -> None:
        self.engine.calls.append("close")
        self.engine.close_count += 1
        if self.engine.close_error is not None:
            raise self.engine.close_error


class FakeEngine(BrowserEngine):
    """In-memory browser engine for tests."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.launch_count = 0
        self.close_count = 0
        self.viewports: list[Viewport] = []
        self.content_calls: list[dict] = []
        self.screenshot_calls: list[dict] = []
        self.launch_error: Exception | None = None
        self.content_error: Exception | None = None
        self.screenshot_error: Exception | None = None
        self.close_error: Exception | None = None

    async def launch(self) -> BrowserSession:
        self.calls.append("launch")
        self.launch_count += 1
        if self.launch_error is not None:
            raise self.launch_error
        return FakeSession(self)


@pytest.fixture
def settings() -> Iterator[Settings]:
    """Production-mode settings, installed as the process settings."""
    s = Settings(environment="production", log_level="DEBUG")
    init_settings(s)
    yield s
    reset_settings()


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def client(settings: Settings, engine: FakeEngine) -> TestClient:
    app = build_app(settings, engine=engine)
    return TestClient(app)


@pytest.fixture
def dev_client(engine: FakeEngine) -> TestClient:
    """Client whose app runs in development mode (raw error detail exposed)."""
    app = build_app(Settings(environment="development"), engine=engine)
    return TestClient(app)

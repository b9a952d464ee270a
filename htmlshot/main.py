"""
htmlshot entrypoint - runs uvicorn server.

Command-line flags override the environment-derived settings:

    htmlshot --host 0.0.0.0 --port 8080 --dev
"""

import argparse

import uvicorn

from htmlshot.app import build_app
from htmlshot.config import Settings, get_settings, init_settings
from htmlshot.shared.logging import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="htmlshot",
        description="Serve the HTML/CSS screenshot API",
    )

    parser.add_argument("--host", help="Interface to bind (default: HTMLSHOT_HOST)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: HTMLSHOT_PORT)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level (default: HTMLSHOT_LOG_LEVEL)",
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Development mode: include raw error detail in 500 responses",
    )

    return parser.parse_args(argv)


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return settings with any flags given on the command line applied."""
    overrides: dict = {}
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.dev:
        overrides["environment"] = "development"

    return settings.model_copy(update=overrides) if overrides else settings


def main(argv: list[str] | None = None) -> None:
    """Run the htmlshot server."""
    args = parse_args(argv)
    settings = init_settings(apply_overrides(get_settings(), args))

    setup_logging(settings.log_level)
    app = build_app(settings)

    logger.info(f"Starting htmlshot on http://{settings.host}:{settings.port}")
    logger.info(f"Docs: http://{settings.host}:{settings.port}/docs")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

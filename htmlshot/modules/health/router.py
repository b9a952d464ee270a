"""Health module routes."""

from fastapi import APIRouter

from htmlshot import __version__

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Returns an OK status for health checks."""
    return {"status": "ok", "service": "htmlshot", "version": __version__}

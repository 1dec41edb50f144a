"""Health and readiness check routes."""

from fastapi import APIRouter

from config import settings

router = APIRouter()


@router.get("/ready")
async def ready() -> dict:
    """Readiness probe. Makes no external calls."""
    return {"status": "ok", "service": "air-quality-api", "commit": settings.git_sha}


@router.get("/api/health")
async def health() -> dict:
    return {
        "status": "ok",
        "message": "Air Quality Search API is running",
        "commit": settings.git_sha,
    }

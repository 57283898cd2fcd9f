"""Info and health routes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from core.health import Status

router = APIRouter(tags=["health"])

# Set by app.py
_health_checker = None


def init(health_checker):
    global _health_checker
    _health_checker = health_checker


@router.get("/")
async def info():
    return {
        "message": "Mars Rovers API",
        "endpoints": {
            "health": "/health",
            "rovers-positions": "/rovers/positions",
        },
    }


@router.get("/health")
async def health():
    """Health check with component status."""
    report = await _health_checker.check()
    status_code = 200 if report.status != Status.FAIL else 503
    return JSONResponse(content=report.to_dict(), status_code=status_code)

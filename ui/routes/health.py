"""Health and observability routes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from core.health import Status
from utils.timestamp import format_timestamp

router = APIRouter(prefix="/api/v1", tags=["health"])

# These will be set by app.py
_minter = None
_health_checker = None


def init(minter, health_checker):
    """Initialize with minter and health checker references."""
    global _minter, _health_checker
    _minter = minter
    _health_checker = health_checker


@router.get("/health")
async def health():
    """Health check with component status."""
    report = await _health_checker.check()
    status_code = 200 if report.status != Status.FAIL else 503
    return JSONResponse(content=report.to_dict(), status_code=status_code)


@router.get("/heartbeat")
async def heartbeat():
    """Lightweight heartbeat for frequent polling."""
    stats = _minter.get_stats()
    return {
        "status": "ok",
        "timestamp": format_timestamp(),
        "started_at": stats["started_at"],
        "minted": stats["minted"],
        "last_id": stats["last_id"],
    }

"""API routes for service statistics."""

from fastapi import APIRouter, Depends

from ui.auth import verify_basic_auth
from utils.timestamp import format_timestamp

router = APIRouter(prefix="/api/v1", tags=["api"])

# These will be set by app.py
_minter = None
_ledger = None


def init(minter, ledger):
    """Initialize with minter and ledger references."""
    global _minter, _ledger
    _minter = minter
    _ledger = ledger


@router.get("/stats")
async def stats(username=Depends(verify_basic_auth)):
    """Return minting and ledger statistics (requires basic auth)."""
    return {
        "timestamp": format_timestamp(),
        "minter": _minter.get_stats(),
        "ledger": _ledger.get_stats(),
    }

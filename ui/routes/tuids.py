"""Identifier routes: minting, inspection, validation and comparison."""

from fastapi import APIRouter, Depends, HTTPException, Query

from core.tuid import TUID, compare, duration_between, first_at, is_valid
from ui.auth import verify_basic_auth
from utils.timestamp import Timestamp

router = APIRouter(prefix="/api/v1/tuids", tags=["tuids"])

# Set by app.py
_minter = None


def init(minter):
    """Initialize with the minter reference."""
    global _minter
    _minter = minter


def _parse_timestamp(text):
    try:
        return Timestamp.parse(text)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("")
async def mint():
    """Mint one TUID for the current time."""
    return _minter.mint().to_info().to_dict()


@router.post("/batch")
async def mint_batch(count: int = Query(10), username=Depends(verify_basic_auth)):
    """Mint several TUIDs at once (requires basic auth)."""
    return {"ids": _minter.mint_batch(count)}


@router.get("/first")
async def first(at: str):
    """Lowest TUID for an instant, for use as a range cursor."""
    return {"id": first_at(_parse_timestamp(at))}


@router.get("/duration")
async def duration(start: str, stop: str):
    """Time elapsed between the timestamps of two TUIDs."""
    elapsed = duration_between(start, stop)
    return {"start": start, "stop": stop, "nanos": elapsed.nanos,
            "seconds": elapsed.total_seconds(), "duration": str(elapsed)}


@router.get("/compare")
async def compare_ids(a: str, b: str):
    return {"result": compare(a, b)}


@router.get("/{tuid}")
async def info(tuid: str):
    """Timestamp and entropy embedded in a TUID."""
    return TUID(tuid).to_info().to_dict()


@router.get("/{tuid}/valid")
async def valid(tuid: str):
    return {"id": tuid, "valid": is_valid(tuid)}

"""Rover simulation routes."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from utils.timestamp import elapsed_ms, now_micros

router = APIRouter(prefix="/rovers", tags=["rovers"])

# These will be set by app.py
_engine = None
_file_logger = None


class PositionsRequest(BaseModel):
    input: Optional[str] = None


def init(engine, file_logger):
    """Initialize with engine and audit logger references."""
    global _engine, _file_logger
    _engine = engine
    _file_logger = file_logger


@router.post("/positions")
async def positions(payload: PositionsRequest, request: Request):
    """Run every rover in the input and return their final positions, one per line.

    InvalidInputError is left to the application's exception handler.
    """
    if not payload.input:
        raise HTTPException(status_code=400, detail="Input is required")

    started = now_micros()
    result = _engine.run_detailed(payload.input)
    if not result.rovers:
        raise HTTPException(status_code=400, detail="No valid rover positions found")

    _file_logger.try_log("simulation", {
        "request_id": getattr(request.state, "request_id", None),
        "elapsed_ms": elapsed_ms(started),
        **result.to_dict(),
    })
    return "\n".join(result.lines)

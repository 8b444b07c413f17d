"""Liveness endpoints"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter()

@router.get("/ping")
async def ping(request: Request):
    """Liveness probe"""
    return {
        "message": request.app.state.settings.PING_MESSAGE,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": "ok"
    }

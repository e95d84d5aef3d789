from datetime import datetime, timezone

from fastapi import APIRouter

from verify_backend.models.schemas import StatusResponse

router = APIRouter(tags=["status"])

@router.get("/api/status", response_model=StatusResponse)
@router.get("/.well-known/health", response_model=StatusResponse)
async def get_status() -> StatusResponse:
    """Health check. Not rate limited."""
    return StatusResponse(status="ok", timestamp=datetime.now(timezone.utc))

from fastapi import APIRouter, Depends, HTTPException, Request

from verify_backend.config import get_logger
from verify_backend.middleware.rate_limit import api_rate_limiter
from verify_backend.models.schemas import ErrorResponse, VerifyRequest, VerifyResponse
from verify_backend.service import verify_service
from verify_backend.service.provably_fair import UnknownGameError

router = APIRouter(
    prefix="/api",
    tags=["verify"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Verification failed"},
    },
)

logger = get_logger(__name__)

@router.post("/verify", response_model=VerifyResponse, dependencies=[Depends(api_rate_limiter)])
async def verify(request: Request, body: VerifyRequest) -> VerifyResponse:
    """
    Verify a provably-fair game outcome.

    Recomputes the Dice roll or Crash multiplier from the revealed server
    seed, the client seed and the nonce. When server_seed_hash is given it is
    checked against the revealed seed, and when expected_result is given it
    is compared with the computed value. Either mismatch yields verdict FAIL.
    """
    try:
        max_mult = request.app.state.settings.max_mult
        return verify_service.verify_round(body, max_mult)
    except UnknownGameError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error verifying {body.game.value} round: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Verification failed: {str(e)}")

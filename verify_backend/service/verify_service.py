from typing import List, Optional

from verify_backend.config import get_logger
from verify_backend.models.schemas import VerifyRequest, VerifyResponse, VerificationDetails, UsedInput
from verify_backend.service.provably_fair import (
    DEFAULT_MAX_MULT,
    GameVerification,
    compare_results,
    determine_verdict,
    verify_game,
)
from verify_backend.utils.hash_utils import create_audit_digest

logger = get_logger(__name__)

def format_number(value: float) -> str:
    """Render a number the way the player sees it: 50.0 as "50", 1.74 as "1.74"."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)

def _hash_note(request: VerifyRequest, verification: GameVerification) -> str:
    if not request.server_seed_hash:
        return "No server seed hash provided for verification"
    if verification.hash_mismatch:
        return "Server seed hash verification FAILED - hash mismatch"
    return "Server seed hash verified successfully"

def verify_round(request: VerifyRequest, max_mult: int = DEFAULT_MAX_MULT) -> VerifyResponse:
    """
    Verify one game round and build the response returned to the caller.

    Args:
        request: The validated verification request
        max_mult: Crash multiplier cap from configuration

    Returns:
        VerifyResponse with the computed result, verdict and notes
        describing which checks ran

    Raises:
        UnknownGameError: If the request names an unsupported game
    """
    verification = verify_game(
        request.game,
        request.server_seed,
        request.server_seed_hash,
        request.client_seed,
        request.nonce,
        max_mult,
    )
    result = verification.result

    notes: List[str] = [_hash_note(request, verification)]

    result_matches: Optional[bool] = None
    if request.expected_result is not None:
        result_matches = compare_results(
            result.computed_result,
            request.expected_result,
            request.expect_strict,
        )
        if result_matches:
            notes.append(f"Computed result matches expected result ({format_number(request.expected_result)})")
        else:
            notes.append(
                f"Computed result ({format_number(result.computed_result)}) does not match expected result ({format_number(request.expected_result)})"
            )
    else:
        notes.append("No expected result provided - computation only")

    verdict = determine_verdict(verification.hash_mismatch, result_matches)

    # Only the audit digest identifies the seed in logs, never the plaintext
    logger.info(
        f"Verified {request.game.value} round (seed digest {create_audit_digest(request.server_seed)}, "
        f"nonce {request.nonce}): result {format_number(result.computed_result)}, verdict {verdict.value}"
    )

    return VerifyResponse(
        game=request.game,
        computed_result=result.computed_result,
        verdict=verdict,
        details=VerificationDetails(
            used_input=UsedInput(
                client_seed=request.client_seed,
                nonce=request.nonce,
                server_seed_hash=result.server_seed_hash,
            ),
            computation_hex=result.computation_hex,
            notes="; ".join(notes),
        ),
    )

import math
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from verify_backend.utils.hash_utils import sha256, verify_server_seed_hash

DEFAULT_MAX_MULT = 10000

# 52 bits, the first 13 hex characters of the round digest
TWO_TO_52 = 2 ** 52
CRASH_CLAMP_EPSILON = 1e-12

TOLERANT_DELTA = 0.01
STRICT_DELTA = sys.float_info.epsilon * 10


class GameType(str, Enum):
    DICE = "dice"
    CRASH = "crash"


class Verdict(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"


class UnknownGameError(ValueError):
    """Raised when a game outside the supported set is requested."""


@dataclass(frozen=True)
class VerificationResult:
    computed_result: float
    computation_hex: str
    server_seed_hash: str


@dataclass(frozen=True)
class GameVerification:
    result: VerificationResult
    hash_verified: bool
    hash_mismatch: bool


def compute_hash_input(server_seed: str, client_seed: str, nonce: int) -> str:
    return f"{server_seed}:{client_seed}:{nonce}"


def verify_dice(server_seed: str, client_seed: str, nonce: int) -> VerificationResult:
    """
    Provably-fair Dice roll.

    1. H = SHA256(server_seed + ":" + client_seed + ":" + nonce)
    2. x = first 8 hex chars of H as an integer
    3. result = (x % 10000) / 100, a value in 0.00-99.99
    """
    computation_hex = sha256(compute_hash_input(server_seed, client_seed, nonce))

    x = int(computation_hex[:8], 16)
    result = (x % 10000) / 100

    return VerificationResult(
        computed_result=round(result, 2),
        computation_hex=computation_hex,
        server_seed_hash=sha256(server_seed),
    )


def verify_crash(
    server_seed: str,
    client_seed: str,
    nonce: int,
    max_mult: int = DEFAULT_MAX_MULT,
) -> VerificationResult:
    """
    Provably-fair Crash multiplier using the inverse mapping.

    1. H = SHA256(server_seed + ":" + client_seed + ":" + nonce)
    2. x = first 13 hex chars (52 bits) of H as an integer
    3. r = x / 2^52, clamped to 1 - 1e-12 so 1 - r never reaches zero
    4. mult = floor((1 / (1 - r)) * 100) / 100, capped at max_mult

    The floor is part of the game's payout math and must not be replaced
    with rounding.
    """
    computation_hex = sha256(compute_hash_input(server_seed, client_seed, nonce))

    x = int(computation_hex[:13], 16)
    r = x / TWO_TO_52
    r = min(r, 1 - CRASH_CLAMP_EPSILON)

    mult = math.floor((1 / (1 - r)) * 100) / 100
    mult = min(mult, float(max_mult))

    return VerificationResult(
        computed_result=round(mult, 2),
        computation_hex=computation_hex,
        server_seed_hash=sha256(server_seed),
    )


def verify_game(
    game: Union[GameType, str],
    server_seed: str,
    server_seed_hash: Optional[str],
    client_seed: str,
    nonce: int,
    max_mult: int = DEFAULT_MAX_MULT,
) -> GameVerification:
    """
    Recompute a round's outcome and check the committed server seed hash.

    hash_verified and hash_mismatch are both False when no hash was
    supplied: nothing was claimed, so nothing can mismatch.

    Raises:
        UnknownGameError: game is not one of GameType.
    """
    try:
        game = GameType(game)
    except ValueError:
        raise UnknownGameError(f"Unknown game type: {game}")

    hash_verified = False
    hash_mismatch = False
    if server_seed_hash:
        hash_verified = verify_server_seed_hash(server_seed, server_seed_hash)
        hash_mismatch = not hash_verified

    if game is GameType.DICE:
        result = verify_dice(server_seed, client_seed, nonce)
    else:
        result = verify_crash(server_seed, client_seed, nonce, max_mult)

    return GameVerification(
        result=result,
        hash_verified=hash_verified,
        hash_mismatch=hash_mismatch,
    )


def compare_results(computed: float, expected: float, strict: bool = False) -> bool:
    """
    Compare a computed result with the value the player expected.

    Strict mode only tolerates binary floating point noise. Tolerant mode
    accepts a difference of up to one hundredth, which covers client-side
    rounding of the displayed value. 42.38 - 42.37 evaluates to
    0.0100000000000051 in doubles, so the boundary is matched with isclose.
    """
    diff = abs(computed - expected)
    if strict:
        return diff < STRICT_DELTA
    return diff < TOLERANT_DELTA or math.isclose(diff, TOLERANT_DELTA, rel_tol=1e-9)


def determine_verdict(hash_mismatch: bool, result_matches: Optional[bool] = None) -> Verdict:
    """
    FAIL on a hash mismatch or on an expected result that did not match.

    result_matches is None when no expected result was supplied.
    """
    if hash_mismatch or result_matches is False:
        return Verdict.FAIL
    return Verdict.PASS

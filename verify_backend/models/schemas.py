from pydantic import BaseModel, Field, StrictStr, field_validator
from typing import Any, Optional
from datetime import datetime

from verify_backend.service.provably_fair import GameType, Verdict

MAX_SEED_LENGTH = 1000

class VerifyRequest(BaseModel):
    """Request model for verifying a single game round"""
    game: GameType
    server_seed: StrictStr = Field(..., min_length=1, max_length=MAX_SEED_LENGTH, description="Revealed server seed (plaintext)")
    server_seed_hash: Optional[StrictStr] = Field(None, description="Hash the operator published before the round")
    client_seed: StrictStr = Field(..., min_length=1, max_length=MAX_SEED_LENGTH)
    nonce: int = Field(..., ge=1, description="Position of the bet in the seed pair's sequence")
    expected_result: Optional[float] = Field(None, ge=0, strict=True, description="Outcome the player saw")
    expect_strict: bool = False

    @field_validator("nonce", mode="before")
    @classmethod
    def nonce_must_be_integral_number(cls, value: Any) -> Any:
        # JSON clients may send the counter as 1.0; strings and booleans are not numbers
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("nonce must be a number")
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError("nonce must be an integer")
            return int(value)
        return value

    @field_validator("expected_result", mode="before")
    @classmethod
    def expected_result_not_null(cls, value: Any) -> Any:
        # Omitting the field skips the comparison, an explicit null is invalid
        if value is None:
            raise ValueError("expected_result must be a number when present")
        return value

    @field_validator("server_seed_hash", mode="before")
    @classmethod
    def falsy_hash_is_absent(cls, value: Any) -> Any:
        if not isinstance(value, str) and not value:
            return None
        return value

class UsedInput(BaseModel):
    """Inputs echoed back to the caller. The server seed is only ever returned hashed."""
    client_seed: str
    nonce: int
    server_seed_hash: str

class VerificationDetails(BaseModel):
    used_input: UsedInput
    computation_hex: str
    notes: str

class VerifyResponse(BaseModel):
    """Response model for a completed verification"""
    ok: bool = True
    game: GameType
    computed_result: float
    verdict: Verdict
    details: VerificationDetails

class ErrorResponse(BaseModel):
    ok: bool = False
    error: str

class StatusResponse(BaseModel):
    status: str = "ok"
    timestamp: datetime

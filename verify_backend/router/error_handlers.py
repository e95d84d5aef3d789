from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from verify_backend.config import get_logger
from verify_backend.models.schemas import MAX_SEED_LENGTH

logger = get_logger(__name__)

INVALID_BODY_MESSAGE = "Request body must be a JSON object"

# Checked in this order, the first failing field decides the message
FIELD_MESSAGES = {
    "game": 'Invalid game type. Must be "dice" or "crash"',
    "server_seed": "server_seed is required and must be a string",
    "client_seed": "client_seed is required and must be a string",
    "nonce": "nonce must be a positive integer",
    "expected_result": "expected_result must be a non-negative number",
    "server_seed_hash": "server_seed_hash must be a string if provided",
    "expect_strict": "expect_strict must be a boolean if provided",
}

def validation_error_message(errors: List[Dict[str, Any]]) -> str:
    """
    Reduce pydantic validation errors to the single message returned to the caller.
    """
    failed: Dict[str, str] = {}
    for error in errors:
        loc = error.get("loc", ())
        if error.get("type") == "json_invalid" or len(loc) < 2:
            return INVALID_BODY_MESSAGE
        field = str(loc[1])
        failed.setdefault(field, error.get("type", ""))

    for field, message in FIELD_MESSAGES.items():
        if field not in failed:
            continue
        if failed[field] == "string_too_long":
            return f"{field} is too long (max {MAX_SEED_LENGTH} characters)"
        return message

    return INVALID_BODY_MESSAGE

def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as {"ok": false, "error": ...}."""

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        message = validation_error_message(exc.errors())
        logger.info(f"Rejected {request.method} {request.url.path}: {message}")
        return JSONResponse(status_code=400, content={"ok": False, "error": message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # An unmatched method is answered like an unmatched path
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"ok": False, "error": "Not found"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"ok": False, "error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"ok": False, "error": "Internal server error"})

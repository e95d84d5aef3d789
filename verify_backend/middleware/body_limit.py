from fastapi import HTTPException
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from verify_backend.config import get_logger

logger = get_logger(__name__)

BODY_TOO_LARGE_MESSAGE = "Request body too large"


class BodySizeLimitMiddleware:
    """
    Reject request bodies larger than max_body_bytes.

    A declared Content-Length over the limit is refused before routing.
    Bodies without one (chunked uploads) are counted as they are received,
    and reading stops with a 413 as soon as the running total passes the
    limit.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                response = JSONResponse(status_code=400, content={"ok": False, "error": "Invalid Content-Length header"})
                await response(scope, receive, send)
                return

            if declared > self.max_body_bytes:
                logger.warning(f"Rejected {path}: declared body of {declared} bytes exceeds {self.max_body_bytes}")
                response = JSONResponse(status_code=413, content={"ok": False, "error": BODY_TOO_LARGE_MESSAGE})
                await response(scope, receive, send)
                return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    logger.warning(f"Rejected {path}: streamed body passed {self.max_body_bytes} bytes")
                    # Raised inside body parsing, FastAPI re-raises HTTPException as is
                    raise HTTPException(status_code=413, detail=BODY_TOO_LARGE_MESSAGE)
            return message

        await self.app(scope, limited_receive, send)

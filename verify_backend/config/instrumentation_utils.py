import time

from fastapi import FastAPI, Request

from .logging_utils import get_logger

logger = get_logger(__name__)

def instrument_app(app: FastAPI) -> None:
    """
    Attach request logging to the app.

    Every request is logged once it completes with its method, path,
    status code and latency in milliseconds. Request bodies are never
    logged since they carry plaintext server seeds.
    """
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
        )
        return response

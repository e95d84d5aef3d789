from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from verify_backend.config import Settings, get_logger, instrument_app, set_log_level, settings
from verify_backend.middleware.body_limit import BodySizeLimitMiddleware
from verify_backend.middleware.rate_limit import FixedWindowRateLimiter
from verify_backend.router import status_router, verify_router
from verify_backend.router.error_handlers import register_exception_handlers

logger = get_logger(__name__)

API_VERSION = "0.1.0"

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the verifier API.

    Each app owns its settings and its rate limiter, so separately created
    apps never share request counts.
    """
    if app_settings is None:
        app_settings = settings

    app = FastAPI(
        title=app_settings.app_name,
        description="Independent verification of provably-fair Dice and Crash outcomes.",
        version=API_VERSION,
    )
    app.state.settings = app_settings
    set_log_level(app_settings.log_level)
    app.state.rate_limiter = FixedWindowRateLimiter(
        limit=app_settings.rate_limit_per_min,
        window_sec=app_settings.rate_limit_window_sec,
    )

    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=app_settings.max_body_bytes)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    instrument_app(app)
    register_exception_handlers(app)

    app.include_router(status_router.router)
    app.include_router(verify_router.router)
    logger.info(f"{app_settings.app_name} ready (max_mult={app_settings.max_mult}, rate limit {app_settings.rate_limit_per_min}/window)")

    return app

app = create_app()

if __name__ == "__main__":
    logger.info(f"Starting Uvicorn server on {settings.host}:{settings.port}")
    uvicorn.run("verify_backend.main:app", host=settings.host, port=settings.port, log_level="info")

"""
Application factory and FastAPI app configuration.
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dcf_engine import MAX_PERIOD_YEARS, InputError

from dcf_service.api.router import router as api_router
from dcf_service.config import Settings, get_settings

logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger("dcf_service")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the DCF application; title, version and data source come from *settings*."""
    if settings is None:
        settings = get_settings()

    application = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        description=(
            "Discounted-cash-flow valuation with a 5x5 discount-rate / terminal-growth "
            f"sensitivity grid. Projection horizons run from 1 to {MAX_PERIOD_YEARS} years."
        ),
    )

    application.include_router(api_router)

    @application.exception_handler(InputError)
    async def input_error_handler(request: Request, exc: InputError):
        logger.warning(f"Rejected valuation input on {request.url.path}: {exc}")
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @application.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"Incoming request: {request.method} {request.url.path}")
        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"Request failed: {request.method} {request.url.path} Error: {e}")
            return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})

        logger.info(
            f"Request completed: {request.method} {request.url.path} "
            f"Status: {response.status_code} Time: {time.time() - start_time:.4f}s"
        )
        return response

    @application.get("/")
    def read_root():
        return {
            "message": f"{settings.app_title} is running",
            "version": settings.app_version,
            "defaultSource": settings.default_source,
        }

    return application


# Module-level app instance for uvicorn
app = create_app()

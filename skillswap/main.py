"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, skillswap.api, skillswap.observability, skillswap.configs
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from skillswap import __version__
from skillswap.api.routers import (
    activities_router,
    exchanges_router,
    health_router,
    realtime_router,
    reviews_router,
    sessions_router,
    skill_matches_router,
    skills_router,
)
from skillswap.application.services.realtime_store import RealtimeStore
from skillswap.boundary.db import create_tables
from skillswap.configs import get_settings
from skillswap.core.session_coordinator import SessionCoordinator
from skillswap.models.common import ErrorResponse, ValidationErrorResponse
from skillswap.observability.logger import configure_logging
from skillswap.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ValidationErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup: logging, schema bootstrap, realtime coordinator.
    Shutdown: disconnect every realtime connection.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured", extra={"environment": settings.environment})

    try:
        await create_tables()
        app.state.coordinator = SessionCoordinator(
            store=RealtimeStore(),
            outbox_size=settings.realtime.outbox_size,
            protocol_version=settings.realtime.protocol_version,
        )
        logger.info("Application startup complete")
    except Exception as e:
        logger.exception("Failed to initialize application resources", extra={"error": str(e)})
        raise

    yield

    await app.state.coordinator.close()
    logger.info("Application shutdown")


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return request validation failures as 400 with the offending fields."""
    logger.warning(
        "Request validation failed",
        extra={"path": request.url.path, "error_count": len(exc.errors())},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()
    app = FastAPI(
        title="SkillSwap Exchange API",
        description="Peer skill matching, exchange lifecycle and live session coordination",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    # Add observability middleware (added first = last to execute)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(health_router, prefix="/api")
    app.include_router(skills_router, prefix="/api", responses=ERROR_RESPONSES)
    app.include_router(skill_matches_router, prefix="/api", responses=ERROR_RESPONSES)
    app.include_router(exchanges_router, prefix="/api", responses=ERROR_RESPONSES)
    app.include_router(sessions_router, prefix="/api", responses=ERROR_RESPONSES)
    app.include_router(reviews_router, prefix="/api", responses=ERROR_RESPONSES)
    app.include_router(activities_router, prefix="/api", responses=ERROR_RESPONSES)
    app.include_router(realtime_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "skillswap.main:app",
        host="localhost",
        port=8082,
        reload=True,
    )

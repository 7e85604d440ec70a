import asyncio

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hostelkeeper.api.notifications import router as notifications_router
from hostelkeeper.api.v1.router import router as api_v1_router
from hostelkeeper.config.logging import setup_logging
from hostelkeeper.config.settings import settings
from hostelkeeper.core.logging import get_logger
from hostelkeeper.core.middleware import register_exception_handlers, register_middlewares
from hostelkeeper.core.notifications import hub
from hostelkeeper.db.init_db import init_db
from hostelkeeper.worker import run_auto_attendance_once

logger = get_logger(__name__)


def _log_startup_run(future: "asyncio.Future") -> None:
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.error(f"Startup auto-attendance run crashed: {error}")
    else:
        logger.info(f"Startup auto-attendance run: {future.result()}")


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures logging, CORS, core middleware and exception handlers.
    - Includes the versioned API router under /api/v1 and the
      notification socket at /ws/notifications.
    - On startup creates missing tables outside production, binds the
      notification hub to the running loop and, when enabled, runs the
      auto-attendance reconciler once in a worker thread.
    """
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)
    app.include_router(notifications_router)

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok", "environment": settings.ENVIRONMENT}

    @app.on_event("startup")
    async def on_startup() -> None:
        if not settings.is_production():
            # Production schemas are managed by migrations
            init_db()

        loop = asyncio.get_running_loop()
        hub.bind_loop(loop)

        if settings.AUTO_ATTENDANCE_RUN_ON_STARTUP:
            future = loop.run_in_executor(None, run_auto_attendance_once)
            future.add_done_callback(_log_startup_run)

    return app


app = create_app()

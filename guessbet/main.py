"""Guessbet API — FastAPI Application Factory.

Usage:
    uvicorn guessbet.main:app --reload
    python -m guessbet.main
"""

from contextlib import asynccontextmanager
import logging
import time

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from guessbet.config import get_settings
from guessbet.deps import get_registry
from guessbet.errors import register_error_handlers
from guessbet.games.registry import SessionRegistry

logger = logging.getLogger(__name__)


class ProcessTimeMiddleware:
    """Adds an X-Process-Time header to every HTTP response."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        started = time.perf_counter()

        async def send_timed(message):
            if message["type"] == "http.response.start":
                elapsed = time.perf_counter() - started
                message["headers"] = [*message.get("headers", []), (b"x-process-time", f"{elapsed:.4f}s".encode())]
            await send(message)

        await self.app(scope, receive, send_timed)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(f"🚀 Starting {settings.APP_NAME} v{settings.VERSION} ({settings.ENV})")
    logger.info(f"Game timeout: {settings.GAME_TIMEOUT_SECONDS}s")

    yield

    logger.info(f"👋 Shutting down, {get_registry().count()} games in memory")


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=settings.LOG_LEVEL,
    )

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        description="Numeric-guessing betting sessions",
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(ProcessTimeMiddleware)

    # Error handlers
    register_error_handlers(app)

    # System endpoints
    @app.get("/health", tags=["system"])
    def health(registry: SessionRegistry = Depends(get_registry)):
        return {
            "status": "ok",
            "app": settings.APP_NAME,
            "version": settings.VERSION,
            "environment": settings.ENV,
            "games": registry.count(),
        }

    @app.get("/", tags=["system"])
    def root():
        return {
            "name": settings.APP_NAME,
            "version": settings.VERSION,
            "docs": "/docs" if settings.DEBUG else "disabled",
        }

    # Domain routers
    from guessbet.games.router import router as games_router

    app.include_router(games_router)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "guessbet.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    def __init__(self, code: str, message: str, status: int = 400, details: dict | None = None):
        self.code = code
        self.message = message
        self.status = status
        self.details = details or {}
        super().__init__(message)


class NotFoundError(APIError):
    def __init__(self, code: str = "NOT_FOUND", message: str = "Resource not found", details: dict | None = None):
        super().__init__(code, message, 404, details)


class ValidationError(APIError):
    def __init__(self, code: str = "VALIDATION_ERROR", message: str = "Invalid input", details: dict | None = None):
        super().__init__(code, message, 422, details)


# ── Game session errors ──────────────────────────────

class DuplicateGameIdError(APIError):
    """A game with this id was already registered. Ids are never reused."""

    def __init__(self, game_id: str):
        super().__init__(
            "DUPLICATE_GAME_ID",
            f"Game '{game_id}' already exists",
            409,
            {"game_id": game_id},
        )


class GameDoesNotExistError(NotFoundError):
    def __init__(self, game_id: str):
        super().__init__("GAME_NOT_FOUND", f"Game '{game_id}' not found", {"game_id": game_id})


class GameTimedOutError(APIError):
    """Raised for late bets and for ending a game that already ended or expired."""

    def __init__(self, game_id: str, reason: str = "timed out"):
        super().__init__(
            "GAME_TIMED_OUT",
            f"Game '{game_id}' has {reason}",
            410,
            {"game_id": game_id, "reason": reason},
        )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        return JSONResponse(
            status_code=exc.status,
            content={
                "error": {
                    "code": exc.code,
                    "message": exc.message,
                    "details": exc.details,
                }
            },
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": str(exc) if app.debug else "Internal server error",
                    "details": {},
                }
            },
        )

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ═══════════════════════════════════════════════════
    # FastAPI Application Settings
    # ═══════════════════════════════════════════════════
    APP_NAME: str = "Guessbet"
    VERSION: str = "0.1.0"
    ENV: str = "development"  # "development" | "production"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ═══════════════════════════════════════════════════
    # Server Configuration
    # ═══════════════════════════════════════════════════
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: list[str] = ["*"]

    # ═══════════════════════════════════════════════════
    # Game Rules
    # ═══════════════════════════════════════════════════
    GAME_TIMEOUT_SECONDS: int = 60  # bets accepted until created_at + this

    class Config:
        env_file = ".env"
        env_prefix = "GUESSBET_"
        extra = "ignore"


_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Lazily built Settings singleton.

    Used as a FastAPI dependency or called directly:

    @app.get("/info")
    def info(settings: Settings = Depends(get_settings)):
        return {"env": settings.ENV}
    """
    global _settings
    if not _settings:
        _settings = Settings()
    return _settings

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Inventory Tracking API"
    ENVIRONMENT: str = "local"
    API_PREFIX: str = "/api/products"

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./inventory.db"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # HTTP
    # ==============================
    CORS_ORIGINS: str = "*"
    MAX_BODY_BYTES: int = 10 * 1024 * 1024

    # ==============================
    # Rate limiting
    # ==============================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_MAX: int = 100
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60

    @property
    def cors_origins(self) -> list[str]:
        origins = [value.strip() for value in self.CORS_ORIGINS.split(",")]
        return [value for value in origins if value] or ["*"]

    @property
    def rate_limit(self) -> str:
        return "{} per {} seconds".format(self.RATE_LIMIT_MAX, self.RATE_LIMIT_WINDOW_SECONDS)


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]

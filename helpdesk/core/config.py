# helpdesk/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "Helpdesk API"
    APP_DESC: str = "Customer support issue tracking"
    APP_VERSION: str = "1.0.0"

    # "memory" keeps everything in process, "database" uses DATABASE_URL
    STORAGE_BACKEND: Literal["memory", "database"] = "memory"
    DATABASE_URL: str = Field(default="sqlite:///./helpdesk.db")
    DB_ECHO: bool = False

    LOG_LEVEL: str = "INFO"

    # Comma separated, empty means any origin
    CORS_ORIGINS: str | None = None

    HOST: str = "127.0.0.1"
    PORT: int = Field(default=8000, ge=1, le=65535)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]

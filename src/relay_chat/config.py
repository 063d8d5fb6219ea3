from __future__ import annotations

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    POSTGRES_USER: str = "relay"
    POSTGRES_PASSWORD: str = "relay"
    POSTGRES_DB: str = "relay_chat"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432

    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_RECYCLE: int = 300

    CORS_ORIGINS: list[str] = ["*"]

    # Reaper: seconds between sweeps, and max silence before eviction.
    TICK_PERIOD: float = 15.0
    IDLE_THRESHOLD: float = 10.0
    REAPER_ENABLED: bool = True

    MESSAGES_DEFAULT_LIMIT: int = 100
    MESSAGES_MAX_LIMIT: int = 1000

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.POSTGRES_DB}"
        )

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()

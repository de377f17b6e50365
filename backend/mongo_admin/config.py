"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Credentials never live here: passwords arrive per session in the connect request
    - get_settings() is cached (lru_cache) — single instance per process
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage server defaults for connect requests that omit host/port
    mongo_default_host: str = "localhost"
    mongo_default_port: int = 27017

    # Driver timeouts: the only timeouts applied to remote calls
    mongo_server_selection_timeout_ms: int = 5000
    mongo_connect_timeout_ms: int = 5000

    @field_validator(
        "mongo_server_selection_timeout_ms", "mongo_connect_timeout_ms",
    )
    @classmethod
    def positive_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("timeouts must be positive milliseconds")
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()

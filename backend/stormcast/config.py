"""Application configuration using Pydantic Settings."""

import logging
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    # Server (host:port)
    bind: str = "0.0.0.0:8080"

    # Logging: any stdlib level name, case-insensitive
    log_level: str = "info"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value!r}")
        return level

    @model_validator(mode="after")
    def _check_bind(self) -> "Settings":
        """Reject bind addresses that uvicorn could not listen on."""
        host, sep, port = self.bind.rpartition(":")
        if not sep or not host:
            raise ValueError(f"bind address must be host:port, got {self.bind!r}")
        if not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError(f"invalid port in bind address {self.bind!r}")
        return self

    @property
    def host(self) -> str:
        return self.bind.rpartition(":")[0].strip("[]")

    @property
    def port(self) -> int:
        return int(self.bind.rpartition(":")[2])

    model_config = {"env_prefix": "STORMCAST_", "env_file": str(_ENV_FILE)}


settings = Settings()

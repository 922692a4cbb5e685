"""
Static configuration, read once at startup from environment variables (and an optional .env file).

The resulting Settings object is passed down explicitly (app factory, services, game rules),
nothing reads the environment after startup.
"""

import os
from pathlib import Path
from typing import Literal, Mapping, Optional, Self

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Environment variable -> Settings field
ENV_VARS: dict[str, str] = {
    "SNAKE_HOST": "host",
    "SNAKE_PORT": "port",
    "SNAKE_LOG_LEVEL": "log_level",
    "LEADERBOARD_BACKEND": "leaderboard_backend",
    "LEADERBOARD_FILE": "leaderboard_file",
    "DATABASE_URL": "database_url",
    "LEADERBOARD_SIZE": "leaderboard_size",
    "LEVEL_THRESHOLD": "level_threshold",
    "BASE_OBSTACLE_COUNT": "base_obstacle_count",
    "BASE_SPEED_MS": "base_speed_ms",
    "CORS_ORIGINS": "cors_origins",
}


class Settings(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = "INFO"

    # --- Leaderboard storage ---
    leaderboard_backend: Literal["json", "sql"] = "json"
    leaderboard_file: Path = Path("leaderboard.json")
    database_url: str = "sqlite:///leaderboard.db"
    leaderboard_size: int = Field(default=10, ge=1)

    # --- Game tuning ---
    level_threshold: int = Field(default=25, ge=1)
    base_obstacle_count: int = Field(default=5, ge=0)
    base_speed_ms: float = Field(default=150.0, gt=0)

    cors_origins: list[str] = ["*"]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: object) -> object:
        """Environment variables hold a comma-separated string."""
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, dotenv: bool = True
    ) -> Self:
        """Build the settings from the (given or process) environment. Unset variables keep their default."""
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        values = {
            field_name: environ[variable]
            for variable, field_name in ENV_VARS.items()
            if variable in environ
        }
        return cls.model_validate(values)

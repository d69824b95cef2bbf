"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="VRO_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Visit Route Optimizer API"
    api_prefix: str = "/api"
    max_visits_per_day: int = Field(default=8, ge=1)
    working_hours: float = Field(default=8.0, gt=0.0)
    lunch_break: float = Field(default=1.0, ge=0.0)
    vehicle_capacity: float = Field(default=1000.0, ge=0.0)
    population_size: int = Field(default=50, ge=1)
    generations: int = Field(default=100, ge=0)
    default_seed: Optional[int] = Field(
        default=None,
        description="Seed for the genetic optimizer when a request does not carry one.",
    )
    optimizer_time_limit_seconds: Optional[float] = Field(
        default=None,
        gt=0.0,
        description="Wall-clock budget checked between generations of the genetic optimizer.",
    )
    min_visits_to_optimize: int = Field(default=2, ge=1)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()

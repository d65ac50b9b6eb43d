"""Application configuration and settings management."""

from typing import Any, Literal

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="FLEET_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Fleet Dispatch API"
    api_prefix: str = "/api"
    websocket_path: str = "/ws"
    depot_latitude: float = Field(
        default=18.4861,
        ge=-90.0,
        le=90.0,
        description="Warehouse latitude used when a truck has no reported position.",
    )
    depot_longitude: float = Field(
        default=-69.9312,
        ge=-180.0,
        le=180.0,
        description="Warehouse longitude used when a truck has no reported position.",
    )
    default_strategy: Literal["nearest-neighbor", "2-opt", "hybrid"] = Field(
        default="hybrid",
        description="Optimization strategy used when a request does not name one.",
    )
    average_speed_kmh: float = Field(
        default=40.0,
        gt=0.0,
        description="Average truck speed used to estimate travel minutes between stops.",
    )
    use_time_windows: bool = Field(
        default=False,
        description="Drop expired deliveries and pre-sort by deadline before optimizing.",
    )
    log_level: str = Field(default="INFO")
    seed_sample_data: bool = Field(
        default=True,
        description="Load a small demo fleet into the in-memory store at startup.",
    )
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

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        return str(value or "INFO").strip().upper()


settings = Settings()

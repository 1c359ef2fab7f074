# src/config/settings.py — v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for all deployment-specific settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === ANALYSIS ORACLE ===
    oracle_provider: str = "openai"
    oracle_model: str = "google/gemini-2.5-pro"
    oracle_base_url: str = "https://ai.gateway.lovable.dev/v1"
    oracle_api_key: str = ""
    oracle_text_temperature: float = 0.3
    oracle_media_temperature: float = 0.2
    oracle_max_tokens: int = 4096
    oracle_timeout_seconds: float | None = None

    # === Local cache (device tier) ===
    local_cache_enabled: bool = True
    local_cache_backend: Literal["json", "sqlite"] = "json"
    local_cache_root: Path = Path("~/.truthgen/cache")
    local_cache_ttl_hours: float = 24.0

    # === Shared cache (backend tier) ===
    shared_cache_backend: Literal["none", "sqlite", "redis"] = "none"
    shared_cache_db_path: Path | None = None
    shared_cache_redis_url: str = ""

    # === HTTP server ===
    server_host: str = "127.0.0.1"
    server_port: int = 8000

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("local_cache_ttl_hours")
    @classmethod
    def validate_ttl(cls, v: float) -> float:  # noqa: N805
        """Cache TTL must be strictly positive."""
        if v <= 0:
            raise ValueError("local_cache_ttl_hours must be > 0")
        return v

    @field_validator("oracle_text_temperature", "oracle_media_temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:  # noqa: N805
        if not 0.0 <= v <= 2.0:
            raise ValueError("oracle temperature must be within [0, 2]")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.shared_cache_backend == "redis" and not self.shared_cache_redis_url:
            errors.append(
                "SHARED_CACHE_REDIS_URL must be set when SHARED_CACHE_BACKEND=redis"
            )

        if self.shared_cache_backend == "sqlite" and self.shared_cache_db_path is None:
            errors.append(
                "SHARED_CACHE_DB_PATH must be set when SHARED_CACHE_BACKEND=sqlite"
            )

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def local_cache_ttl_ms(self) -> int:
        """Local cache TTL in epoch milliseconds."""
        return int(self.local_cache_ttl_hours * 60 * 60 * 1000)


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-process config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]

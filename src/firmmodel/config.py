"""Simple configuration management for the firm model."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="FIRM_MODEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App info
    app_name: str = Field(default="Firm Model")
    version: str = Field(default="0.1.0")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Sampling domain
    q_max: float = Field(default=10.0, gt=0, description="Upper bound of Q")
    display_step: float = Field(default=0.1, gt=0, description="Chart sample step")

    # Marker search
    root_scan_step: float = Field(default=0.01, gt=0)
    bisection_iterations: int = Field(default=30, ge=1, le=200)
    root_dedup_tolerance: float = Field(default=1e-3, ge=0)
    profit_limit_min_gap: float = Field(default=1.0, ge=0)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


def reload_settings() -> Settings:
    """Reload settings (clears cache)."""
    get_settings.cache_clear()
    return get_settings()

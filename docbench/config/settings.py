"""
Settings - Engine configuration using Pydantic Settings.

Loads from environment variables (``DOCBENCH_`` prefix) and .env files.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings."""

    # Paths
    output_dir: Path = Path("outputs")
    reports_dir: Path = Path("reports")

    # Conversion
    assess_quality: bool = False
    preprocess_input: bool = True
    # None disables the per-call timeout
    converter_timeout_seconds: float | None = Field(default=None, gt=0)
    # "module:function" hooks called with the registry
    converter_plugins: list[str] = Field(default_factory=list)

    # Benchmarking
    benchmark_iterations: int = Field(default=3, ge=1)
    benchmark_max_iterations: int = Field(default=100, ge=1)
    trace_memory: bool = True

    # Scoring
    score_layout_axes: bool = True
    text_sample_chars: int = Field(default=200, ge=0)

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="DOCBENCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

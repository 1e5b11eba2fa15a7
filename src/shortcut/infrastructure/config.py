"""Configuration management for the row store."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IndexConfig(BaseModel):
    """Index configuration."""

    btree_max_keys: int = Field(
        default=64, ge=3, le=4096, description="Maximum keys per B+Tree node before it splits"
    )
    default_kind: Literal["hash", "btree"] = Field(
        default="hash", description="Index implementation attached by tools that pick one"
    )


class BenchConfig(BaseModel):
    """Benchmark configuration."""

    rounds: int = Field(default=1_000_000, ge=1, description="Number of puts and gets")
    use_index: bool = Field(default=False, description="Attach an index on column 0")


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="console", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="shortcut", description="Service name for tracing")
    metrics_port: int | None = Field(
        default=None, ge=1, le=65535, description="Prometheus metrics port (disabled if unset)"
    )


class Config(BaseSettings):
    """Main configuration for the row store tooling."""

    model_config = SettingsConfigDict(
        env_prefix="SHORTCUT_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    index: IndexConfig = Field(default_factory=IndexConfig)
    bench: BenchConfig = Field(default_factory=BenchConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()

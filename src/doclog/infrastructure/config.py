"""Configuration management for the document store."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageConfig(BaseModel):
    """Log file storage configuration."""

    sync_mode: Literal["fsync", "fdatasync", "none"] = Field(
        default="none", description="Sync mode applied after every log write"
    )
    create_if_missing: bool = Field(
        default=True, description="Create an empty log file when the store is opened"
    )
    encoding: str = Field(default="utf-8", description="Text encoding of the log file")


class QueryConfig(BaseModel):
    """Query evaluation configuration."""

    strict: bool = Field(
        default=False,
        description="Raise on unrecognized or ambiguous filter nodes instead of failing closed",
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="doclog", description="Service name for tracing")


class Config(BaseSettings):
    """Main configuration for the document store."""

    model_config = SettingsConfigDict(
        env_prefix="DOCLOG_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()

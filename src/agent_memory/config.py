"""
Configuration for the memory subsystem.

Settings are pydantic-settings models read from environment variables, one
prefix per section:

- ``AGENT_MEMORY_STORAGE_*``: backend selection and file location
- ``AGENT_MEMORY_HYBRID_*``: rank-fusion parameters
- ``AGENT_MEMORY_*``: top-level options such as the log level
"""

import logging
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.validators import BackendName

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "agent_memory"


def default_memory_file() -> Path:
    """``~/.agent_memory/memory/memories.jsonl``"""
    return Path.home() / ".agent_memory" / "memory" / "memories.jsonl"


class StorageSettings(BaseSettings):
    """Backend selection."""

    model_config = SettingsConfigDict(env_prefix="AGENT_MEMORY_STORAGE_", extra="ignore")

    backend: BackendName = "file"
    file_path: Path = Field(default_factory=default_memory_file)


class HybridSearchSettings(BaseSettings):
    """Reciprocal Rank Fusion parameters used by MemoryService."""

    model_config = SettingsConfigDict(env_prefix="AGENT_MEMORY_HYBRID_", extra="ignore")

    rrf_k: int = Field(default=60, ge=1)
    keyword_weight: float = Field(default=1.0, ge=0.0)
    vector_weight: float = Field(default=1.0, ge=0.0)
    # Each side of a hybrid search fetches limit * candidate_multiplier entries
    candidate_multiplier: int = Field(default=3, ge=1)

    @model_validator(mode="after")
    def check_weights(self) -> "HybridSearchSettings":
        if self.keyword_weight + self.vector_weight <= 0:
            raise ValueError("keyword_weight + vector_weight must be greater than 0")
        return self


class Settings(BaseSettings):
    """Top-level settings aggregating every section."""

    model_config = SettingsConfigDict(env_prefix="AGENT_MEMORY_", extra="ignore")

    log_level: str = "INFO"
    storage: StorageSettings = Field(default_factory=StorageSettings)
    hybrid_search: HybridSearchSettings = Field(default_factory=HybridSearchSettings)


settings = Settings()


def configure_logging(level: str | int | None = None) -> None:
    """Set the package logger level (defaults to ``settings.log_level``)."""
    requested = level if level is not None else settings.log_level
    resolved = logging.getLevelName(requested.upper()) if isinstance(requested, str) else requested
    if not isinstance(resolved, int):
        logger.warning("Unknown log level %r, falling back to INFO", requested)
        resolved = logging.INFO
    logging.getLogger(PACKAGE_LOGGER).setLevel(resolved)

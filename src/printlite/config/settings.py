# src/printlite/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Supports environment variables (and a .env file) with validation.

Files that USE this module:
- printlite.app (wires repository, pricing and service from settings)
- printlite.application.print_options (fail-open / fail-closed policy)
- printlite.application.order_service (transition enforcement)
- printlite.adapters.persistence (store selection and file path)

Files that this module USES:
- None
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import logging  # Log level names for validation
from pathlib import Path  # Object-oriented filesystem paths
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

ORDER_STORES = ("memory", "file")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Pricing policy ---
    # Binding is charged once per order; set True to charge it per copy.
    binding_per_copy: bool = Field(default=False, alias="BINDING_PER_COPY")
    # Reject unknown print options (True) or fall back to documented defaults (False).
    strict_print_options: bool = Field(default=True, alias="STRICT_PRINT_OPTIONS")

    # --- Order lifecycle ---
    enforce_status_transitions: bool = Field(default=False, alias="ENFORCE_STATUS_TRANSITIONS")

    # --- Persistence ---
    order_store: str = Field(default="memory", alias="ORDER_STORE")
    orders_file: Path = Field(default=Path("./data/orders.json"), alias="ORDERS_FILE")

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    # Command output goes to stdout, so log lines go to stderr unless this is set.
    log_stdout: bool = Field(default=False, alias="PRINTLITE_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @field_validator("order_store")
    @classmethod
    def validate_order_store(cls, v: str) -> str:
        """Validate order store backend name."""
        v = v.strip().lower()
        if v not in ORDER_STORES:
            raise ValueError(f"ORDER_STORE must be one of {', '.join(ORDER_STORES)}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        v = v.strip().upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return v

    @property
    def log_level_value(self) -> int:
        """Numeric logging level for ``setup_logging``."""
        return getattr(logging, self.log_level)


# Global settings instance
settings = Settings()

"""
Configuration management for the Dominion card catalog.

Uses Pydantic for type-safe, validated configuration with environment variable support.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from dominion_picker.constants import DEFAULT_DB_FILENAME


class CatalogSettings(BaseSettings):
    """Main configuration for the card catalog.

    Settings can be overridden via:
    1. Environment variables (prefixed with DP_)
    2. .env file in the working directory
    3. Programmatic overrides

    Example:
        export DP_DATA_DIR=/var/lib/dominion
        export DP_LOG_LEVEL=DEBUG
    """

    # === Store ===
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".dominion_picker",
        description="Directory holding the card store",
    )
    db_filename: str = Field(
        default=DEFAULT_DB_FILENAME,
        min_length=1,
        description="File name of the SQLite card store",
    )
    resources_dir: Optional[Path] = Field(
        default=None,
        description="Directory with manifest.json and card files (packaged data if unset)",
    )
    check_identities: bool = Field(
        default=True,
        description="Fail the build if Black Market and Young Witch lose their ids",
    )
    db_wal_mode: bool = Field(
        default=True, description="Enable SQLite WAL mode for concurrent readers"
    )

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_to_file: bool = Field(default=False, description="Enable file logging")
    logs_dir: Path = Field(default=Path("logs"), description="Log files directory")
    log_rotation: str = Field(default="10 MB", description="Log file rotation size")
    log_retention: str = Field(
        default="10 days", description="Log file retention period"
    )

    @field_validator("data_dir", "resources_dir", "logs_dir", mode="before")
    @classmethod
    def expand_user(cls, v):
        """Expand ~ in configured paths."""
        if isinstance(v, str):
            v = Path(v)
        if isinstance(v, Path):
            v = v.expanduser()
        return v

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_filename

    model_config = {
        "env_prefix": "DP_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Global settings instance
settings = CatalogSettings()


def reload_settings() -> CatalogSettings:
    """Reload settings from environment and .env file.

    Useful for testing or runtime configuration changes.
    """
    global settings
    settings = CatalogSettings()
    return settings

"""Settings for treeshift with automatic environment variable support."""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from treeshift.core.logging import LOG_LEVELS
from treeshift.models.enums import MoveStrategy
from treeshift.models.options import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_PROGRESS_UPDATE_BYTE_INTERVAL,
)


class TreeshiftSettings(BaseSettings):
    """Process-wide defaults for tree operations.

    Values are read from ``TREESHIFT_*`` environment variables and an
    optional ``.env`` file. Option models seeded from these settings may
    still override every value per call.

    Precedence order (highest to lowest):
    1. Environment variables
    2. Constructor arguments
    3. .env file
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="TREESHIFT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        return (
            env_settings,
            init_settings,
            dotenv_settings,
            file_secret_settings,
        )

    read_buffer_size: int = Field(
        default=DEFAULT_BUFFER_SIZE,
        gt=0,
        description="Size in bytes of the buffer used when reading source files",
    )
    write_buffer_size: int = Field(
        default=DEFAULT_BUFFER_SIZE,
        gt=0,
        description="Size in bytes of the buffer used when writing destination files",
    )
    progress_update_byte_interval: int = Field(
        default=DEFAULT_PROGRESS_UPDATE_BYTE_INTERVAL,
        gt=0,
        description="Minimum number of bytes copied between two progress reports",
    )
    move_strategy: MoveStrategy = Field(
        default=MoveStrategy.RENAME_WITH_FALLBACK,
        description="Default mechanism for directory moves",
    )

    # Logging
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is recognized."""
        upper_v = v.strip().upper()
        if upper_v not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of {list(LOG_LEVELS)}")
        return upper_v

    @field_validator("move_strategy", mode="before")
    @classmethod
    def normalize_move_strategy(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower().replace("-", "_")
        return v

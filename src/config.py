"""
Configuration management using Pydantic for the image effect engine.
Provides type-safe configuration with validation and environment variable support.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.constants import (
    APIConstants,
    EffectConstants,
    ImageConstants,
    SystemConstants,
)
from common.enums import DitherMode

logger = logging.getLogger(__name__)


class EngineConfig(BaseSettings):
    """Effect engine and history configuration."""

    mosaic_workers: int = Field(
        default=EffectConstants.MOSAIC_WORKERS,
        ge=1,
        le=SystemConstants.MAX_WORKER_THREADS,
        description="Threads used for the mosaic nearest-seed scan",
    )
    mosaic_block_size: int = Field(
        default=EffectConstants.MOSAIC_BLOCK_SIZE,
        ge=1024,
        description="Distance-matrix elements evaluated per mosaic step",
    )
    max_mosaic_work: int = Field(
        default=EffectConstants.MAX_MOSAIC_WORK,
        ge=1,
        description="Reject mosaic requests whose pixels x seeds exceeds this",
    )
    max_history: Optional[int] = Field(
        default=None, ge=1, description="Maximum undo depth (None = unbounded)"
    )
    dither_mode: DitherMode = Field(
        default=DitherMode.TRUNCATE, description="Quantizer used by the dither effect"
    )

    model_config = SettingsConfigDict(env_prefix="IFX_ENGINE_", extra="ignore")


class StorageConfig(BaseSettings):
    """Image file storage configuration."""

    base_directory: str = Field(
        default=SystemConstants.DATA_DIR,
        description="Directory relative image file names resolve against",
    )
    default_format: str = Field(
        default=ImageConstants.DEFAULT_FORMAT, description="Format used when none is given"
    )
    allowed_formats: List[str] = Field(
        default=ImageConstants.ALLOWED_FORMATS, description="Writable image formats"
    )

    @field_validator("default_format")
    @classmethod
    def validate_default_format(cls, v):
        """Normalize the extension and check it is writable."""
        ext = v.lower() if v.startswith(".") else f".{v.lower()}"
        if ext not in ImageConstants.ALLOWED_FORMATS:
            raise ValueError(f"Unsupported format: {v}")
        return ext

    model_config = SettingsConfigDict(env_prefix="IFX_STORAGE_", extra="ignore")


class APIConfig(BaseSettings):
    """API configuration."""

    host: str = Field(default="0.0.0.0", description="API host address")
    port: int = Field(default=8000, ge=1, le=65535, description="API port")
    api_version: str = Field(default=APIConstants.API_VERSION, description="API version")
    cors_enabled: bool = Field(default=True, description="Enable CORS")
    cors_origins: List[str] = Field(default=["*"], description="CORS allowed origins")
    thumbnail_width: int = Field(
        default=ImageConstants.DEFAULT_THUMBNAIL_WIDTH,
        ge=ImageConstants.MIN_THUMBNAIL_WIDTH,
        le=ImageConstants.MAX_THUMBNAIL_WIDTH,
        description="Width of preview thumbnails in pixels",
    )
    max_script_lines: int = Field(
        default=APIConstants.MAX_SCRIPT_LINES, ge=1, description="Longest accepted script"
    )

    model_config = SettingsConfigDict(env_prefix="IFX_API_", extra="ignore")


class SystemConfig(BaseSettings):
    """System configuration."""

    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default=SystemConstants.LOG_LEVEL_DEFAULT, description="Logging level")
    log_file: Optional[str] = Field(default=None, description="Log file path")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    model_config = SettingsConfigDict(env_prefix="IFX_SYSTEM_", extra="ignore")


class Settings(BaseSettings):
    """Main application settings."""

    # Sub-configurations
    engine: EngineConfig = Field(default_factory=EngineConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)

    # Environment
    environment: str = Field(
        default="production", description="Environment (development, staging, production)"
    )

    # Config file support
    config_file: Optional[str] = Field(default=None, description="Path to YAML config file")

    @model_validator(mode="before")
    @classmethod
    def load_config_file(cls, values):
        """Load configuration from YAML file if specified."""
        if not isinstance(values, dict):
            return values

        config_file = values.get("config_file") or os.getenv("IFX_CONFIG_FILE")

        if config_file and Path(config_file).exists():
            import yaml

            try:
                with open(config_file, "r") as f:
                    file_config = yaml.safe_load(f)
                    if file_config:
                        # Merge file config with values (env vars take precedence)
                        for key, value in file_config.items():
                            if key not in values or values[key] is None:
                                values[key] = value
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config file {config_file}: {e}")

        return values

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        valid_envs = ["development", "staging", "production", "test"]
        if v not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of {valid_envs}")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return self.model_dump(mode="json", exclude_none=True)

    def save_to_file(self, path: str) -> None:
        """Save current configuration to YAML file."""
        import yaml

        config_dict = self.to_dict()
        config_dict.pop("config_file", None)
        with open(path, "w") as f:
            yaml.dump(config_dict, f, default_flow_style=False)

    model_config = SettingsConfigDict(
        env_prefix="IFX_",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with validated configuration
    """
    return Settings()


# Convenience function to reload settings (clears cache)
def reload_settings() -> Settings:
    """
    Reload settings, clearing the cache.

    Returns:
        Fresh Settings object
    """
    get_settings.cache_clear()
    return get_settings()

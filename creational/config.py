"""
Toolkit configuration.

All settings are configurable via environment variables with the
CREATIONAL_ prefix. Explicit constructor arguments on each component
take precedence over these values.
"""

import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    CLONE_MODE_DEEP,
    CLONE_MODE_SHALLOW,
    DEFAULT_BUILDER_REUSABLE,
    DEFAULT_CLONE_MODE,
    DEFAULT_FACTORY_ALLOW_OVERWRITE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PROTOTYPE_ALLOW_OVERWRITE,
    DEFAULT_SINGLETON_POISON_ON_FAILURE,
    ENV_PREFIX,
)

logger = logging.getLogger(__name__)


class CreationalSettings(BaseSettings):
    """Configuration for the creational pattern components."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, case_sensitive=False)

    # Registration policies
    prototype_allow_overwrite: bool = Field(
        default=DEFAULT_PROTOTYPE_ALLOW_OVERWRITE,
        description="Allow PrototypeRegistry.register() to replace an existing name",
    )
    factory_allow_overwrite: bool = Field(
        default=DEFAULT_FACTORY_ALLOW_OVERWRITE,
        description="Allow SelectionFactory.register() to replace an existing key",
    )

    # Singleton construction
    singleton_poison_on_failure: bool = Field(
        default=DEFAULT_SINGLETON_POISON_ON_FAILURE,
        description="Remember the first constructor failure instead of retrying",
    )

    # Builders
    builder_reusable: bool = Field(
        default=DEFAULT_BUILDER_REUSABLE,
        description="Allow a builder to produce more than one product",
    )

    # Cloning
    default_clone_mode: str = Field(
        default=DEFAULT_CLONE_MODE,
        description="Clone mode used when clone() is called without one",
    )

    # Logging
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        description="Log level applied by configure_logging()",
    )

    @field_validator("default_clone_mode")
    @classmethod
    def validate_clone_mode(cls, v: str) -> str:
        v = v.lower()
        if v not in (CLONE_MODE_DEEP, CLONE_MODE_SHALLOW):
            raise ValueError(
                f"default_clone_mode must be '{CLONE_MODE_DEEP}' or '{CLONE_MODE_SHALLOW}'"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return v


# Singleton settings instance
_settings: Optional[CreationalSettings] = None


def get_settings() -> CreationalSettings:
    """Get the toolkit settings singleton."""
    global _settings
    if _settings is None:
        _settings = CreationalSettings()
        logger.debug(f"Creational settings loaded: {_settings.model_dump()}")
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (for testing)."""
    global _settings
    _settings = None

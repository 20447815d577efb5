"""Shared test fixtures and configuration."""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from creational.config import reset_settings


SETTINGS_ENV_VARS = [
    "CREATIONAL_PROTOTYPE_ALLOW_OVERWRITE",
    "CREATIONAL_FACTORY_ALLOW_OVERWRITE",
    "CREATIONAL_SINGLETON_POISON_ON_FAILURE",
    "CREATIONAL_BUILDER_REUSABLE",
    "CREATIONAL_DEFAULT_CLONE_MODE",
    "CREATIONAL_LOG_LEVEL",
    "LOG_LEVEL",
]


# =============================================================================
# Environment Variable Fixtures
# =============================================================================

@pytest.fixture
def clean_env(monkeypatch):
    """Clear toolkit environment variables."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Settings Singleton Reset
# =============================================================================

@pytest.fixture(autouse=True)
def reset_settings_singleton(clean_env):
    """Reset cached settings before and after each test."""
    reset_settings()
    yield
    reset_settings()


# =============================================================================
# Logging State Restore
# =============================================================================

@pytest.fixture
def restore_logging():
    """Restore root and toolkit logger state changed by configure_logging()."""
    root = logging.getLogger()
    toolkit = logging.getLogger("creational")
    root_level = root.level
    root_handlers = list(root.handlers)
    toolkit_level = toolkit.level

    yield

    for handler in list(root.handlers):
        if handler not in root_handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(root_level)
    toolkit.setLevel(toolkit_level)

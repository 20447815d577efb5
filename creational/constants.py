"""Toolkit-wide constants and configuration defaults.

Centralizes default policies shared by the registries, builders and
factories so that settings and components agree on them.
"""

# =============================================================================
# Environment
# =============================================================================
ENV_PREFIX = "CREATIONAL_"

# =============================================================================
# Registration Policies
# =============================================================================
DEFAULT_PROTOTYPE_ALLOW_OVERWRITE = False
DEFAULT_FACTORY_ALLOW_OVERWRITE = False

# =============================================================================
# Singleton Construction
# =============================================================================
DEFAULT_SINGLETON_POISON_ON_FAILURE = False

# =============================================================================
# Builders
# =============================================================================
DEFAULT_BUILDER_REUSABLE = True

# =============================================================================
# Cloning
# =============================================================================
CLONE_MODE_DEEP = "deep"
CLONE_MODE_SHALLOW = "shallow"
DEFAULT_CLONE_MODE = CLONE_MODE_DEEP

# =============================================================================
# Logging
# =============================================================================
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

"""Application-wide constants for privileged.

Constants that define matching and provider behavior.
For user-configurable settings per deployment, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    # Wildcard sentinels
    "ACTION_ALL",
    "SUBJECT_ALL",
    # File names
    "CONFIG_FILE_NAME",
    "MODEL_FILE_NAME",
    # Context provider caching
    "DEFAULT_CACHE_TTL_SECONDS",
    "MIN_CACHE_TTL_SECONDS",
    "MAX_CACHE_TTL_SECONDS",
    # HTTP adapter
    "DEFAULT_PRINCIPAL_HEADER",
]

# =============================================================================
# Application identity
# =============================================================================

APP_NAME = "privileged"

# =============================================================================
# Wildcard sentinels
# =============================================================================
# A rule whose action (or subject) equals the sentinel matches every action
# (or subject). Compared with the context's string comparer like any other
# value. "all" is not a sentinel; it is an ordinary name.

ACTION_ALL = "*"
SUBJECT_ALL = "*"

# =============================================================================
# File names
# =============================================================================

CONFIG_FILE_NAME = "config.json"
MODEL_FILE_NAME = "privileges.json"

# =============================================================================
# Context provider caching
# =============================================================================

DEFAULT_CACHE_TTL_SECONDS = 600  # 10 minutes
MIN_CACHE_TTL_SECONDS = 1
MAX_CACHE_TTL_SECONDS = 86400  # 24 hours

# =============================================================================
# HTTP adapter
# =============================================================================

# Header carrying the already-authenticated principal name.
# Authentication itself happens upstream (gateway, middleware).
DEFAULT_PRINCIPAL_HEADER = "X-Principal"

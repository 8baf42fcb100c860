"""Runtime environments.

Used by Settings and the logger factory to pick environment-specific
behaviour (console vs JSON log rendering).
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"

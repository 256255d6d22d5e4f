"""Configuration module for bench-buddy."""

from .compat import env_bool
from .settings import (
    ARTIFACTS_DIR,
    BENCHMARK_PACKAGE,
    DEFAULT_BASELINE,
    DEFAULT_FILTER,
    DEFAULT_LOG_LEVEL,
    DEFAULT_THRESHOLD,
    DOTNET_EXECUTABLE,
    GIT_EXECUTABLE,
    BuddyConfig,
)

__all__ = [
    "ARTIFACTS_DIR",
    "BENCHMARK_PACKAGE",
    "DEFAULT_BASELINE",
    "DEFAULT_FILTER",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_THRESHOLD",
    "DOTNET_EXECUTABLE",
    "GIT_EXECUTABLE",
    "BuddyConfig",
    "env_bool",
]

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_cache_dir

from .compat import env_bool

logger = logging.getLogger(__name__)

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
]

# CLI defaults for the comparison inputs
DEFAULT_BASELINE = "main"
DEFAULT_FILTER = "*"
DEFAULT_THRESHOLD = 1.0

# External tools
GIT_EXECUTABLE = os.getenv("BENCH_BUDDY_GIT", "").strip() or "git"
DOTNET_EXECUTABLE = os.getenv("BENCH_BUDDY_DOTNET", "").strip() or "dotnet"

# Package a project must reference to be measured
BENCHMARK_PACKAGE = "BenchmarkDotNet"

# Isolated export location, cleared before every collection:
# - Linux: ~/.cache/bench-buddy/artifacts
# - macOS: ~/Library/Caches/bench-buddy/artifacts
# - Windows: %LOCALAPPDATA%\bench-buddy\Cache\artifacts
ARTIFACTS_DIR = Path(user_cache_dir("bench-buddy", appauthor=False)) / "artifacts"

DEFAULT_LOG_LEVEL = "WARNING"


def _parse_threshold(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise RuntimeError(f"BENCH_BUDDY_THRESHOLD is not a number: {raw!r}") from None
    if value < 0:
        raise RuntimeError(f"BENCH_BUDDY_THRESHOLD must not be negative: {raw!r}")
    return value


def _parse_log_level(raw: str) -> str:
    name = raw.upper()
    if name not in logging.getLevelNamesMapping():
        raise RuntimeError(f"BENCH_BUDDY_LOG_LEVEL is not a logging level: {raw!r}")
    return name


@dataclass(frozen=True)
class BuddyConfig:
    baseline: str = DEFAULT_BASELINE
    threshold_percent: float = DEFAULT_THRESHOLD
    filter_expression: str = DEFAULT_FILTER
    full_names: bool = False
    git_executable: str = GIT_EXECUTABLE
    dotnet_executable: str = DOTNET_EXECUTABLE
    artifacts_dir: Path = ARTIFACTS_DIR
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "BuddyConfig":
        threshold = DEFAULT_THRESHOLD
        threshold_raw = os.getenv("BENCH_BUDDY_THRESHOLD", "").strip()
        if threshold_raw:
            threshold = _parse_threshold(threshold_raw)

        artifacts_raw = os.getenv("BENCH_BUDDY_ARTIFACTS_DIR", "").strip()
        artifacts_dir = Path(artifacts_raw).expanduser() if artifacts_raw else ARTIFACTS_DIR
        if artifacts_dir.exists() and not artifacts_dir.is_dir():
            raise RuntimeError(
                f"BENCH_BUDDY_ARTIFACTS_DIR exists and is not a directory: {artifacts_dir}"
            )

        log_level = DEFAULT_LOG_LEVEL
        log_level_raw = os.getenv("BENCH_BUDDY_LOG_LEVEL", "").strip()
        if log_level_raw:
            log_level = _parse_log_level(log_level_raw)
        logger.debug("Using artifacts directory: %s", artifacts_dir)

        return cls(
            baseline=os.getenv("BENCH_BUDDY_BASELINE", "").strip() or DEFAULT_BASELINE,
            threshold_percent=threshold,
            filter_expression=os.getenv("BENCH_BUDDY_FILTER", "").strip() or DEFAULT_FILTER,
            full_names=env_bool("BENCH_BUDDY_FULL_NAMES", default=False),
            git_executable=os.getenv("BENCH_BUDDY_GIT", "").strip() or GIT_EXECUTABLE,
            dotnet_executable=os.getenv("BENCH_BUDDY_DOTNET", "").strip() or DOTNET_EXECUTABLE,
            artifacts_dir=artifacts_dir,
            log_level=log_level,
        )

import os

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})


def env_bool(name: str, *, default: bool) -> bool:
    """Read a boolean flag; unset or blank falls back to ``default``."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY

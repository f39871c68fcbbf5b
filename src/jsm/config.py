"""Library settings.

Settings are read once from the environment:

- ``JSM_DEFAULT_TYPE``: element type of matrices built without an explicit
  type (default ``double``).
- ``JSM_LOG_LEVEL``: level used by :func:`jsm.log.setup_logging`
  (default ``WARNING``).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from jsm.types.dispatch import ElementType, parse_type


@dataclass(frozen=True)
class Settings:
    """Process-wide defaults."""

    default_type: ElementType = ElementType.DOUBLE
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Settings:
        default_type = os.environ.get("JSM_DEFAULT_TYPE")
        return cls(
            default_type=parse_type(default_type) if default_type else ElementType.DOUBLE,
            log_level=os.environ.get("JSM_LOG_LEVEL", "WARNING"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings, loading them on first use.

    Raises:
        UnknownTypeError: If ``JSM_DEFAULT_TYPE`` is not a valid type name.
    """
    return Settings.from_env()


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()

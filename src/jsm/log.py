"""Logging helpers.

The library logs through the standard ``logging`` module under the
``jsm`` namespace and never configures handlers on import. Applications
call :func:`setup_logging` once.

Usage:
    from jsm.log import get_logger

    logger = get_logger(__name__)
    logger.debug("cast %s -> %s", src, dst)
"""

from __future__ import annotations

import logging
import sys

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Attach a stream handler to the ``jsm`` logger.

    Subsequent calls are no-ops.

    Args:
        level: Level name. Defaults to the configured ``log_level``.
    """
    global _configured
    if _configured:
        return

    if level is None:
        from jsm.config import get_settings

        level = get_settings().log_level

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("jsm")
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a jsm module.

    Args:
        name: Module name (typically ``__name__``).
    """
    return logging.getLogger(name)

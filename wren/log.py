# wren/log.py
"""Logging helpers.

Library code only ever logs through ``get_logger``; applications opt in to
output with ``configure_logging``.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "wren"

__all__ = ["get_logger", "configure_logging"]


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    if name.startswith(_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def configure_logging(
    verbosity: int = 0, *, use_color: Optional[bool] = None
) -> logging.Logger:
    """
    Attach a single handler to the ``wren`` logger.

    verbosity 0 -> WARNING, 1 -> INFO, 2+ -> DEBUG.
    """
    logger = get_logger()
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logger.setLevel(level)

    for h in list(logger.handlers):
        logger.removeHandler(h)

    if use_color is None:
        use_color = sys.stderr.isatty()

    handler: logging.Handler
    if use_color:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=verbosity >= 2,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(levelname)s %(name)s: %(message)s")
        )

    logger.addHandler(handler)
    logger.propagate = False
    return logger

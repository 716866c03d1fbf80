"""Structured logging configuration."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Loggers that emit one line per collapse/carve step at DEBUG.
_STEP_LOGGERS = ("hexcrawl.systems.collapse", "hexcrawl.systems.carver")


def setup_logging(level: str = "INFO", stream: TextIO | None = None, step_trace: bool = False) -> logging.Handler:
    """Install a single stdout handler on the root logger.

    Per-step trace lines stay hidden at DEBUG unless *step_trace* is set.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(numeric_level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    step_level = logging.NOTSET if step_trace else max(numeric_level, logging.INFO)
    for name in _STEP_LOGGERS:
        logging.getLogger(name).setLevel(step_level)
    return handler

from __future__ import annotations

import logging
import math
import os
from datetime import datetime
from typing import Optional


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure and return the package-level logger.

    The handler is attached once. An explicit ``level`` is applied on every
    call; otherwise the first call reads ``VITALITY_LOG_LEVEL``.
    """
    logger = logging.getLogger("vitality")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(os.getenv("VITALITY_LOG_LEVEL", "INFO").upper())
    if level:
        logger.setLevel(level.upper())
    return logger


def round_half_up(value: float, digits: int = 0) -> float:
    """Round half away from zero for non-negative values.

    The built-in round() uses banker's rounding, so 2.5 -> 2. Averages and
    display percentages in this package always round .5 upwards:

        round_half_up(2.5) -> 3.0
        round_half_up(18.25, 1) -> 18.3
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_to_int(value: float) -> int:
    """round_half_up() returning an int."""
    return int(round_half_up(value))


def format_datetime(value: Optional[datetime]) -> str:
    """Format a datetime for display in assistant context text."""
    if value is None:
        return "Unknown"
    return value.strftime("%Y-%m-%d %H:%M")

#!/usr/bin/env python3
"""
utils.py

Small shared helpers:
- Logging decorator
- Hex color parsing
- Entry-point logging setup
"""
import functools
import logging
from typing import Optional, Tuple

RGB = Tuple[int, int, int]


# ─── Logging ────────────────────────────────────────────────────────────────
def log_call(func):
    """
    Decorator that logs entry & exit at DEBUG level only.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logging.debug(f"→ {func.__name__}()")
        result = func(*args, **kwargs)
        logging.debug(f"← {func.__name__}()")
        return result
    return wrapper


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )
    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


# ─── Colors ─────────────────────────────────────────────────────────────────
def hex_to_rgb(value: str) -> Optional[RGB]:
    """Parse ``#RRGGBB``/``RRGGBB`` (or the 3-digit short form) into an RGB tuple.

    Returns ``None`` for anything else.
    """
    text = (value or "").strip().lstrip("#")
    if len(text) == 3:
        text = "".join(ch * 2 for ch in text)
    if len(text) != 6:
        return None
    try:
        return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
    except ValueError:
        return None


def lerp_color(start: RGB, end: RGB, t: float) -> RGB:
    return tuple(int(round(a + (b - a) * t)) for a, b in zip(start, end))  # type: ignore[return-value]

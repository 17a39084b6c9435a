from __future__ import annotations

"""Shared helpers for locating a writable directory for exported headers."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional

import config


def _expand(path_str: str) -> Path:
    return Path(path_str).expanduser()


def _iter_candidate_output_dirs(override: Optional[str] = None) -> Iterable[Path]:
    if override:
        yield _expand(override)

    env_override = os.environ.get("MATCHUP_OUTPUT_DIR") or config.OUTPUT_DIR
    if env_override:
        yield _expand(env_override)

    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        yield _expand(xdg_data) / config.APP_DIR_NAME / "matchups"

    yield Path.home() / ".local" / "share" / config.APP_DIR_NAME / "matchups"


def _ensure_writable(path: Path, logger: Optional[logging.Logger]) -> bool:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        if logger:
            logger.debug("Could not create directory %s: %s", path, exc)
        return False

    try:
        fd, tmp_path = tempfile.mkstemp(dir=str(path))
    except OSError as exc:
        if logger:
            logger.debug("Directory %s is not writable: %s", path, exc)
        return False

    os.close(fd)
    try:
        os.unlink(tmp_path)
    except OSError:
        pass
    return True


def resolve_output_dir(
    *, logger: Optional[logging.Logger] = None, override: Optional[str] = None
) -> Path:
    """Return the first writable directory for exported matchup images."""

    for candidate in _iter_candidate_output_dirs(override):
        if _ensure_writable(candidate, logger):
            if logger:
                logger.info("Using output directory %s", candidate)
            return candidate

    fallback = Path(__file__).resolve().parent / "output"
    if logger:
        logger.warning(
            "Falling back to %s for exports; no writable directory was found.",
            fallback,
        )
    fallback.mkdir(parents=True, exist_ok=True)
    return fallback

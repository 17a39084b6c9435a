# config.py

#!/usr/bin/env python3
import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# ─── Environment helpers ───────────────────────────────────────────────────────

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
ENV_FILENAME = ".env"


def _env_files() -> List[Path]:
    """`.env` next to this module first, then one in the working directory."""

    project_env = Path(SCRIPT_DIR) / ENV_FILENAME
    cwd_env = Path.cwd() / ENV_FILENAME
    candidates = [project_env] if cwd_env == project_env else [project_env, cwd_env]
    return [path for path in candidates if path.is_file()]


_ENV_LOADED = False


def _should_load_env() -> bool:
    """Return ``True`` when dotenv files should be loaded."""

    if os.environ.get("MATCHUP_SKIP_DOTENV"):
        return False

    # Skip filesystem scans when running under pytest to keep test startup fast.
    if os.environ.get("PYTEST_CURRENT_TEST"):
        return False

    return True


def load_environment() -> None:
    """Load environment variables from `.env` files once, if allowed."""

    global _ENV_LOADED

    if _ENV_LOADED or not _should_load_env():
        return

    for path in _env_files():
        # Real environment variables always win over file values.
        if load_dotenv(path, override=False):
            logging.debug("Loaded settings from %s", path)
    _ENV_LOADED = True


load_environment()


def _get_first_env_var(*names: str) -> Optional[str]:
    """Return the first populated environment variable from *names.*"""

    for name in names:
        value = os.environ.get(name)
        if value:
            return value

    return None


def _int_from_env(name: str, default: int) -> int:
    raw_value = os.environ.get(name)
    if raw_value is None:
        return default
    try:
        value = int(raw_value)
    except (TypeError, ValueError):
        logging.warning("Invalid %s value %r; using default %d", name, raw_value, default)
        return default
    if value <= 0:
        logging.warning("%s must be greater than zero; using default %d", name, default)
        return default
    return value


def _float_from_env(name: str, default: float, *, maximum: Optional[float] = None) -> float:
    raw_value = os.environ.get(name)
    if raw_value is None:
        return default
    try:
        value = float(raw_value)
    except (TypeError, ValueError):
        logging.warning("Invalid %s value %r; using default %s", name, raw_value, default)
        return default
    if value <= 0 or (maximum is not None and value > maximum):
        logging.warning("%s out of range (%r); using default %s", name, raw_value, default)
        return default
    return value


# ─── Project paths ────────────────────────────────────────────────────────────
APP_DIR_NAME = "matchup_header_generator"
TEMPLATES_DIR = os.path.join(SCRIPT_DIR, "templates")

# ─── Render target geometry ───────────────────────────────────────────────────
# The exported header is always 1200×800; only the preview is scaled.
CANVAS_WIDTH = 1200
CANVAS_HEIGHT = 800
LOGO_BOX_SIZE = 400
LOGO_LIFT = 50
DIVIDER_WIDTH = 10
DIVIDER_COLOR = "#000000"

DEFAULT_EDGE_COLOR = "000000"
DEFAULT_HOME_CORE_COLOR = "000000"
DEFAULT_AWAY_CORE_COLOR = "FFFFFF"

PREVIEW_SCALE = _float_from_env("MATCHUP_PREVIEW_SCALE", 0.5, maximum=1.0)

# ─── Network ──────────────────────────────────────────────────────────────────
HTTP_TIMEOUT = _int_from_env("MATCHUP_HTTP_TIMEOUT", 10)
LOGO_TIMEOUT = _int_from_env("MATCHUP_LOGO_TIMEOUT", 10)
USER_AGENT = _get_first_env_var("MATCHUP_USER_AGENT") or (
    "Mozilla/5.0 (X11; Linux x86_64) matchup-header-generator/1.0"
)

ESPN_LEAGUES_URL = (
    "https://sports.core.api.espn.com/v2/sports/{sport}/leagues?lang=en&region=us"
)
ESPN_SCOREBOARD_URL = (
    "https://site.api.espn.com/apis/site/v2/sports/{sport}/{league}/scoreboard"
)
LEAGUE_LIMIT = _int_from_env("MATCHUP_LEAGUE_LIMIT", 25)
LEAGUE_CACHE_TTL = _int_from_env("MATCHUP_LEAGUE_CACHE_TTL", 15 * 60)  # seconds
SCOREBOARD_CACHE_TTL = _int_from_env("MATCHUP_SCOREBOARD_CACHE_TTL", 60)  # seconds

SPORTS = [
    ("soccer", "Soccer"),
    ("football", "Football"),
    ("basketball", "Basketball"),
    ("baseball", "Baseball"),
]
DEFAULT_SPORT = SPORTS[0][0]

# ─── Storage ──────────────────────────────────────────────────────────────────
OUTPUT_DIR = _get_first_env_var("MATCHUP_OUTPUT_DIR")

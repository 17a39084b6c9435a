#!/usr/bin/env python3
"""
data_fetch.py

Remote fetchers for the ESPN league index and scoreboards, sharing one
requests.Session.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import requests

from config import (
    ESPN_LEAGUES_URL,
    ESPN_SCOREBOARD_URL,
    HTTP_TIMEOUT,
    LEAGUE_CACHE_TTL,
    LEAGUE_LIMIT,
    SCOREBOARD_CACHE_TTL,
)
from matchups import MatchEvent, parse_events
from services.http_client import get_session, request_json

# ─── Shared HTTP session ─────────────────────────────────────────────────────
_session = get_session()

_LEAGUE_WORKERS = 8

# sport -> (fetched_at, leagues); url -> (fetched_at, events)
_LEAGUE_CACHE: Dict[str, Tuple[float, List["League"]]] = {}
_SCOREBOARD_CACHE: Dict[str, Tuple[float, List[MatchEvent]]] = {}


class DataFetchError(RuntimeError):
    """Raised when the event data source cannot produce usable data."""


@dataclass(frozen=True)
class League:
    id: str
    name: str
    abbreviation: str
    slug: str


def scoreboard_url(sport: str, league: str) -> str:
    return ESPN_SCOREBOARD_URL.format(sport=sport, league=league)


def clear_caches() -> None:
    _LEAGUE_CACHE.clear()
    _SCOREBOARD_CACHE.clear()


def _cached(cache: Dict[str, Tuple[float, Any]], key: str, ttl: int) -> Optional[Any]:
    entry = cache.get(key)
    if entry is None:
        return None
    fetched_at, value = entry
    if time.time() - fetched_at >= ttl:
        cache.pop(key, None)
        return None
    return value


def _force_https(ref: Any) -> str:
    return str(ref).replace("http://", "https://", 1)


# -----------------------------------------------------------------------------
# LEAGUES
# -----------------------------------------------------------------------------
def _fetch_league(ref: Any) -> Optional[League]:
    url = _force_https(ref)
    try:
        data = request_json(url, timeout=HTTP_TIMEOUT, session=_session) or {}
    except (requests.RequestException, ValueError) as exc:
        logging.warning("Skipping league %s: %s", url, exc)
        return None

    slug = data.get("slug")
    if not slug:
        logging.debug("League %s has no slug; skipping", url)
        return None
    return League(
        id=str(data.get("id") or ""),
        name=str(data.get("name") or slug),
        abbreviation=str(data.get("abbreviation") or ""),
        slug=str(slug),
    )


def fetch_leagues(sport: str) -> List[League]:
    """Return up to ``LEAGUE_LIMIT`` leagues for *sport*, in index order.

    League detail documents are fetched in parallel; a league whose detail
    fails to load is dropped. A failed index request raises
    :class:`DataFetchError`. Successful lookups are reused for
    ``LEAGUE_CACHE_TTL`` seconds.
    """

    cached = _cached(_LEAGUE_CACHE, sport, LEAGUE_CACHE_TTL)
    if cached is not None:
        return list(cached)

    url = ESPN_LEAGUES_URL.format(sport=sport)
    try:
        listing = request_json(url, timeout=HTTP_TIMEOUT, session=_session) or {}
    except (requests.RequestException, ValueError) as exc:
        logging.error("Error fetching %s leagues: %s", sport, exc)
        raise DataFetchError("Failed to fetch leagues") from exc

    refs = [
        item.get("$ref")
        for item in (listing.get("items") or [])[:LEAGUE_LIMIT]
        if isinstance(item, dict) and item.get("$ref")
    ]
    if not refs:
        return []

    with ThreadPoolExecutor(max_workers=min(_LEAGUE_WORKERS, len(refs))) as pool:
        results = list(pool.map(_fetch_league, refs))

    leagues = [league for league in results if league is not None]
    logging.info("Loaded %d/%d %s league(s)", len(leagues), len(refs), sport)
    _LEAGUE_CACHE[sport] = (time.time(), leagues)
    return list(leagues)


# -----------------------------------------------------------------------------
# SCOREBOARD
# -----------------------------------------------------------------------------
def fetch_raw_events(url: str) -> List[Dict[str, Any]]:
    try:
        resp = _session.get(url, timeout=HTTP_TIMEOUT)
    except requests.RequestException as exc:
        logging.error("Error fetching scoreboard %s: %s", url, exc)
        raise DataFetchError("Failed to fetch data") from exc

    if not resp.ok:
        logging.error("Scoreboard %s returned HTTP %s", url, resp.status_code)
        raise DataFetchError("Failed to fetch data")

    try:
        data = resp.json() or {}
    except ValueError as exc:
        raise DataFetchError("Failed to fetch data") from exc

    events = data.get("events") if isinstance(data, dict) else None
    if not events:
        raise DataFetchError("No events found in data")
    return events


def fetch_events(url: str) -> List[MatchEvent]:
    """Fetch a scoreboard URL and parse its events."""

    events = parse_events(fetch_raw_events(url))
    logging.info("Fetched %d event(s) from %s", len(events), url)
    return events


def fetch_scoreboard(sport: str, league: str) -> List[MatchEvent]:
    """Scoreboard events for one league, reused for ``SCOREBOARD_CACHE_TTL`` seconds."""

    url = scoreboard_url(sport, league)
    cached = _cached(_SCOREBOARD_CACHE, url, SCOREBOARD_CACHE_TTL)
    if cached is not None:
        return list(cached)
    events = fetch_events(url)
    _SCOREBOARD_CACHE[url] = (time.time(), events)
    return list(events)

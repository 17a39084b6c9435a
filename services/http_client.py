"""Shared HTTP session for the ESPN feeds and logo downloads."""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

import requests

from config import HTTP_TIMEOUT, USER_AGENT

DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "application/json, image/*;q=0.9, */*;q=0.8",
}

_session: Optional[requests.Session] = None
_session_lock = threading.Lock()


def _build_session() -> requests.Session:
    session = requests.Session()
    session.headers.update(DEFAULT_HEADERS)
    return session


def get_session() -> requests.Session:
    """Return the process-wide session, creating it on first use."""

    global _session

    if _session is None:
        with _session_lock:
            if _session is None:
                _session = _build_session()
    return _session


def request_json(url: str, *, timeout: Optional[float] = None, session=None) -> Any:
    """GET *url* and decode the JSON body.

    ``requests`` exceptions (including ``HTTPError`` for non-2xx replies)
    propagate to the caller.
    """

    sess = session or get_session()
    logging.debug("GET %s", url)
    resp = sess.get(url, timeout=timeout or HTTP_TIMEOUT)
    resp.raise_for_status()
    return resp.json()


def request_bytes(url: str, *, timeout: Optional[float] = None, session=None) -> bytes:
    """GET *url* and return the raw response body."""

    sess = session or get_session()
    logging.debug("GET %s", url)
    resp = sess.get(url, timeout=timeout or HTTP_TIMEOUT)
    resp.raise_for_status()
    return resp.content

#!/usr/bin/env python3
"""Small web front end: pick a sport and league, preview and download headers."""
from __future__ import annotations

import logging
import os
from io import BytesIO
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, render_template, request, send_file

import config
import data_fetch
from compositor import compose_matchup, render_preview
from matchups import MatchEvent

_logger = logging.getLogger(__name__)

app = Flask(__name__, template_folder=config.TEMPLATES_DIR)

_SPORT_IDS = {sport_id for sport_id, _label in config.SPORTS}


def _normalise_sport(value: Optional[str]) -> str:
    value = (value or "").strip().lower()
    return value if value in _SPORT_IDS else config.DEFAULT_SPORT


def _event_summary(event: MatchEvent) -> Dict[str, Any]:
    return {
        "id": event.event_id,
        "title": event.title,
        "status": event.status_detail,
        "eligible": event.is_eligible,
        "competitors": [
            {
                "displayName": team.display_name,
                "abbreviation": team.abbreviation,
                "color": team.primary_color,
                "alternateColor": team.secondary_color,
                "logo": team.logo_reference,
            }
            for team in event.competitors
        ],
    }


def _load_event(sport: str, league: str, event_id: str) -> Optional[MatchEvent]:
    for event in data_fetch.fetch_scoreboard(sport, league):
        if event.event_id and event.event_id == event_id:
            return event
    return None


@app.route("/")
def index() -> str:
    sport = _normalise_sport(request.args.get("sport"))
    league = (request.args.get("league") or "").strip()
    error: Optional[str] = None
    leagues: List[data_fetch.League] = []
    events: List[MatchEvent] = []

    try:
        leagues = data_fetch.fetch_leagues(sport)
    except data_fetch.DataFetchError as exc:
        error = str(exc)

    if not league and leagues:
        league = leagues[0].slug

    if league and request.args.get("fetch"):
        try:
            events = data_fetch.fetch_scoreboard(sport, league)
        except data_fetch.DataFetchError as exc:
            error = str(exc)

    return render_template(
        "index.html",
        sports=config.SPORTS,
        sport=sport,
        leagues=leagues,
        league=league,
        scoreboard_url=data_fetch.scoreboard_url(sport, league or "[select-league]"),
        events=events,
        error=error,
        canvas=(config.CANVAS_WIDTH, config.CANVAS_HEIGHT),
    )


@app.route("/api/leagues")
def api_leagues():
    sport = _normalise_sport(request.args.get("sport"))
    try:
        leagues = data_fetch.fetch_leagues(sport)
    except data_fetch.DataFetchError as exc:
        return jsonify(status="error", message=str(exc)), 502
    return jsonify(status="ok", sport=sport, leagues=[league.__dict__ for league in leagues])


@app.route("/api/events")
def api_events():
    sport = _normalise_sport(request.args.get("sport"))
    league = (request.args.get("league") or "").strip()
    if not league:
        return jsonify(status="error", message="Missing 'league' parameter"), 400

    url = data_fetch.scoreboard_url(sport, league)
    try:
        events = data_fetch.fetch_scoreboard(sport, league)
    except data_fetch.DataFetchError as exc:
        return jsonify(status="error", message=str(exc), url=url), 502
    return jsonify(
        status="ok",
        url=url,
        events=[_event_summary(event) for event in events],
    )


def _matchup_response(sport: str, league: str, event_id: str, *, preview: bool):
    try:
        event = _load_event(_normalise_sport(sport), league, event_id)
    except data_fetch.DataFetchError as exc:
        return jsonify(status="error", message=str(exc)), 502
    if event is None:
        return jsonify(status="error", message=f"No event with id {event_id!r}"), 404

    result = render_preview(event) if preview else compose_matchup(event)
    if not result.exported:
        return (
            jsonify(status="skipped", reason=result.reason, code=result.status.value),
            404,
        )

    response = send_file(
        BytesIO(result.data),
        mimetype=result.mimetype,
        as_attachment=not preview,
        download_name=result.filename,
        max_age=0,
    )
    if result.failed_logos:
        response.headers["X-Placeholder-Logos"] = ",".join(result.failed_logos)
    return response


@app.route("/matchup/<sport>/<path:league>/<event_id>.png")
def download_matchup(sport: str, league: str, event_id: str):
    return _matchup_response(sport, league, event_id, preview=False)


@app.route("/preview/<sport>/<path:league>/<event_id>.jpg")
def preview_matchup(sport: str, league: str, event_id: str):
    return _matchup_response(sport, league, event_id, preview=True)


if __name__ == "__main__":  # pragma: no cover
    from utils import configure_logging

    configure_logging()
    host = os.environ.get("MATCHUP_HOST", "0.0.0.0")
    port = int(os.environ.get("MATCHUP_PORT", "5001"))
    debug = os.environ.get("MATCHUP_DEBUG") == "1" or os.environ.get("FLASK_DEBUG") == "1"

    if debug:
        app.run(host=host, port=port, debug=True)
    else:
        from waitress import serve

        _logger.info("Serving matchup generator on %s:%d", host, port)
        serve(app, host=host, port=port)

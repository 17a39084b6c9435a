"""Team and match event records as consumed by the compositor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class Team:
    display_name: str
    abbreviation: str
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    logo_reference: str = ""


@dataclass(frozen=True)
class MatchEvent:
    """One scheduled or played contest.

    ``competitors`` keeps the upstream order; the compositor treats the first
    entry as the left side and the second as the right side.
    """

    title: str
    competitors: Tuple[Team, ...] = field(default_factory=tuple)
    status_detail: str = ""
    has_competition: bool = True
    event_id: str = ""

    @property
    def is_eligible(self) -> bool:
        return self.has_competition and len(self.competitors) >= 2

    @property
    def home(self) -> Optional[Team]:
        return self.competitors[0] if self.competitors else None

    @property
    def away(self) -> Optional[Team]:
        return self.competitors[1] if len(self.competitors) > 1 else None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _color(value: Any) -> Optional[str]:
    # ESPN sends "" as often as it omits the key.
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_team(raw: Dict[str, Any]) -> Team:
    """Build a :class:`Team` from an ESPN competitor entry."""

    team = (raw or {}).get("team") or {}
    return Team(
        display_name=_text(team.get("displayName") or team.get("name")),
        abbreviation=_text(team.get("abbreviation")),
        primary_color=_color(team.get("color")),
        secondary_color=_color(team.get("alternateColor")),
        logo_reference=_text(team.get("logo")),
    )


def parse_event(raw: Dict[str, Any]) -> MatchEvent:
    """Map one ESPN scoreboard ``events[]`` entry to a :class:`MatchEvent`."""

    raw = raw or {}
    competitions = raw.get("competitions") or []
    competition = competitions[0] if competitions else None

    if not isinstance(competition, dict):
        return MatchEvent(
            title=_text(raw.get("name")),
            has_competition=False,
            event_id=_text(raw.get("id")),
        )

    competitors = tuple(
        parse_team(entry)
        for entry in competition.get("competitors") or []
        if isinstance(entry, dict)
    )
    status = (competition.get("status") or {}).get("type") or {}
    return MatchEvent(
        title=_text(raw.get("name")),
        competitors=competitors,
        status_detail=_text(status.get("detail")),
        event_id=_text(raw.get("id")),
    )


def parse_events(raw_events: Iterable[Dict[str, Any]]) -> List[MatchEvent]:
    return [parse_event(raw) for raw in raw_events or []]

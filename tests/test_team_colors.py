"""Tests for gradient color resolution."""

import pytest

from compositor import AWAY, HOME, background_fills, resolve_team_colors
from matchups import Team
from utils import hex_to_rgb


def _team(primary=None, secondary=None, abbr="T"):
    return Team(
        display_name=f"Team {abbr}",
        abbreviation=abbr,
        primary_color=primary,
        secondary_color=secondary,
        logo_reference=f"https://example.test/{abbr}.png",
    )


@pytest.mark.parametrize("side", [HOME, AWAY])
def test_both_colors_present_are_used_verbatim(side):
    colors = resolve_team_colors(_team("123abc", "FEDCBA"), side)

    assert colors.edge == "#FEDCBA"
    assert colors.core == "#123abc"


@pytest.mark.parametrize("side", [HOME, AWAY])
def test_missing_secondary_defaults_to_black_on_both_sides(side):
    colors = resolve_team_colors(_team(primary="FF0000"), side)

    assert colors.edge == "#000000"


def test_missing_primary_default_differs_by_side():
    team = _team(secondary="00FF00")

    assert resolve_team_colors(team, HOME).core == "#000000"
    assert resolve_team_colors(team, AWAY).core == "#FFFFFF"


def test_background_fills_split_canvas_into_halves():
    home = _team(primary="FF0000", abbr="A")
    away = _team(secondary="00FF00", abbr="B")

    left, right = background_fills(home, away)

    assert left.box == (0, 0, 600, 800)
    assert (left.start, left.end) == ("#000000", "#FF0000")
    assert right.box == (600, 0, 1200, 800)
    assert (right.start, right.end) == ("#00FF00", "#FFFFFF")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("#FF0000", (255, 0, 0)),
        ("00ff7f", (0, 255, 127)),
        ("#abc", (170, 187, 204)),
        ("", None),
        ("zzzzzz", None),
        ("#12345", None),
    ],
)
def test_hex_to_rgb(value, expected):
    assert hex_to_rgb(value) == expected

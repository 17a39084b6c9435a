#!/usr/bin/env python3
"""Render a head-to-head header PNG for every event on an ESPN scoreboard."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Set

import data_fetch
from compositor import compose_matchup
from config import SPORTS
from paths import resolve_output_dir
from utils import configure_logging


def write_matchup(
    directory: Path, filename: str, data: bytes, taken: Optional[Set[str]] = None
) -> Path:
    """Write *data* under *filename*, numbering repeats within one run.

    Names already in *taken* get a " (1)", " (2)", ... suffix before the
    extension; files left over from earlier runs are overwritten.
    """
    # Abbreviations are used as-is; only the final path component is taken.
    name = Path(filename).name
    if taken is not None:
        stem, suffix = Path(name).stem, Path(name).suffix
        candidate, counter = name, 0
        while candidate in taken:
            counter += 1
            candidate = f"{stem} ({counter}){suffix}"
        if candidate != name:
            logging.warning("%s already written in this run; saving as %s", name, candidate)
        taken.add(candidate)
        name = candidate
    target = directory / name
    target.write_bytes(data)
    return target


def render_matchups(
    *,
    sport: str,
    league: Optional[str] = None,
    url: Optional[str] = None,
    output_dir: Optional[str] = None,
) -> int:
    configure_logging()

    source = url or data_fetch.scoreboard_url(sport, league or "")
    try:
        events = data_fetch.fetch_events(source)
    except data_fetch.DataFetchError as exc:
        logging.error("%s (%s)", exc, source)
        return 2

    directory = resolve_output_dir(logger=logging.getLogger(__name__), override=output_dir)
    written: List[Path] = []
    taken: Set[str] = set()
    for index, event in enumerate(events):
        logging.info("Rendering '%s'", event.title or f"event {index}")
        result = compose_matchup(event)
        if not result.exported:
            logging.info("Skipped '%s': %s", event.title, result.reason)
            continue
        path = write_matchup(directory, result.filename, result.data, taken)
        written.append(path)
        print(path)

    if not written:
        logging.error("No matchup images were produced.")
        return 1

    logging.info("Wrote %d matchup image(s) to %s", len(written), directory)
    return 0


def list_leagues(sport: str) -> int:
    configure_logging()
    try:
        leagues = data_fetch.fetch_leagues(sport)
    except data_fetch.DataFetchError as exc:
        logging.error("%s", exc)
        return 2
    for league in leagues:
        print(f"{league.slug}\t{league.name} ({league.abbreviation})")
    return 0 if leagues else 1


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--sport",
        default=SPORTS[0][0],
        choices=[sport_id for sport_id, _label in SPORTS],
        help="Sport to query (default: %(default)s).",
    )
    parser.add_argument(
        "--league",
        help="League slug, e.g. eng.1 or nfl.",
    )
    parser.add_argument(
        "--url",
        help="Scoreboard URL to use instead of the one built from --sport/--league.",
    )
    parser.add_argument(
        "--output-dir",
        help="Directory for the PNG files (default: auto-detected).",
    )
    parser.add_argument(
        "--list-leagues",
        action="store_true",
        help="Print the leagues available for --sport and exit.",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    if args.list_leagues:
        return list_leagues(args.sport)
    if not args.league and not args.url:
        parser.error("--league or --url is required")
    return render_matchups(
        sport=args.sport,
        league=args.league,
        url=args.url,
        output_dir=args.output_dir,
    )


if __name__ == "__main__":
    sys.exit(main())

"""Command line entrypoint: scrape a league's power rankings and print one week as CSV.

Example:
  powerrankings -l nba -w 5 week5.csv
  powerrankings -l nhl --replay
"""

from __future__ import annotations

import argparse
import logging
import sys

from config.settings import Settings
from core import filesystem
from parsing.league_rules import LEAGUES, UnknownLeagueError, get_rules
from services import pipeline

_log = logging.getLogger("powerrankings")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="powerrankings",
        description="Scrape weekly power rankings and export one week as CSV",
    )
    p.add_argument(
        "-l", "--league", required=True, help=f"League name ({', '.join(sorted(LEAGUES))})"
    )
    p.add_argument("-w", "--week", help="Week ID to export (default: current week)")
    p.add_argument("-f", "--force", action="store_true", help="Force update of existing weeks")
    p.add_argument("-r", "--replay", action="store_true", help="Re-run the last recorded scrape")
    p.add_argument(
        "--strict-replay",
        action="store_true",
        help="Fail when a replayed fetch was recorded for a different URL",
    )
    p.add_argument("--data-dir", help="Override the data directory")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p.add_argument("outfile", nargs="?", help="Output CSV file (default: stdout)")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # --help exits 0, parse errors exit 2
        return EXIT_USAGE if e.code else EXIT_OK
    try:
        get_rules(args.league)
    except UnknownLeagueError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return EXIT_USAGE

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    config = Settings.from_env(data_dir=args.data_dir)
    try:
        result = pipeline.run(
            args.league,
            config,
            week_id=args.week,
            force_update=args.force,
            replay=args.replay,
            strict_replay=args.strict_replay,
        )
        if args.outfile:
            filesystem.write_text_atomic(args.outfile, result.csv)
        else:
            sys.stdout.write(result.csv)
    except Exception as e:  # noqa: BLE001 - outermost boundary
        _log.debug("run failed", exc_info=True)
        print(f"{parser.prog}: {e}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

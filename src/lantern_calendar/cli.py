from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Optional, Sequence

import orjson

from .bootstrap import configure_logging
from .config import get_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lantern Calendar command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    month_parser = subparsers.add_parser("month", help="Print the labelled day grid of a month as JSON.")
    month_parser.add_argument("--month", help="Target month as YYYY-MM (defaults to the current month).")
    month_parser.add_argument("--week-start", choices=["system", "sunday", "monday"])

    subparsers.add_parser("reminders", help="Print the incomplete reminders grouped into list buckets.")

    day_parser = subparsers.add_parser("day", help="Print the lunar label, solar term and holidays of a date.")
    day_parser.add_argument("date", help="Date as YYYY-MM-DD.")

    api_settings = get_settings().api
    api_parser = subparsers.add_parser("api", help="Start the FastAPI server exposing the engine functions.")
    api_parser.add_argument("--host", default=api_settings.host)
    api_parser.add_argument("--port", type=int, default=api_settings.port)

    return parser


def _emit(payload: Any) -> None:
    sys.stdout.buffer.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2) + b"\n")


def main(argv: Optional[Sequence[str]] = None) -> None:
    configure_logging()
    logging.getLogger(__name__).info("Lantern Calendar CLI starting")
    parser = build_parser()
    args = parser.parse_args(argv)

    from .api import call_api

    if args.command == "month":
        _emit(call_api("calendar_month_grid", month=args.month, week_start=args.week_start))
    elif args.command == "reminders":
        _emit(call_api("reminders_classify"))
    elif args.command == "day":
        _emit(
            {
                "lunar": call_api("calendar_lunisolar_label", day=args.date),
                "solar_term": call_api("calendar_solar_term", day=args.date)["solar_term"],
                "holidays": call_api("calendar_holidays", day=args.date)["holidays"],
            }
        )
    elif args.command == "api":
        from .services.http import run_local_server

        run_local_server(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.print_help()


if __name__ == "__main__":
    main()

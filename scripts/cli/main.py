"""
Command-line front end for the BS calendar.

Usage:
    python3 -m scripts.cli to-bs 2024-11-04
    python3 -m scripts.cli to-ad 2081-07-19
    python3 -m scripts.cli today --calendar bs
    python3 -m scripts.cli --year-type financial period 2080-02-15 --type quarter
    python3 -m scripts.cli boundaries 2080-02-15 2080-11-10 --type quarter
    python3 -m scripts.cli --year-type financial end-date 2080 --type half-year --index 2

Exit status is 0 on success, 1 when the settings file cannot be loaded and 2
when the calendar rejects the input.  Error messages go to stderr.
"""

import argparse
import json
import logging
import sys
from collections.abc import Sequence

import yaml

from bs_config import configure, load_settings
from bs_kernel.domain.values import AccountingYearType, CalendarSystem, PeriodType
from bs_kernel.exceptions import CalendarKernelError, InvalidConfigValueError
from bs_kernel.logging_config import configure_logging, get_logger
from bs_services.calendar_service import CalendarService

logger = get_logger("cli")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bs-calendar",
        description="Convert dates between AD and BS and compute BS accounting periods.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  bs-calendar to-bs 2024-11-04\n"
            "  bs-calendar --year-type financial end-date 2080 --type quarter --index 1\n"
        ),
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="YAML settings file layered over the packaged defaults",
    )
    parser.add_argument(
        "--year-type", choices=[t.value for t in AccountingYearType], default=None,
        help="Accounting-year convention (default: from settings)",
    )
    parser.add_argument(
        "--log-level", choices=_LOG_LEVELS, default="WARNING",
        help="Structured log level written to stderr (default: WARNING)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    to_bs = sub.add_parser("to-bs", help="Convert an AD date to BS")
    to_bs.add_argument("date", help="AD date, YYYY-MM-DD")
    to_bs.add_argument("--format", dest="date_format", default=None)

    to_ad = sub.add_parser("to-ad", help="Convert a BS date to AD")
    to_ad.add_argument("date", help="BS date, YYYY-MM-DD")
    to_ad.add_argument("--format", dest="date_format", default=None)

    today = sub.add_parser("today", help="Print today's date")
    today.add_argument(
        "--calendar", choices=[c.value for c in CalendarSystem], default=None,
        help="Calendar system (default: from settings)",
    )

    period_types = [p.value for p in PeriodType]

    period = sub.add_parser("period", help="Period containing a BS date")
    period.add_argument("date", help="BS date, YYYY-MM-DD")
    period.add_argument("--type", dest="period_type", choices=period_types, default="quarter")
    period.add_argument(
        "--next", action="store_true",
        help="Print the following period instead",
    )

    boundaries = sub.add_parser("boundaries", help="Period ends between two BS dates")
    boundaries.add_argument("start", help="BS start date")
    boundaries.add_argument("end", help="BS end date")
    boundaries.add_argument("--type", dest="period_type", choices=period_types, default="quarter")

    end_date = sub.add_parser("end-date", help="Last day of a BS period")
    end_date.add_argument("year", type=int, help="Accounting year (BS)")
    end_date.add_argument("--type", dest="period_type", choices=period_types, default="year")
    end_date.add_argument("--index", type=int, default=1, help="1-based period index")

    return parser


def _run(args: argparse.Namespace, service: CalendarService) -> str:
    if args.command == "to-bs":
        return service.convert_to_bs(args.date, args.date_format)
    if args.command == "to-ad":
        return service.convert_to_ad(args.date, args.date_format)
    if args.command == "today":
        return service.today(args.calendar)
    if args.command == "period":
        lookup = service.next_period if args.next else service.period_of
        ref = lookup(args.date, args.period_type, args.year_type)
        return json.dumps(ref.as_dict())
    if args.command == "boundaries":
        dates = service.period_boundaries(
            args.start, args.end, args.period_type, args.year_type
        )
        return "\n".join(dates)
    if args.command == "end-date":
        return service.bs_period_end_date(
            args.year, args.index, args.period_type, args.year_type
        )
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(level=getattr(logging, args.log_level))

    try:
        settings = load_settings(args.config)
    except (OSError, yaml.YAMLError, InvalidConfigValueError) as exc:
        print(f"  ERROR: Cannot read settings: {exc}", file=sys.stderr)
        return 1

    try:
        if args.year_type:
            settings = settings.replace(accounting_year_type=args.year_type)
        configure(settings)

        output = _run(args, CalendarService())
    except CalendarKernelError as exc:
        logger.debug("cli_command_rejected", exc_info=True)
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 2

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())

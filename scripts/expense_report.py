#!/usr/bin/env python3
"""Print the weekday and weekly expense tables for a date range.

Example::

    python scripts/expense_report.py --start 2024-01-01 --end 2024-01-14 \\
        --workday 100 --weekend 50

    python scripts/expense_report.py --start 01/03/2024 --end 31/03/2024 \\
        --custom vendredi=200 --currency EUR
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from expense_calculator import config  # noqa: E402
from expense_calculator.aggregation import DateInterval, Weekday, aggregate  # noqa: E402
from expense_calculator.formatting import format_amount, format_period, format_results_title  # noqa: E402
from expense_calculator.inputs import build_cost_configuration, parse_date  # noqa: E402
from expense_calculator.logger import setup_logger  # noqa: E402
from expense_calculator.tables import day_buckets_frame, week_buckets_frame  # noqa: E402


def parse_custom_rates(entries: List[str]) -> Dict[Weekday, str]:
    """Parse ``jour=montant`` pairs; raises ``ValueError`` on a bad entry."""
    rates: Dict[Weekday, str] = {}
    for entry in entries:
        name, sep, amount = entry.partition("=")
        if not sep:
            raise ValueError(f"Expected jour=montant, got {entry!r}")
        rates[Weekday.parse(name)] = amount
    return rates


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--start", required=True, help="Start date (YYYY-MM-DD or dd/mm/yyyy)")
    parser.add_argument("--end", required=True, help="End date, inclusive")
    parser.add_argument("--workday", default=config.DEFAULT_WORKDAY_RATE, help="Rate for Monday to Friday")
    parser.add_argument("--weekend", default=config.DEFAULT_WEEKEND_RATE, help="Rate for Saturday and Sunday")
    parser.add_argument(
        "--custom",
        nargs="*",
        metavar="JOUR=MONTANT",
        help="Per-weekday rates (e.g. lundi=100 vendredi=200); enables custom mode",
    )
    parser.add_argument("--currency", default=config.DEFAULT_CURRENCY, help="Currency label")
    parser.add_argument("--log-level", default=None, help="Logging level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(level=args.log_level)

    start = parse_date(args.start)
    end = parse_date(args.end)
    if start is None or end is None:
        print(f"Invalid date: {args.start if start is None else args.end}")
        return 1
    if end < start:
        print("End date must not be before start date.")
        return 1

    try:
        custom = parse_custom_rates(args.custom) if args.custom is not None else None
    except ValueError as exc:
        print(exc)
        return 1

    cost_config = build_cost_configuration(
        custom is not None,
        workday_rate=args.workday,
        weekend_rate=args.weekend,
        custom_rates=custom,
    )
    result = aggregate(DateInterval(start, end), cost_config)

    print(format_results_title(start, end))
    print(format_period(result.total_day_count))
    print()
    print(day_buckets_frame(result, args.currency).to_string(index=False))
    print()
    print(week_buckets_frame(result, args.currency).to_string(index=False))
    print()
    print(f"Total: {format_amount(result.total_cost, args.currency)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

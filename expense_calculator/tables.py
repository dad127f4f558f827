"""pandas views of an :class:`AggregationResult` for the result tables.

Both helpers return a DataFrame with French column headers.  When a
currency label is given, money columns hold display strings; otherwise they
hold floats suitable for charts and further analysis.
"""

from __future__ import annotations

from typing import Callable, Optional

import pandas as pd

try:
    from .aggregation import AggregationResult
    from .formatting import format_amount, format_date
except ImportError:  # pragma: no cover - fallback for direct execution
    from aggregation import AggregationResult
    from formatting import format_amount, format_date

DAY_COLUMNS = ["Jour", "Nombre d'apparitions", "Montant unitaire", "Total"]
WEEK_COLUMNS = ["Semaine", "Du", "Au", "Jours", "Coût moyen", "Total"]


def _money(currency: Optional[str]) -> Callable:
    if currency is None:
        return float
    return lambda amount: format_amount(amount, currency)


def day_buckets_frame(result: AggregationResult, currency: Optional[str] = None) -> pd.DataFrame:
    """One row per weekday, Monday first."""
    money = _money(currency)
    rows = [
        {
            "Jour": bucket.weekday.label.capitalize(),
            "Nombre d'apparitions": bucket.occurrence_count,
            "Montant unitaire": money(bucket.unit_cost),
            "Total": money(bucket.total_cost),
        }
        for bucket in result.day_buckets
    ]
    return pd.DataFrame(rows, columns=DAY_COLUMNS)


def week_buckets_frame(result: AggregationResult, currency: Optional[str] = None) -> pd.DataFrame:
    """One row per week bucket in order of appearance."""
    money = _money(currency)
    rows = [
        {
            "Semaine": f"Semaine {bucket.week_index}",
            "Du": format_date(bucket.start_date),
            "Au": format_date(bucket.end_date),
            "Jours": bucket.day_count,
            "Coût moyen": money(bucket.average_unit_cost),
            "Total": money(bucket.total_cost),
        }
        for bucket in result.week_buckets
    ]
    return pd.DataFrame(rows, columns=WEEK_COLUMNS)

"""Coercion of raw widget values into the aggregation data model."""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Sequence, Union

try:
    from .aggregation import ZERO, CostConfiguration, DateInterval, Weekday
except ImportError:  # pragma: no cover - fallback for direct execution
    from aggregation import ZERO, CostConfiguration, DateInterval, Weekday

_SPACES = re.compile(r"\s")


def coerce_rate(value: Any) -> Decimal:
    """Turn a rate entry into a number, falling back to zero.

    Accepts numbers and text such as ``"1 500"``, ``"12,5"`` or ``"0150"``.
    Empty, non-numeric, NaN or infinite entries become zero.

    Example:
        >>> coerce_rate("1 500,50")
        Decimal('1500.50')
        >>> coerce_rate("abc")
        Decimal('0')
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return ZERO
        return Decimal(repr(value)) if isinstance(value, float) else Decimal(value)

    text = _SPACES.sub("", str(value)).replace(",", ".")
    if not text:
        return ZERO
    try:
        number = Decimal(text)
    except InvalidOperation:
        return ZERO
    if not number.is_finite():
        return ZERO
    # "-0" collapses to plain zero
    return number if number != 0 else ZERO


def parse_date(text: Optional[str]) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` or ``dd/mm/yyyy``; return ``None`` otherwise."""
    if not text:
        return None
    text = text.strip()
    for fmt in ("%Y-%m-%d", "%d/%m/%Y"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def interval_from_widget(value: Union[None, date, Sequence[Optional[date]]]) -> DateInterval:
    """Build a :class:`DateInterval` from a ``st.date_input`` range value.

    While the user is picking a range the widget returns a one-element
    tuple; that becomes an interval without an end.
    """
    if value is None:
        return DateInterval()
    if isinstance(value, date):
        return DateInterval(value, value)
    values = list(value)
    start = values[0] if len(values) > 0 else None
    end = values[1] if len(values) > 1 else None
    return DateInterval(start, end)


def build_cost_configuration(
    use_custom_rates: bool,
    workday_rate: Any = None,
    weekend_rate: Any = None,
    custom_rates: Optional[Mapping[Union[Weekday, str], Any]] = None,
) -> CostConfiguration:
    if use_custom_rates:
        return CostConfiguration.custom(
            {day: coerce_rate(rate) for day, rate in (custom_rates or {}).items()}
        )
    return CostConfiguration.flat(coerce_rate(workday_rate), coerce_rate(weekend_rate))

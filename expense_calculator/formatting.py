"""Formatting utilities for amounts, dates and result labels."""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional, Union

Amount = Union[int, float, Decimal]

_CENT = Decimal("0.01")


def format_number(amount: Amount) -> str:
    """Format a number the French way, with at most two decimals.

    Thousands are separated by a space and decimals by a comma; trailing
    zero decimals are dropped.

    Example:
        >>> format_number(1234567.5)
        '1 234 567,5'
        >>> format_number(Decimal("1500.00"))
        '1 500'
    """
    value = amount if isinstance(amount, Decimal) else Decimal(repr(amount) if isinstance(amount, float) else amount)
    # quantize needs room for every integer digit plus two decimals
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        value = value.quantize(_CENT, rounding=ROUND_HALF_UP)
    formatted = f"{value:,.2f}"
    whole, _, decimals = formatted.partition(".")
    decimals = decimals.rstrip("0")
    whole = whole.replace(",", " ")
    if whole == "-0" and not decimals:
        whole = "0"
    return f"{whole},{decimals}" if decimals else whole


def format_amount(amount: Amount, currency: Optional[str] = None) -> str:
    """Format an amount and append the currency label, if any.

    The currency is a display label only; no conversion happens here.

    Example:
        >>> format_amount(550, "FCFA")
        '550 FCFA'
    """
    formatted = format_number(amount)
    return f"{formatted} {currency}" if currency else formatted


def format_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def format_period(day_count: int) -> str:
    suffix = "s" if day_count > 1 else ""
    return f"Période: {day_count} jour{suffix}"


def format_results_title(start: date, end: date) -> str:
    return f"Dépenses du {format_date(start)} au {format_date(end)}"

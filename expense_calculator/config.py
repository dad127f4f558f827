"""Configuration management for the expense calculator.

This module centralizes all configuration values, with environment
variable overrides for the defaults shown on the page.
"""

from __future__ import annotations

import os
from typing import List, Optional

APP_TITLE = "Calculateur de dépenses"

# Currency is a display label only
DEFAULT_CURRENCY = os.getenv("EXPCALC_CURRENCY", "FCFA").strip() or "FCFA"
CURRENCIES: List[str] = [
    code.strip()
    for code in os.getenv("EXPCALC_CURRENCIES", "FCFA,EUR,USD,XOF").split(",")
    if code.strip()
]
if DEFAULT_CURRENCY not in CURRENCIES:
    CURRENCIES.insert(0, DEFAULT_CURRENCY)

# Initial values of the flat-rate inputs
DEFAULT_WORKDAY_RATE = os.getenv("EXPCALC_DEFAULT_WORKDAY_RATE", "0")
DEFAULT_WEEKEND_RATE = os.getenv("EXPCALC_DEFAULT_WEEKEND_RATE", "0")

# Logging
LOG_LEVEL = os.getenv("EXPCALC_LOG_LEVEL", "INFO").upper()
LOG_FILE: Optional[str] = os.getenv("EXPCALC_LOG_FILE") or None


def get_currency_index(currency: Optional[str] = None) -> int:
    """Position of ``currency`` (default: the configured one) in the dropdown."""
    target = currency or DEFAULT_CURRENCY
    return CURRENCIES.index(target) if target in CURRENCIES else 0

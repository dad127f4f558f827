"""Streamlit app for the expense calculator.

Every rerun reads the current widget values, threads them explicitly into
:func:`aggregation.aggregate` and renders the result.  To run the page from
the command line::

    streamlit run expense_calculator/app.py

or use ``run_calculator.py`` at the project root.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

import streamlit as st
from loguru import logger

# Conditional imports to support execution both as part of a package and
# directly as a script via ``streamlit run``.
if __package__:
    from .aggregation import AggregationResult, CostConfiguration, DateInterval, aggregate
    from .calculator_ui import ExpenseCalculatorUI
    from .logger import ensure_logger
else:
    CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
    PARENT_DIR = os.path.dirname(CURRENT_DIR)
    if PARENT_DIR not in sys.path:
        sys.path.insert(0, PARENT_DIR)
    from expense_calculator.aggregation import (  # type: ignore
        AggregationResult,
        CostConfiguration,
        DateInterval,
        aggregate,
    )
    from expense_calculator.calculator_ui import ExpenseCalculatorUI  # type: ignore
    from expense_calculator.logger import ensure_logger  # type: ignore

RESULT_KEY = "expense_result"


def compute_result(
    interval: Optional[DateInterval],
    cost_config: Optional[CostConfiguration],
) -> Optional[AggregationResult]:
    """Run the aggregation for the current inputs.

    The latest successful result is kept in ``st.session_state``.  If the
    aggregation raises, the error is logged and the previous result is
    returned so the page keeps showing it.
    """
    try:
        result = aggregate(interval, cost_config)
    except Exception:
        logger.exception("Expense aggregation failed; keeping the previous result")
        return st.session_state.get(RESULT_KEY)
    st.session_state[RESULT_KEY] = result
    return result


def main() -> None:
    """Entry point for the Streamlit app."""
    ensure_logger()
    ui = ExpenseCalculatorUI(configure_page=True)
    ui.render_header()
    ui.apply_theme()

    currency = ui.render_currency_selector()

    col_dates, col_costs = st.columns(2, gap="large")
    with col_dates:
        interval = ui.render_date_selector()
    with col_costs:
        cost_config = ui.render_cost_editor(currency)
        ui.render_rate_warnings(cost_config)

    result = compute_result(interval, cost_config)
    st.divider()
    ui.render_results(result, currency)
    ui.render_footer()


if __name__ == "__main__":  # pragma: no cover
    main()

"""Top‑level package for the expense calculator.

The primary modules are:

* ``aggregation`` – the pure date-range-to-cost aggregation
* ``inputs`` – coercion of raw widget values into the data model
* ``tables`` / ``visualization`` – pandas tables and Plotly charts of a result
* ``app`` – the Streamlit page that ties everything together

To run the calculator from the command line you can execute:

```bash
streamlit run expense_calculator/app.py
```
"""

from .aggregation import (  # noqa: F401  # re-exported for convenience
    AggregationResult,
    CostConfiguration,
    DateInterval,
    DayBucket,
    WeekBucket,
    Weekday,
    aggregate,
)

__all__ = [
    "AggregationResult",
    "CostConfiguration",
    "DateInterval",
    "DayBucket",
    "WeekBucket",
    "Weekday",
    "aggregate",
]

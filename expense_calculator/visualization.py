"""Plotly visualisation helpers for the expense calculator.

Each function accepts an :class:`AggregationResult` and returns a
``plotly.graph_objects.Figure`` that Streamlit renders via
``st.plotly_chart``.  An empty result produces a placeholder figure.
"""

from __future__ import annotations

from typing import Optional

import plotly.express as px
import plotly.graph_objects as go

try:
    from .aggregation import AggregationResult
    from .tables import day_buckets_frame, week_buckets_frame
except ImportError:  # pragma: no cover - fallback for direct execution
    from aggregation import AggregationResult
    from tables import day_buckets_frame, week_buckets_frame

EMPTY_TITLE = "Aucune donnée à afficher"


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=EMPTY_TITLE)
    return fig


def _amount_axis_title(currency: Optional[str]) -> str:
    return f"Montant ({currency})" if currency else "Montant"


def create_weekday_cost_chart(
    result: AggregationResult,
    currency: Optional[str] = None,
    title: str | None = None,
) -> go.Figure:
    """Bar chart of the total cost per weekday.

    Parameters
    ----------
    result : AggregationResult
        Output of :func:`aggregation.aggregate`.
    currency : str, optional
        Display label appended to the axis title.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart, Monday to Sunday.
    """
    if result.is_empty:
        return _empty_figure()
    df = day_buckets_frame(result)
    fig = px.bar(df, x="Jour", y="Total", hover_data=["Nombre d'apparitions", "Montant unitaire"])
    fig.update_layout(
        title=title or "Dépenses par jour de la semaine",
        xaxis_title="Jour",
        yaxis_title=_amount_axis_title(currency),
    )
    return fig


def create_weekly_cost_chart(
    result: AggregationResult,
    currency: Optional[str] = None,
    title: str | None = None,
) -> go.Figure:
    """Bar chart of the total cost per week bucket."""
    if result.is_empty:
        return _empty_figure()
    df = week_buckets_frame(result)
    fig = px.bar(df, x="Semaine", y="Total", hover_data=["Du", "Au", "Jours", "Coût moyen"])
    fig.update_layout(
        title=title or "Dépenses par semaine",
        xaxis_title="Semaine",
        yaxis_title=_amount_axis_title(currency),
    )
    return fig

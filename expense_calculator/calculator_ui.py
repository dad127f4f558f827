"""Streamlit UI components for the expense calculator page.

The components only collect widget values and render results; all of the
computation lives in :mod:`aggregation`.  Widget values are kept in
``st.session_state`` under the keys declared below so that each rerun can
thread them explicitly into the aggregator.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, Optional

import streamlit as st
from streamlit.errors import StreamlitAPIException

try:
    from . import config
    from .aggregation import AggregationResult, CostConfiguration, DateInterval, Weekday
    from .formatting import format_amount, format_period, format_results_title
    from .inputs import build_cost_configuration, interval_from_widget
    from .tables import day_buckets_frame, week_buckets_frame
    from .visualization import create_weekday_cost_chart, create_weekly_cost_chart
except ImportError:  # pragma: no cover - fallback for direct execution
    import config
    from aggregation import AggregationResult, CostConfiguration, DateInterval, Weekday
    from formatting import format_amount, format_period, format_results_title
    from inputs import build_cost_configuration, interval_from_widget
    from tables import day_buckets_frame, week_buckets_frame
    from visualization import create_weekday_cost_chart, create_weekly_cost_chart

THEME_KEY = "theme"
THEMES = ["Clair", "Sombre", "Auto"]
CUSTOM_TOGGLE_KEY = "use_custom_rates"
WORKDAY_KEY = "workday_rate"
WEEKEND_KEY = "weekend_rate"
CURRENCY_KEY = "currency"
SAVED_RATES_KEY = "saved_rates"


def custom_rate_key(weekday: Weekday) -> str:
    return f"rate_{weekday.name.lower()}"


class ExpenseCalculatorUI:
    """UI components of the single-page calculator."""
    _PAGE_CONFIGURED = False

    def __init__(self, *, configure_page: bool = False):
        if configure_page:
            self.setup_page_config()

    def setup_page_config(self) -> None:
        if ExpenseCalculatorUI._PAGE_CONFIGURED:
            return
        try:
            st.set_page_config(
                page_title=config.APP_TITLE,
                page_icon="💰",
                layout="wide",
                initial_sidebar_state="collapsed",
            )
        except StreamlitAPIException:
            # Already configured upstream; avoid raising to keep reruns smooth.
            pass
        finally:
            ExpenseCalculatorUI._PAGE_CONFIGURED = True

    def render_header(self) -> None:
        col1, col2 = st.columns([3, 1])
        with col1:
            st.title(f"💰 {config.APP_TITLE}")
        with col2:
            self.render_theme_toggle()

    def render_theme_toggle(self) -> None:
        """Light / dark / system theme selector."""
        st.radio(
            "Thème",
            options=THEMES,
            index=THEMES.index("Auto"),
            key=THEME_KEY,
            horizontal=True,
            label_visibility="collapsed",
        )

    def apply_theme(self) -> None:
        """Apply the selected theme; "Auto" leaves Streamlit's own theme alone."""
        theme = st.session_state.get(THEME_KEY, "Auto")
        if theme == "Sombre":
            st.markdown("""
            <style>
            .stApp {
                background-color: #111827;
                color: #e5e7eb;
            }
            .stMetric {
                background-color: #1f2937;
                padding: 1rem;
                border-radius: 0.5rem;
            }
            </style>
            """, unsafe_allow_html=True)
        elif theme == "Clair":
            st.markdown("""
            <style>
            .stApp {
                background-color: #f9fafb;
                color: #1f2937;
            }
            .stMetric {
                background-color: #ffffff;
                padding: 1rem;
                border-radius: 0.5rem;
            }
            </style>
            """, unsafe_allow_html=True)

    def render_currency_selector(self) -> str:
        """Currency dropdown; the value is a display label only."""
        return st.sidebar.selectbox(
            "Devise",
            options=config.CURRENCIES,
            index=config.get_currency_index(),
            key=CURRENCY_KEY,
        )

    def render_date_selector(self, today: Optional[date] = None) -> DateInterval:
        st.subheader("📅 Sélection de dates")
        today = today or date.today()
        value = st.date_input(
            "Période",
            value=(today, today),
            format="DD/MM/YYYY",
        )
        return interval_from_widget(value)

    def render_cost_editor(self, currency: str) -> CostConfiguration:
        st.subheader("💵 Configuration des coûts")
        use_custom = st.toggle(
            "Utiliser des coûts personnalisés par jour",
            value=False,
            key=CUSTOM_TOGGLE_KEY,
        )

        if use_custom:
            custom: Dict[Weekday, str] = {}
            columns = st.columns(2)
            for position, weekday in enumerate(Weekday):
                with columns[position % 2]:
                    custom[weekday] = self._rate_input(
                        f"{weekday.label.capitalize()} ({currency})",
                        key=custom_rate_key(weekday),
                        default="0",
                    )
            return build_cost_configuration(True, custom_rates=custom)

        workday = self._rate_input(
            f"Coût pour les jours ouvrables (lundi à vendredi) ({currency})",
            key=WORKDAY_KEY,
            default=config.DEFAULT_WORKDAY_RATE,
        )
        weekend = self._rate_input(
            f"Coût pour le weekend (samedi et dimanche) ({currency})",
            key=WEEKEND_KEY,
            default=config.DEFAULT_WEEKEND_RATE,
        )
        return build_cost_configuration(False, workday_rate=workday, weekend_rate=weekend)

    def _rate_input(self, label: str, key: str, default: str) -> str:
        """Text input whose last entry outlives the widget.

        Streamlit drops the state of widgets that are not rendered in a run,
        so the entries of the hidden mode are kept under ``SAVED_RATES_KEY``
        and passed back as the initial value.
        """
        saved = st.session_state.setdefault(SAVED_RATES_KEY, {})
        value = st.text_input(label, value=saved.get(key, default), key=key)
        saved[key] = value
        return value

    def render_rate_warnings(self, cost_config: CostConfiguration) -> None:
        negative = cost_config.negative_rate_days()
        if negative:
            days = ", ".join(day.label for day in negative)
            st.warning(f"Coût négatif appliqué tel quel pour : {days}")

    def render_results(self, result: Optional[AggregationResult], currency: str) -> None:
        if result is None or result.is_empty:
            st.info("Sélectionnez une date de début et une date de fin pour lancer le calcul.")
            return

        col1, col2 = st.columns([3, 1])
        with col1:
            st.subheader(format_results_title(result.start, result.end))
        with col2:
            st.markdown(f"**{format_period(result.total_day_count)}**")

        st.dataframe(day_buckets_frame(result, currency), hide_index=True, use_container_width=True)
        st.metric("Total", format_amount(result.total_cost, currency))

        st.subheader("🗓️ Par semaine")
        st.dataframe(week_buckets_frame(result, currency), hide_index=True, use_container_width=True)

        tab_days, tab_weeks = st.tabs(["Par jour", "Par semaine"])
        with tab_days:
            st.plotly_chart(create_weekday_cost_chart(result, currency), use_container_width=True)
        with tab_weeks:
            st.plotly_chart(create_weekly_cost_chart(result, currency), use_container_width=True)

    def render_footer(self, today: Optional[date] = None) -> None:
        year = (today or date.today()).year
        st.caption(f"© {year} {config.APP_TITLE} - Tous droits réservés")

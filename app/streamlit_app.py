"""
SaaS Stack — Recurring Revenue Simulator Dashboard
==================================================

The beginner's guide to recurring revenue:
  1. Pick a preset or tune the sliders (customers, price, churn, horizon)
  2. Read the metric cards and the "stacking" charts
  3. Ask for an AI breakdown of the numbers (falls back to a fixed summary offline)

Run: streamlit run app/streamlit_app.py   (or the `saas-stack` console script)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import altair as alt
import pandas as pd
import streamlit as st

# ---------------------------------------------------------------------------
# Make project root importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import SimulationParameters
from core.schema import SNAPSHOT_LABELS

from inputs.presets import INPUT_RANGES, SCENARIO_PRESETS
from inputs.validators import ParameterValidationError, validate_parameters

from engine.runner import ProjectionResult, run_simulation

from analysis.cache import NarrativeCache
from analysis.narrative import NarrativeRequest, analyze_simulation

logger = logging.getLogger(__name__)

MRR_COLOR = "#4f46e5"
ONE_TIME_COLOR = "#cbd5e1"
CUSTOMERS_COLOR = "#10b981"


# ---------------------------------------------------------------------------
# Cached engine call
# ---------------------------------------------------------------------------
@st.cache_data(show_spinner=False)
def _run(params: SimulationParameters) -> ProjectionResult:
    return run_simulation(params)


# ---------------------------------------------------------------------------
# Chart helpers
# ---------------------------------------------------------------------------
def _money_axis(title: str) -> alt.Axis:
    return alt.Axis(title=title, format="$,.0f")


def _plot_mrr(df: pd.DataFrame, height=400):
    chart = (
        alt.Chart(df).mark_area(interpolate="step-after", opacity=0.15, color=MRR_COLOR,
                                line={"color": MRR_COLOR, "strokeWidth": 4})
        .encode(
            x=alt.X("month:Q", title="Months of Growth"),
            y=alt.Y("monthly_recurring_revenue:Q", axis=_money_axis("Monthly Cash Flow")),
            tooltip=["month", "monthly_recurring_revenue"],
        )
        .properties(title='The "Stacking" Effect (Monthly Income)', height=height)
    )
    st.altair_chart(chart, use_container_width=True)


def _plot_cumulative_comparison(df: pd.DataFrame, height=300):
    ys = ["cumulative_recurring_revenue", "cumulative_one_time_revenue"]
    long = df[["month"] + ys].rename(columns=SNAPSHOT_LABELS).melt(
        id_vars=["Month"], var_name="series", value_name="value"
    )
    chart = (
        alt.Chart(long).mark_line(strokeWidth=3)
        .encode(
            x=alt.X("Month:Q"),
            y=alt.Y("value:Q", axis=_money_axis("Cumulative Revenue")),
            color=alt.Color(
                "series:N", title="Series",
                scale=alt.Scale(
                    domain=[SNAPSHOT_LABELS[y] for y in ys],
                    range=[MRR_COLOR, ONE_TIME_COLOR],
                ),
            ),
            strokeDash=alt.StrokeDash("series:N", legend=None),
        )
        .properties(title="Total Cash Flow Comparison", height=height)
    )
    st.altair_chart(chart, use_container_width=True)


def _plot_customers(df: pd.DataFrame, height=300):
    chart = (
        alt.Chart(df).mark_area(interpolate="step-after", opacity=0.15, color=CUSTOMERS_COLOR,
                                line={"color": CUSTOMERS_COLOR, "strokeWidth": 4})
        .encode(
            x=alt.X("month:Q", title="Month"),
            y=alt.Y("total_customers:Q", title="Customers"),
            tooltip=["month", "total_customers", "churned_customers"],
        )
        .properties(title="Community Growth", height=height)
    )
    st.altair_chart(chart, use_container_width=True)


# ---------------------------------------------------------------------------
# Sidebar inputs
# ---------------------------------------------------------------------------
FLOAT_FIELDS = ("churn_rate_percent",)


def _widget_key(field: str) -> str:
    return f"param_{field}"


def _widget_value(field: str, value):
    return float(value) if field in FLOAT_FIELDS else int(value)


def _load_params(params: SimulationParameters, *, overwrite: bool) -> None:
    """Copy a parameter set into the slider widget state."""
    for field in INPUT_RANGES:
        key = _widget_key(field)
        if overwrite or key not in st.session_state:
            st.session_state[key] = _widget_value(field, getattr(params, field))


def _apply_preset(name: str) -> None:
    _load_params(SCENARIO_PRESETS[name]["params"], overwrite=True)


def _slider(field: str) -> None:
    rng = INPUT_RANGES[field]
    label = f"{rng.label} ({rng.unit})" if rng.unit else rng.label
    st.sidebar.slider(
        label,
        _widget_value(field, rng.min_value),
        _widget_value(field, rng.max_value),
        step=_widget_value(field, rng.step),
        key=_widget_key(field),
    )


def _sidebar_params() -> SimulationParameters:
    _load_params(SimulationParameters(), overwrite=False)

    st.sidebar.markdown("### Scenario")
    cols = st.sidebar.columns(len(SCENARIO_PRESETS))
    for col, (name, preset) in zip(cols, SCENARIO_PRESETS.items()):
        col.button(name, help=preset["description"], on_click=_apply_preset, args=(name,),
                   use_container_width=True)

    st.sidebar.markdown("### Simulate")
    for field in (
        "starting_customers",
        "monthly_new_customers",
        "price_per_customer",
        "churn_rate_percent",
        "months",
    ):
        _slider(field)
    st.sidebar.markdown("### Traditional Sale Comparison")
    _slider("one_time_sale_price")

    return SimulationParameters(
        **{field: st.session_state[_widget_key(field)] for field in INPUT_RANGES}
    )


# ---------------------------------------------------------------------------
# Output sections
# ---------------------------------------------------------------------------
def _display_metric_cards(result: ProjectionResult) -> None:
    table = result.metrics.to_dataframe()
    for col, (_, row) in zip(st.columns(len(table)), table.iterrows()):
        col.metric(row["Metric"], row["Value"])
        col.caption(row["Note"])


def _display_narrative(result: ProjectionResult) -> None:
    cache: NarrativeCache = st.session_state.setdefault("narrative_cache", NarrativeCache())
    params = result.parameters
    cache.invalidate_if_stale(params)

    if st.sidebar.button("AI Breakdown", type="primary", use_container_width=True):
        with st.spinner("Thinking..."):
            request = NarrativeRequest.from_results(params, result.metrics)
            cache.put(params, analyze_simulation(request))

    narrative = cache.get(params)
    if narrative is None:
        return

    st.subheader(narrative.headline)
    st.caption("Expert Insights")
    left, right = st.columns([2, 1])
    with left:
        for i, insight in enumerate(narrative.insights, start=1):
            st.markdown(f"**{i}.** {insight}")
    with right:
        st.markdown("**The Verdict**")
        st.info(f'"{narrative.verdict}"')


def _display_core_lesson() -> None:
    st.markdown("#### The Core Lesson")
    left, right = st.columns(2)
    with left:
        st.markdown("**One-Time Trap**")
        st.markdown(
            "Imagine selling a $5 coffee. Every day you start at $0. You have to "
            "convince someone new to buy just to eat. That's a **treadmill**."
        )
    with right:
        st.markdown("**Subscription Edge**")
        st.markdown(
            'Imagine a $5 "Daily Coffee Club." Every day you start with money '
            "**already in the bank**. Every new sale adds on top. That's an **escalator**."
        )


def render() -> None:
    st.set_page_config(page_title="SaaS Stack", page_icon="📈", layout="wide")
    st.title("SaaS Stack")
    st.caption("The Beginner's Guide to Recurring Revenue")

    params = _sidebar_params()

    validation = validate_parameters(params)
    for warning in validation.warnings:
        st.sidebar.warning(warning)

    try:
        result = _run(params)
    except ParameterValidationError as exc:
        logger.info("Rejected parameters %s", params)
        st.error(f"Invalid parameters:\n\n```\n{exc}\n```")
        return

    _display_metric_cards(result)
    _display_narrative(result)

    df = result.to_dataframe()
    _plot_mrr(df)

    left, right = st.columns(2)
    with left:
        _plot_cumulative_comparison(df)
    with right:
        _plot_customers(df)
        st.markdown(f"**Monthly Churn:** {params.churn_rate_percent:g}%")

    with st.expander("Full Projection Table", expanded=False):
        st.dataframe(df.rename(columns=SNAPSHOT_LABELS), use_container_width=True, hide_index=True)

    _display_core_lesson()


def main() -> None:
    """Console-script entry point: launch this file under `streamlit run`."""
    from streamlit.web import cli as stcli

    sys.argv = ["streamlit", "run", str(Path(__file__).resolve())]
    sys.exit(stcli.main())


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    render()

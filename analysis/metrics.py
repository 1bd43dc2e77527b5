"""
Summary metrics derived from a finished projection.

Everything here is read off the final snapshot plus the input parameters;
no extra state is carried.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import pandas as pd

from core.config import SimulationParameters
from core.utils import format_currency, round_currency

if TYPE_CHECKING:
    from engine.projection import MonthlySnapshot

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class DerivedMetrics:
    """Headline numbers shown on the metric cards."""
    next_month_revenue: int
    annualized_revenue: int
    total_customers_final: float
    total_revenue_earned: int
    customer_lifetime_value: float  # math.inf when churn is zero
    monthly_new_customers: float

    @property
    def lifetime_value_unbounded(self) -> bool:
        return math.isinf(self.customer_lifetime_value)

    def lifetime_value_display(self) -> str:
        if self.lifetime_value_unbounded:
            return "Infinite"
        return format_currency(round_currency(self.customer_lifetime_value))

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table."""
        rows = [
            {
                "Metric": "Next Month's Income",
                "Value": format_currency(self.next_month_revenue),
                "Note": f"Yearly: {format_currency(self.annualized_revenue)}",
            },
            {
                "Metric": "Total Customers",
                "Value": f"{self.total_customers_final:g}",
                "Note": f"Growth: +{self.monthly_new_customers:g}/mo",
            },
            {
                "Metric": "Value of 1 Customer",
                "Value": self.lifetime_value_display(),
                "Note": "Expected lifetime spend",
            },
            {
                "Metric": "Total Cash Earned",
                "Value": format_currency(self.total_revenue_earned),
                "Note": "Compounded total revenue",
            },
        ]
        return pd.DataFrame(rows)


def customer_lifetime_value(price_per_customer: float, churn_rate_percent: float) -> float:
    """LTV = price / churn fraction; unbounded when nobody churns."""
    if churn_rate_percent > 0:
        return price_per_customer / (churn_rate_percent / 100)
    return math.inf


def compute_derived_metrics(
    snapshots: Sequence["MonthlySnapshot"],
    params: SimulationParameters,
) -> DerivedMetrics:
    """
    Compute DerivedMetrics from engine output.

    Parameters
    ----------
    snapshots : sequence of MonthlySnapshot
        Output of engine.projection.project(); only the last entry is read.
    params : SimulationParameters
        The parameters that produced the snapshots.
    """
    if len(snapshots) == 0:
        raise ValueError("No snapshots to derive metrics from.")

    last = snapshots[-1]
    return DerivedMetrics(
        next_month_revenue=last.monthly_recurring_revenue,
        annualized_revenue=last.monthly_recurring_revenue * MONTHS_PER_YEAR,
        total_customers_final=last.total_customers,
        total_revenue_earned=last.cumulative_recurring_revenue,
        customer_lifetime_value=customer_lifetime_value(
            params.price_per_customer, params.churn_rate_percent
        ),
        monthly_new_customers=params.monthly_new_customers,
    )

"""
Monthly customer/revenue projection.

Discrete-time loop over months 0..N inclusive. Month 0 is the initial state:
revenue for month m is billed against the customer base carried INTO month m,
then churn and acquisition move the base for month m+1.

Rounding happens only on the emitted snapshot fields (customers to 1 decimal,
currency to whole units, both half-up). The carried customer base and revenue
accumulators stay at full precision.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import List, Sequence

import pandas as pd

from core.config import SimulationParameters
from core.schema import SNAPSHOT_COLUMNS
from core.utils import round_currency, round_customers
from inputs.validators import ensure_valid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthlySnapshot:
    """One emitted row of the projection."""
    month: int
    new_customers: float  # starting customers at month 0, monthly acquisition after
    total_customers: float
    churned_customers: float
    monthly_recurring_revenue: int
    cumulative_recurring_revenue: int
    cumulative_one_time_revenue: int


def project(params: SimulationParameters) -> List[MonthlySnapshot]:
    """
    Project customers and revenue for months 0..params.months.

    Raises ParameterValidationError for malformed parameters.
    """
    ensure_valid(params)

    churn_fraction = params.churn_rate_percent / 100
    current_customers = params.starting_customers
    cumulative_recurring = 0.0
    cumulative_one_time = 0.0

    snapshots: List[MonthlySnapshot] = []
    for month in range(params.months + 1):
        mrr = current_customers * params.price_per_customer

        new_customers = params.starting_customers if month == 0 else params.monthly_new_customers
        cumulative_one_time += new_customers * params.one_time_sale_price

        snapshots.append(
            MonthlySnapshot(
                month=month,
                new_customers=new_customers,
                total_customers=round_customers(current_customers),
                churned_customers=round_customers(current_customers * churn_fraction),
                monthly_recurring_revenue=round_currency(mrr),
                cumulative_recurring_revenue=round_currency(cumulative_recurring + mrr),
                cumulative_one_time_revenue=round_currency(cumulative_one_time),
            )
        )

        cumulative_recurring += mrr
        churn_count = current_customers * churn_fraction
        # growth always uses monthly_new_customers, including the 0 -> 1 step
        current_customers = max(0, current_customers - churn_count + params.monthly_new_customers)

    logger.debug(
        "Projected %d months: final base %.1f, cumulative MRR %.0f",
        params.months, current_customers, cumulative_recurring,
    )
    return snapshots


def snapshots_to_frame(snapshots: Sequence[MonthlySnapshot]) -> pd.DataFrame:
    """Snapshots as a DataFrame in canonical column order."""
    return pd.DataFrame([asdict(s) for s in snapshots], columns=list(SNAPSHOT_COLUMNS))

from __future__ import annotations

from typing import Dict, Tuple

# Column order for tabular snapshot output (one row per month).
SNAPSHOT_COLUMNS: Tuple[str, ...] = (
    "month",
    "new_customers",
    "total_customers",
    "churned_customers",
    "monthly_recurring_revenue",
    "cumulative_recurring_revenue",
    "cumulative_one_time_revenue",
)

# Display labels used by the dashboard tables and charts.
SNAPSHOT_LABELS: Dict[str, str] = {
    "month": "Month",
    "new_customers": "New Customers",
    "total_customers": "Total Customers",
    "churned_customers": "Churned Customers",
    "monthly_recurring_revenue": "MRR ($)",
    "cumulative_recurring_revenue": "Subscription Plan ($)",
    "cumulative_one_time_revenue": "Selling Once ($)",
}

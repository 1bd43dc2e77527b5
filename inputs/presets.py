"""
Named scenario presets and dashboard input ranges.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from core.config import SimulationParameters


SCENARIO_PRESETS: Dict[str, Dict[str, object]] = {
    "Default": {
        "params": SimulationParameters(),
        "description": "One early customer, two new sign-ups a month",
    },
    "Solo-preneur": {
        "params": SimulationParameters(
            starting_customers=1,
            monthly_new_customers=1,
            price_per_customer=10,
            churn_rate_percent=2,
            months=24,
            one_time_sale_price=50,
        ),
        "description": "A side project with a cheap plan and loyal users",
    },
    "Growth Startup": {
        "params": SimulationParameters(
            starting_customers=50,
            monthly_new_customers=15,
            price_per_customer=99,
            churn_rate_percent=5,
            months=24,
            one_time_sale_price=500,
        ),
        "description": "Funded team, steady acquisition, higher churn",
    },
}


@dataclass(frozen=True)
class InputRange:
    label: str
    min_value: float
    max_value: float
    step: float
    unit: str = ""


# Slider bounds for the dashboard; the engine itself accepts any valid parameters.
INPUT_RANGES: Dict[str, InputRange] = {
    "starting_customers": InputRange("Starting Customers", 0, 100, 1),
    "monthly_new_customers": InputRange("New Customers / Month", 0, 50, 1),
    "price_per_customer": InputRange("Monthly Subscription", 1, 200, 1, unit="$"),
    "churn_rate_percent": InputRange("Churn (Monthly %)", 0.0, 15.0, 0.1, unit="%"),
    "months": InputRange("Duration (Months)", 6, 48, 6),
    "one_time_sale_price": InputRange("One-Time Product Price", 10, 1000, 10, unit="$"),
}


def get_preset(name: str) -> SimulationParameters:
    """Look up a preset by name."""
    try:
        return SCENARIO_PRESETS[name]["params"]  # type: ignore[return-value]
    except KeyError:
        raise ValueError(
            f"Unknown preset {name!r}. Available: {sorted(SCENARIO_PRESETS)}"
        ) from None

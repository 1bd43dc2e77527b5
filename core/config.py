"""
Simulation and narrative configuration.
Both are frozen so a parameter set can be used as a cache key.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationParameters:
    starting_customers: float = 1
    monthly_new_customers: float = 2
    price_per_customer: float = 20  # monthly subscription price
    churn_rate_percent: float = 3  # percent of the base lost per month
    months: int = 24  # horizon, inclusive of month 0

    # comparison baseline: each new customer pays once
    one_time_sale_price: float = 150


@dataclass(frozen=True)
class NarrativeConfig:
    model: str = "gpt-4.1-mini"
    api_key_env: str = "OPENAI_API_KEY"
    timeout_seconds: float = 30.0
    max_insights: int = 5

    @classmethod
    def from_env(cls) -> "NarrativeConfig":
        """Build a config, letting SAAS_STACK_* environment variables override defaults."""
        defaults = cls()
        timeout = defaults.timeout_seconds
        raw_timeout = os.environ.get("SAAS_STACK_NARRATIVE_TIMEOUT")
        if raw_timeout is not None:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                logger.warning(
                    "Ignoring SAAS_STACK_NARRATIVE_TIMEOUT=%r; using %ss.", raw_timeout, timeout
                )
        return cls(
            model=os.environ.get("SAAS_STACK_NARRATIVE_MODEL", defaults.model),
            timeout_seconds=timeout,
        )

    @property
    def api_key(self) -> str | None:
        return os.environ.get(self.api_key_env) or None

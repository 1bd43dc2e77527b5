"""
Parameter validation before a simulation enters the engine.

Catches problems early:
- Missing or non-numeric values
- Negative customer counts
- Prices that are zero or negative
- Churn outside [0, 100]
- Horizons that are not whole, non-negative month counts
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from numbers import Integral, Real
from typing import List

from core.config import SimulationParameters

# Upper end of the dashboard churn slider; anything above is legal but unusual.
TYPICAL_MAX_CHURN_PERCENT = 15.0
LONG_HORIZON_MONTHS = 600


class ParameterValidationError(ValueError):
    """Raised when a SimulationParameters instance cannot be projected."""

    def __init__(self, result: "ValidationResult"):
        self.result = result
        super().__init__(result.summary())


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a parameter set."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def validate_parameters(params: SimulationParameters) -> ValidationResult:
    """
    Run all validation checks on a parameter set.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()

    # --- Types ---
    for f in fields(params):
        value = getattr(params, f.name)
        if not _is_number(value):
            result.errors.append(f"{f.name} must be a finite number, got {value!r}.")
    if result.errors:
        return result  # range checks need numbers

    # --- Customer counts ---
    for name in ("starting_customers", "monthly_new_customers"):
        if getattr(params, name) < 0:
            result.errors.append(f"{name} must be >= 0, got {getattr(params, name)}.")

    # --- Prices ---
    for name in ("price_per_customer", "one_time_sale_price"):
        if getattr(params, name) <= 0:
            result.errors.append(f"{name} must be > 0, got {getattr(params, name)}.")

    # --- Churn ---
    churn = params.churn_rate_percent
    if churn < 0 or churn > 100:
        result.errors.append(f"churn_rate_percent must be within [0, 100], got {churn}.")
    elif churn > TYPICAL_MAX_CHURN_PERCENT:
        result.warnings.append(
            f"churn_rate_percent of {churn}% is above the typical "
            f"{TYPICAL_MAX_CHURN_PERCENT:g}% range; the base will barely grow."
        )

    # --- Horizon ---
    months = params.months
    if not isinstance(months, Integral):
        result.errors.append(f"months must be a whole number, got {months!r}.")
    elif months < 0:
        result.errors.append(f"months must be >= 0, got {months}.")
    elif months > LONG_HORIZON_MONTHS:
        result.warnings.append(f"months={months} is a very long horizon for this model.")

    # --- Pricing sanity ---
    if result.is_valid and params.price_per_customer > params.one_time_sale_price:
        result.warnings.append(
            "price_per_customer exceeds one_time_sale_price; the one-time "
            "comparison will never catch up."
        )

    return result


def ensure_valid(params: SimulationParameters) -> ValidationResult:
    """Validate and raise ParameterValidationError if any blocking error was found."""
    result = validate_parameters(params)
    if not result.is_valid:
        raise ParameterValidationError(result)
    return result

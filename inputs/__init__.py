"""
Inputs — parameter validation and named scenario presets.
"""

from .validators import (
    ParameterValidationError,
    ValidationResult,
    ensure_valid,
    validate_parameters,
)
from .presets import INPUT_RANGES, SCENARIO_PRESETS, InputRange, get_preset

__all__ = [
    "ParameterValidationError",
    "ValidationResult",
    "ensure_valid",
    "validate_parameters",
    "INPUT_RANGES",
    "SCENARIO_PRESETS",
    "InputRange",
    "get_preset",
]

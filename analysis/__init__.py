"""
Analysis outputs: derived metrics, the AI narrative, and its cache.
"""

from .metrics import DerivedMetrics, compute_derived_metrics, customer_lifetime_value
from .narrative import (
    FALLBACK_NARRATIVE,
    Narrative,
    NarrativeRequest,
    analyze_simulation,
    build_prompt,
)
from .cache import NarrativeCache, parameters_key

__all__ = [
    "DerivedMetrics",
    "compute_derived_metrics",
    "customer_lifetime_value",
    "FALLBACK_NARRATIVE",
    "Narrative",
    "NarrativeRequest",
    "analyze_simulation",
    "build_prompt",
    "NarrativeCache",
    "parameters_key",
]

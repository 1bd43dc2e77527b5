"""
Projection engine — deterministic monthly customer/revenue math + runner.
"""

from .projection import MonthlySnapshot, project, snapshots_to_frame
from .runner import ProjectionResult, run_simulation

__all__ = [
    "MonthlySnapshot",
    "project",
    "snapshots_to_frame",
    "ProjectionResult",
    "run_simulation",
]

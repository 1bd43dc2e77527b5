"""
Simulation runner — validates parameters, runs the projection, and derives
the summary metrics in one call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import pandas as pd

from core.config import SimulationParameters
from analysis.metrics import DerivedMetrics, compute_derived_metrics

from .projection import MonthlySnapshot, project, snapshots_to_frame


@dataclass(frozen=True)
class ProjectionResult:
    parameters: SimulationParameters
    snapshots: List[MonthlySnapshot]
    metrics: DerivedMetrics

    def to_dataframe(self) -> pd.DataFrame:
        return snapshots_to_frame(self.snapshots)


def run_simulation(params: SimulationParameters) -> ProjectionResult:
    """
    Run a full simulation for one parameter set.

    Returns
    -------
    ProjectionResult with the month-by-month snapshots (months + 1 rows)
    and the DerivedMetrics computed from the final month.
    """
    snapshots = project(params)
    metrics = compute_derived_metrics(snapshots, params)
    return ProjectionResult(parameters=params, snapshots=snapshots, metrics=metrics)

"""
Core package — parameter/config definitions, output schema, and shared utilities.
No business logic lives here.
"""

from .schema import SNAPSHOT_COLUMNS, SNAPSHOT_LABELS
from .config import NarrativeConfig, SimulationParameters
from .utils import excel_round, round_customers, round_currency, format_currency

__all__ = [
    "SNAPSHOT_COLUMNS",
    "SNAPSHOT_LABELS",
    "NarrativeConfig",
    "SimulationParameters",
    "excel_round",
    "round_customers",
    "round_currency",
    "format_currency",
]

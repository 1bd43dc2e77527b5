from __future__ import annotations

import numpy as np


def excel_round(x, decimals: int = 2):
    """Excel ROUND: half away from zero (vectorized)."""
    m = 10 ** decimals
    x = np.asarray(x, dtype=float)
    return np.sign(x) * (np.floor(np.abs(x) * m + 0.5) / m)


def round_customers(x: float) -> float:
    """Customer counts are reported to one decimal place."""
    return float(excel_round(x, 1))


def round_currency(x: float) -> int:
    """Currency is reported in whole units."""
    return int(excel_round(x, 0))


def format_currency(value: float) -> str:
    return f"${value:,.0f}"

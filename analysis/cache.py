"""
Single-entry narrative cache.

A narrative is only valid for the exact parameter set that produced it, so the
cache holds one (key, narrative) pair and any parameter change misses.
"""

from __future__ import annotations

from dataclasses import astuple
from typing import Callable, Optional, Tuple

from core.config import SimulationParameters
from .narrative import FALLBACK_NARRATIVE, Narrative


def parameters_key(params: SimulationParameters) -> Tuple:
    return astuple(params)


class NarrativeCache:
    def __init__(self) -> None:
        self._key: Optional[Tuple] = None
        self._narrative: Optional[Narrative] = None

    def get(self, params: SimulationParameters) -> Optional[Narrative]:
        """Return the stored narrative if it belongs to params, else None."""
        if self._narrative is not None and self._key == parameters_key(params):
            return self._narrative
        return None

    def put(self, params: SimulationParameters, narrative: Narrative) -> None:
        self._key = parameters_key(params)
        self._narrative = narrative

    def invalidate_if_stale(self, params: SimulationParameters) -> bool:
        """Drop the entry when params no longer match. Returns True if dropped."""
        if self._narrative is not None and self._key != parameters_key(params):
            self.clear()
            return True
        return False

    def clear(self) -> None:
        self._key = None
        self._narrative = None

    def get_or_fetch(
        self, params: SimulationParameters, fetch: Callable[[], Narrative]
    ) -> Narrative:
        cached = self.get(params)
        if cached is not None:
            return cached
        narrative = fetch()
        # the fallback is not an answer; leave the slot open for a retry
        if narrative is not FALLBACK_NARRATIVE:
            self.put(params, narrative)
        return narrative

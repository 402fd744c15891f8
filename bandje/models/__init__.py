"""bandje domain models - re-exports the public model classes.

- lineup.py - the nested festival/year/artist source document and the
  flattened PerformanceRecord served by the API.
"""

from __future__ import annotations

from bandje.models.lineup import (
    Festival,
    FestivalYear,
    LineupDocument,
    PerformanceRecord,
)

__all__ = [
    "Festival",
    "FestivalYear",
    "LineupDocument",
    "PerformanceRecord",
]

"""Flatten a nested LineupDocument into an ordered tuple of PerformanceRecords.

Traversal is depth-first and keeps source order at every level: festivals,
then the years of each festival, then the artists of each year.  Nothing is
sorted, deduplicated or filtered, so the output length always equals the
total number of artist entries in the document.
"""

from __future__ import annotations

from bandje.models.lineup import LineupDocument, PerformanceRecord


def flatten(doc: LineupDocument) -> tuple[PerformanceRecord, ...]:
    """Return one record per (artist, festival, year) entry in *doc*."""
    return tuple(
        PerformanceRecord(name=artist, festival=festival.name, year=edition.year)
        for festival in doc.festivals
        for edition in festival.years
        for artist in edition.artists
    )


def expected_record_count(doc: LineupDocument) -> int:
    """Number of records :func:`flatten` produces for *doc*."""
    return sum(len(edition.artists) for festival in doc.festivals for edition in festival.years)

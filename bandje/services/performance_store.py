"""Process-wide, read-only store of flattened performance records.

The store is built exactly once, before the server accepts traffic, and is
never mutated afterwards.  Request handlers read it concurrently without
locks; the tuple it wraps cannot be appended to, trimmed or reordered.

``initialize_store`` is the once-guard: concurrent first callers serialize
on a lock and only the first one loads the dataset.  Everyone else gets the
already-published instance.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from pathlib import Path

import structlog

from bandje.models.lineup import PerformanceRecord
from bandje.services.flattener import flatten
from bandje.services.lineup_loader import load_lineup
from bandje.utils.errors import StoreNotInitializedError
from bandje.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


class PerformanceStore:
    """Immutable, ordered collection of :class:`PerformanceRecord`.

    Parameters
    ----------
    records:
        Records in flattening order.  They are copied into a tuple, so the
        caller's sequence can be discarded or changed freely afterwards.
    """

    __slots__ = ("_records",)

    def __init__(self, records: Iterable[PerformanceRecord] = ()) -> None:
        self._records: tuple[PerformanceRecord, ...] = tuple(records)

    @classmethod
    def from_file(cls, path: str | Path) -> PerformanceStore:
        """Load, flatten and wrap the dataset at *path*.

        Raises :class:`~bandje.utils.errors.StartupLoadError` subclasses
        unchanged; the caller decides whether that is fatal.
        """
        _logger.info("dataset_loading", path=str(path))
        doc = load_lineup(path)
        records = flatten(doc)
        _logger.info(
            "dataset_loaded",
            path=str(path),
            festivals=len(doc.festivals),
            performances=len(records),
        )
        return cls(records)

    # ------------------------------------------------------------------
    # Read-only access
    # ------------------------------------------------------------------

    def get_all(self) -> tuple[PerformanceRecord, ...]:
        """Return every record in flattening order."""
        return self._records

    def festivals(self) -> list[str]:
        """Distinct festival names, in first-seen order."""
        return list(dict.fromkeys(record.festival for record in self._records))

    @property
    def is_empty(self) -> bool:
        return not self._records

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> PerformanceRecord:
        return self._records[index]

    def __iter__(self) -> Iterator[PerformanceRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"PerformanceStore(performances={len(self._records)})"


# ---------------------------------------------------------------------------
# Process-wide instance
# ---------------------------------------------------------------------------

_store: PerformanceStore | None = None
_store_lock = threading.Lock()


def initialize_store(path: str | Path) -> PerformanceStore:
    """Build the process-wide store from *path*, at most once.

    Later calls (from any thread) return the already-published store and
    never re-read the file, even if *path* differs.
    """
    global _store

    store = _store
    if store is not None:
        _logger.debug("store_already_initialized", performances=len(store))
        return store

    with _store_lock:
        if _store is None:
            _store = PerformanceStore.from_file(path)
        else:
            _logger.debug("store_already_initialized", performances=len(_store))
        return _store


def get_store() -> PerformanceStore:
    """Return the process-wide store.

    Raises
    ------
    StoreNotInitializedError
        If :func:`initialize_store` has not completed yet.
    """
    store = _store
    if store is None:
        raise StoreNotInitializedError()
    return store


def reset_store() -> None:
    """Drop the process-wide store.  Test helper; never called while serving."""
    global _store

    with _store_lock:
        _store = None

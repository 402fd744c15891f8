"""Full-dataset export.

``export_all`` hands back the store's records in flattening order;
``export_json`` produces the downloadable JSON array.  The store never
changes, so the encoded bytes are built on first use and reused.
"""

from __future__ import annotations

import threading

import structlog
from pydantic import TypeAdapter

from bandje.models.lineup import PerformanceRecord
from bandje.services.performance_store import PerformanceStore
from bandje.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

EXPORT_FILENAME = "all_bands.json"

_RECORDS_ADAPTER = TypeAdapter(tuple[PerformanceRecord, ...])


class ExportService:
    """Read the whole :class:`PerformanceStore` for export."""

    def __init__(self, store: PerformanceStore) -> None:
        self._store = store
        self._encoded: bytes | None = None
        self._encode_lock = threading.Lock()

    def export_all(self) -> tuple[PerformanceRecord, ...]:
        """Every record exactly once, in store order."""
        return self._store.get_all()

    def export_json(self) -> bytes:
        """JSON array of every record, e.g. ``[{"name": ..., "festival": ..., "year": ...}]``."""
        encoded = self._encoded
        if encoded is None:
            with self._encode_lock:
                if self._encoded is None:
                    self._encoded = _RECORDS_ADAPTER.dump_json(self._store.get_all())
                    _logger.info(
                        "performances_exported",
                        performances=len(self._store),
                        size_bytes=len(self._encoded),
                    )
                encoded = self._encoded
        return encoded

    @property
    def filename(self) -> str:
        return EXPORT_FILENAME

"""Random sampling of performances without replacement.

The requested count goes through :func:`effective_count` first (default 1,
then clamped to the configured range), and the sample is drawn with
``random.Random.sample`` over store indices.  Every subset of the target
size is equally likely and no index is picked twice.
"""

from __future__ import annotations

import random

import structlog

from bandje.models.lineup import PerformanceRecord
from bandje.services.performance_store import PerformanceStore
from bandje.utils.errors import ConfigurationError
from bandje.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

DEFAULT_COUNT = 1
DEFAULT_MIN_COUNT = 1
DEFAULT_MAX_COUNT = 5

# SystemRandom draws from the OS entropy pool and keeps no Python-level
# state, so concurrent requests can share it.
_system_random = random.SystemRandom()


def effective_count(
    requested: int | None,
    *,
    minimum: int = DEFAULT_MIN_COUNT,
    maximum: int = DEFAULT_MAX_COUNT,
) -> int:
    """Apply the default-then-clamp policy to a requested sample size.

    >>> effective_count(None)
    1
    >>> effective_count(0)
    1
    >>> effective_count(10)
    5
    """
    count = DEFAULT_COUNT if requested is None else requested
    return max(minimum, min(maximum, count))


class SamplingService:
    """Draw random performances from a :class:`PerformanceStore`.

    Parameters
    ----------
    store:
        The read-only store to sample from.
    min_count, max_count:
        Closed range the requested count is clamped to.
    rng:
        Random source.  Defaults to a shared ``SystemRandom``; tests pass a
        seeded ``random.Random``.
    """

    def __init__(
        self,
        store: PerformanceStore,
        *,
        min_count: int = DEFAULT_MIN_COUNT,
        max_count: int = DEFAULT_MAX_COUNT,
        rng: random.Random | None = None,
    ) -> None:
        if min_count < 1:
            raise ConfigurationError(f"sample_min_count must be at least 1, got {min_count}")
        if max_count < min_count:
            raise ConfigurationError(
                f"sample_max_count ({max_count}) must not be below sample_min_count ({min_count})"
            )
        self._store = store
        self._min_count = min_count
        self._max_count = max_count
        self._rng = rng or _system_random

    @property
    def min_count(self) -> int:
        return self._min_count

    @property
    def max_count(self) -> int:
        return self._max_count

    def effective_count(self, requested: int | None) -> int:
        """Clamp *requested* to this service's configured range."""
        return effective_count(requested, minimum=self._min_count, maximum=self._max_count)

    def sample(self, requested_count: int | None = None) -> list[PerformanceRecord]:
        """Return up to ``effective_count(requested_count)`` distinct records.

        Returns an empty list when the store is empty; turning that into a
        not-found response is the caller's job.
        """
        count = self.effective_count(requested_count)
        size = len(self._store)
        indices = self._rng.sample(range(size), min(count, size))
        selection = [self._store[i] for i in indices]

        _logger.debug(
            "performances_sampled",
            requested=requested_count,
            effective=count,
            returned=len(selection),
        )
        return selection

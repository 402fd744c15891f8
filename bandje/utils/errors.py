"""Custom exception hierarchy for the bandje service.

All application exceptions inherit from :class:`BandjeError`, which carries
an optional ``source_name`` so error handlers can identify which resource
(e.g. the dataset file) caused the failure, and an HTTP ``status_code`` that
the error-handling middleware uses when the error escapes a request.

The hierarchy is organized by lifecycle phase:

    BandjeError  (base -- catch-all for any bandje error)
    +-- StartupLoadError          (dataset could not be loaded; fatal)
    |   +-- DatasetNotFoundError  (file missing or unreadable)
    |   +-- MalformedInputError   (wrong shape, wrong type, bad encoding)
    +-- StoreNotInitializedError  (store read before startup finished)
    +-- ConfigurationError        (invalid settings, e.g. sampling bounds)
    +-- EmptyResultError          (sampling requested on an empty store)

Startup errors propagate and abort the process; everything else is caught
at the request boundary and turned into a structured JSON response.
"""


class BandjeError(Exception):
    """Base exception for all bandje errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``source_name`` identifying the resource that triggered the error.
    The ``__str__`` method prefixes the source name in brackets for
    structured log output, e.g. ``[bands.json] Dataset file not found``.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        source_name: str | None = None,
    ) -> None:
        self._message = message
        self._source_name = source_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def source_name(self) -> str | None:
        return self._source_name

    def __str__(self) -> str:
        if self._source_name:
            return f"[{self._source_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Startup errors
# ---------------------------------------------------------------------------

class StartupLoadError(BandjeError):
    """Raised when the dataset cannot be loaded at startup.

    Never recovered from: the server must not start serving with a
    partially loaded or absent dataset.
    """

    def __init__(
        self,
        message: str = "Failed to load the performance dataset",
        source_name: str | None = None,
    ) -> None:
        super().__init__(message=message, source_name=source_name)


class DatasetNotFoundError(StartupLoadError):
    """Raised when the dataset file is absent or cannot be read."""

    def __init__(
        self,
        message: str = "Dataset file not found",
        source_name: str | None = None,
    ) -> None:
        super().__init__(message=message, source_name=source_name)


class MalformedInputError(StartupLoadError):
    """Raised when the dataset does not match the festivals/years/artists shape."""

    def __init__(
        self,
        message: str = "Dataset is malformed",
        source_name: str | None = None,
    ) -> None:
        super().__init__(message=message, source_name=source_name)


# ---------------------------------------------------------------------------
# Runtime errors
# ---------------------------------------------------------------------------

class StoreNotInitializedError(BandjeError):
    """Raised when the performance store is read before it was initialized."""

    status_code = 503

    def __init__(
        self,
        message: str = "Performance store is not initialized",
        source_name: str | None = None,
    ) -> None:
        super().__init__(message=message, source_name=source_name)


class ConfigurationError(BandjeError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        source_name: str | None = None,
    ) -> None:
        super().__init__(message=message, source_name=source_name)


class EmptyResultError(BandjeError):
    """Raised at the request boundary when a sample comes back empty."""

    status_code = 404

    def __init__(
        self,
        message: str = "No performances found.",
        source_name: str | None = None,
    ) -> None:
        super().__init__(message=message, source_name=source_name)

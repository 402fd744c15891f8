"""Dataset loading - read the lineup file and validate it into a LineupDocument.

Both failure modes are :class:`~bandje.utils.errors.StartupLoadError`
subclasses and are meant to abort startup:

- :class:`DatasetNotFoundError` when the file is missing or unreadable.
- :class:`MalformedInputError` when the bytes are not valid UTF-8 JSON in
  the festivals → years → artists shape.
"""

from __future__ import annotations

from pathlib import Path

import structlog
from pydantic import ValidationError

from bandje.models.lineup import LineupDocument
from bandje.utils.errors import DatasetNotFoundError, MalformedInputError
from bandje.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

# Cap on how many validation problems are echoed in the error message.
_MAX_REPORTED_ERRORS = 5


def _describe_validation_error(exc: ValidationError) -> str:
    """Summarise a pydantic ValidationError as ``loc: msg; loc: msg``."""
    parts: list[str] = []
    for err in exc.errors()[:_MAX_REPORTED_ERRORS]:
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    remaining = exc.error_count() - len(parts)
    if remaining > 0:
        parts.append(f"... and {remaining} more")
    return "; ".join(parts)


def parse_lineup(raw: bytes | str, source_name: str | None = None) -> LineupDocument:
    """Validate raw JSON into a :class:`LineupDocument`.

    Parameters
    ----------
    raw:
        The document bytes (or an already-decoded string).
    source_name:
        Label for error messages, usually the file name.

    Raises
    ------
    MalformedInputError
        If the bytes are not UTF-8, not JSON, or not the expected shape.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedInputError(
                message=f"Dataset is not valid UTF-8: {exc.reason} at byte {exc.start}",
                source_name=source_name,
            ) from exc

    try:
        return LineupDocument.model_validate_json(raw)
    except ValidationError as exc:
        raise MalformedInputError(
            message=f"Dataset does not match the expected shape: {_describe_validation_error(exc)}",
            source_name=source_name,
        ) from exc


def load_lineup(path: str | Path) -> LineupDocument:
    """Read and parse the dataset file at *path*.

    Raises
    ------
    DatasetNotFoundError
        If *path* does not exist, is not a regular file, or cannot be read.
    MalformedInputError
        If the contents fail validation (see :func:`parse_lineup`).
    """
    dataset_path = Path(path)
    source_name = dataset_path.name or str(dataset_path)

    if not dataset_path.is_file():
        raise DatasetNotFoundError(
            message=f"Dataset file not found: {dataset_path}",
            source_name=source_name,
        )

    try:
        raw = dataset_path.read_bytes()
    except OSError as exc:
        raise DatasetNotFoundError(
            message=f"Dataset file could not be read: {exc.strerror or exc}",
            source_name=source_name,
        ) from exc

    _logger.debug("dataset_read", path=str(dataset_path), size_bytes=len(raw))
    return parse_lineup(raw, source_name=source_name)

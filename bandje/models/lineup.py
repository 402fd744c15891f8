"""Festival lineup models - the nested source document and the flat record.

The dataset file is a nested document::

    {"festivals": [{"name": "Lowlands",
                    "years": [{"year": 2015, "artists": ["A", "B"]}]}]}

``LineupDocument`` / ``Festival`` / ``FestivalYear`` mirror that shape and
only live long enough to be flattened.  ``PerformanceRecord`` is the unit
everything downstream works with: one artist playing one festival in one
year.

All models are frozen.  The source models use strict scalar types so a
year written as ``"2015"`` or an artist written as ``42`` is rejected
instead of silently coerced.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

# Years are stored as unsigned 16-bit values in the dataset format.
_MAX_YEAR = 65535


class FestivalYear(BaseModel):
    """One edition of a festival and the artists who played it, in billing order."""

    model_config = ConfigDict(frozen=True)

    year: StrictInt = Field(ge=0, le=_MAX_YEAR)
    artists: tuple[StrictStr, ...]


class Festival(BaseModel):
    """A festival and its editions, in source order.

    ``name`` is a grouping key only; two festivals may share a name.
    """

    model_config = ConfigDict(frozen=True)

    name: StrictStr
    years: tuple[FestivalYear, ...]


class LineupDocument(BaseModel):
    """The parsed dataset file."""

    model_config = ConfigDict(frozen=True)

    festivals: tuple[Festival, ...]


class PerformanceRecord(BaseModel):
    """A single (artist, festival, year) occurrence.

    Serializes as ``{"name": ..., "festival": ..., "year": ...}`` - the wire
    format of both API endpoints.  Records carry no identity beyond their
    field values; identical records are legal and kept.
    """

    model_config = ConfigDict(frozen=True)

    name: str                           # Artist name as billed
    festival: str                       # Festival name
    year: int = Field(ge=0, le=_MAX_YEAR)

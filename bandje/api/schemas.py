"""Pydantic response schemas for the bandje API.

Performance arrays are served as plain lists of
:class:`~bandje.models.lineup.PerformanceRecord`; the models here cover the
remaining bodies (errors and health).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response body, e.g. ``{"error": "No performances found."}``."""

    error: str


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    performances: int = Field(ge=0, description="Number of records in the store")
    festivals: list[str] = Field(default_factory=list)

"""Shared pytest fixtures for the bandje test suite."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from bandje.models.lineup import PerformanceRecord
from bandje.services.performance_store import PerformanceStore, reset_store


# ---------------------------------------------------------------------------
# Process-wide store isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolated_store():
    """Make sure no test sees a store published by another test."""
    reset_store()
    yield
    reset_store()


# ---------------------------------------------------------------------------
# Source documents
# ---------------------------------------------------------------------------


@pytest.fixture
def lowlands_document() -> dict[str, Any]:
    """One festival, one year, two artists."""
    return {
        "festivals": [
            {"name": "Lowlands", "years": [{"year": 2015, "artists": ["A", "B"]}]},
        ]
    }


@pytest.fixture
def lineup_document() -> dict[str, Any]:
    """Two festivals with several editions, including an empty one and a repeat."""
    return {
        "festivals": [
            {
                "name": "Pinkpop",
                "years": [
                    {"year": 2014, "artists": ["Arctic Monkeys", "Metallica"]},
                    {"year": 2015, "artists": ["Foo Fighters", "Foo Fighters", "Editors"]},
                ],
            },
            {
                "name": "Lowlands",
                "years": [
                    {"year": 2015, "artists": ["alt-J"]},
                    {"year": 2016, "artists": []},
                    {"year": 2017, "artists": ["Editors", "Skepta"]},
                ],
            },
        ]
    }


@pytest.fixture
def empty_document() -> dict[str, Any]:
    return {"festivals": []}


def _write_dataset(path: Path, document: dict[str, Any]) -> Path:
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture
def make_dataset(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes a document to a temp JSON file."""

    def _make(document: dict[str, Any], name: str = "bands.json") -> Path:
        return _write_dataset(tmp_path / name, document)

    return _make


@pytest.fixture
def dataset_file(tmp_path: Path, lineup_document: dict[str, Any]) -> Path:
    """The multi-festival document written to a temp ``bands.json``."""
    return _write_dataset(tmp_path / "bands.json", lineup_document)


@pytest.fixture
def empty_dataset_file(tmp_path: Path, empty_document: dict[str, Any]) -> Path:
    return _write_dataset(tmp_path / "empty.json", empty_document)


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


@pytest.fixture
def two_record_store() -> PerformanceStore:
    return PerformanceStore(
        [
            PerformanceRecord(name="A", festival="Lowlands", year=2015),
            PerformanceRecord(name="B", festival="Lowlands", year=2015),
        ]
    )


@pytest.fixture
def ten_record_store() -> PerformanceStore:
    return PerformanceStore(
        PerformanceRecord(name=f"Artist {i}", festival="Pinkpop", year=2000 + i) for i in range(10)
    )


@pytest.fixture
def empty_store() -> PerformanceStore:
    return PerformanceStore()

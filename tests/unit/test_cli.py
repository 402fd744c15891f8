"""Unit tests for the dataset CLI - bandje.cli.dataset."""

from __future__ import annotations

import io
import json
from collections.abc import Iterator
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

import pytest
import structlog

from bandje.cli.dataset import _build_parser, _configure_quiet_logging, main
from bandje.services import performance_store
from bandje.utils.logging import configure_logging


# ======================================================================
# Shared helpers
# ======================================================================


def _run(argv: list[str]) -> tuple[int, str, str]:
    """Run the CLI and return (exit code, stdout, stderr)."""
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err), pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code, out.getvalue(), err.getvalue()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("DATASET_PATH", "SAMPLE_MIN_COUNT", "SAMPLE_MAX_COUNT"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Put the default stdout/INFO logging back after each CLI run."""
    yield
    structlog.reset_defaults()
    configure_logging()


# ======================================================================
# Parser
# ======================================================================


class TestParser:
    def test_sample_options(self) -> None:
        args = _build_parser().parse_args(["--dataset", "x.json", "sample", "-n", "3", "--seed", "9", "--json"])
        assert (args.dataset, args.command, args.count, args.seed, args.json) == ("x.json", "sample", 3, 9, True)

    def test_sample_defaults(self) -> None:
        args = _build_parser().parse_args(["sample"])
        assert args.count is None
        assert args.seed is None

    def test_non_integer_count_is_usage_error(self) -> None:
        with redirect_stderr(io.StringIO()), pytest.raises(SystemExit) as exc_info:
            _build_parser().parse_args(["sample", "--count", "many"])
        assert exc_info.value.code == 2

    def test_dataset_after_subcommand(self) -> None:
        args = _build_parser().parse_args(["export", "--dataset", "y.json"])
        assert args.dataset == "y.json"

    def test_dataset_before_subcommand_survives(self) -> None:
        args = _build_parser().parse_args(["--dataset", "x.json", "summary"])
        assert args.dataset == "x.json"


# ======================================================================
# Commands
# ======================================================================


class TestCommands:
    def test_no_command_prints_help(self) -> None:
        code, out, _ = _run([])
        assert code == 1
        assert "usage:" in out

    def test_summary(self, dataset_file: Path) -> None:
        code, out, _ = _run(["--dataset", str(dataset_file), "summary"])
        assert code == 0
        assert "Performances: 8" in out
        assert "Festivals:    2" in out
        assert "Pinkpop" in out and "2014-2015" in out
        assert "Lowlands" in out and "2015-2017" in out

    def test_sample_json_is_clamped(self, dataset_file: Path) -> None:
        code, out, _ = _run(["--dataset", str(dataset_file), "sample", "--count", "50", "--json"])
        assert code == 0
        records = json.loads(out)
        assert len(records) == 5
        assert all(set(r) == {"name", "festival", "year"} for r in records)

    def test_sample_seed_is_reproducible(self, dataset_file: Path) -> None:
        argv = ["--dataset", str(dataset_file), "sample", "-n", "3", "--seed", "11"]
        assert _run(argv)[1] == _run(argv)[1]

    def test_sample_text_output(self, dataset_file: Path) -> None:
        code, out, _ = _run(["--dataset", str(dataset_file), "sample"])
        assert code == 0
        assert len(out.strip().splitlines()) == 1

    def test_sample_empty_dataset(self, empty_dataset_file: Path) -> None:
        code, out, err = _run(["--dataset", str(empty_dataset_file), "sample"])
        assert code == 1
        assert out == ""
        assert "No performances found." in err

    def test_sample_uses_configured_bounds(self, dataset_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SAMPLE_MAX_COUNT", "7")
        code, out, _ = _run(["--dataset", str(dataset_file), "sample", "-n", "100", "--json"])
        assert code == 0
        assert len(json.loads(out)) == 7

    def test_sample_invalid_bounds(self, dataset_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SAMPLE_MIN_COUNT", "0")
        code, _, err = _run(["--dataset", str(dataset_file), "sample"])
        assert code == 1
        assert "sample_min_count" in err

    def test_export_to_stdout(self, dataset_file: Path) -> None:
        code, out, _ = _run(["--dataset", str(dataset_file), "export"])
        assert code == 0
        records = json.loads(out)
        assert len(records) == 8
        assert records[0] == {"name": "Arctic Monkeys", "festival": "Pinkpop", "year": 2014}

    def test_export_to_file(self, dataset_file: Path, tmp_path: Path) -> None:
        target = tmp_path / "out.json"
        code, out, err = _run(["--dataset", str(dataset_file), "export", "-o", str(target)])
        assert code == 0
        assert out == ""
        assert "Wrote 8 performances" in err
        assert len(json.loads(target.read_text(encoding="utf-8"))) == 8

    def test_dataset_from_environment(self, dataset_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATASET_PATH", str(dataset_file))
        code, out, _ = _run(["summary"])
        assert code == 0
        assert "Performances: 8" in out

    def test_missing_dataset(self, tmp_path: Path) -> None:
        code, _, err = _run(["--dataset", str(tmp_path / "missing.json"), "summary"])
        assert code == 1
        assert "Dataset file not found" in err

    def test_malformed_dataset(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text('{"festivals": [{"name": 1}]}', encoding="utf-8")
        code, _, err = _run(["--dataset", str(bad), "export"])
        assert code == 1
        assert "[bad.json]" in err

    def test_summary_with_dataset_after_subcommand(self, dataset_file: Path) -> None:
        code, out, _ = _run(["summary", "--dataset", str(dataset_file)])
        assert code == 0
        assert "Performances: 8" in out

    def test_sample_uses_yaml_bounds(self, dataset_file: Path, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("sampling:\n  min_count: 1\n  max_count: 2\n", encoding="utf-8")
        code, out, _ = _run(
            ["--config", str(config_file), "sample", "--dataset", str(dataset_file), "-n", "5", "--json"]
        )
        assert code == 0
        assert len(json.loads(out)) == 2

    def test_dataset_path_from_yaml(self, dataset_file: Path, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(f"dataset:\n  path: {json.dumps(str(dataset_file))}\n", encoding="utf-8")
        code, out, _ = _run(["--config", str(config_file), "summary"])
        assert code == 0
        assert "Performances: 8" in out


# ======================================================================
# Output streams
# ======================================================================


class TestOutputStreams:
    def test_export_stdout_is_clean_after_verbose_logging(self, dataset_file: Path) -> None:
        configure_logging(log_level="INFO")
        performance_store._logger.info("warmup")
        code, out, _ = _run(["--dataset", str(dataset_file), "export"])
        assert code == 0
        assert "dataset_loading" not in out
        assert len(json.loads(out)) == 8

    def test_sample_json_stdout_is_clean_after_store_load(self, dataset_file: Path) -> None:
        configure_logging(log_level="DEBUG")
        performance_store.initialize_store(dataset_file)
        code, out, _ = _run(["--dataset", str(dataset_file), "sample", "-n", "3", "--json"])
        assert code == 0
        assert len(json.loads(out)) == 3

    def test_quiet_logging_routes_warnings_to_stderr(self) -> None:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            _configure_quiet_logging()
            performance_store._logger.info("store_info")
            performance_store._logger.warning("store_warning")
        assert out.getvalue() == ""
        assert "store_warning" in err.getvalue()
        assert "store_info" not in err.getvalue()

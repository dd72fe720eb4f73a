"""Shared pytest fixtures for infixcalc tests."""

from pathlib import Path

import pytest
from typer.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty temporary directory (no infixcalc.toml)."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    return tmp_path


@pytest.fixture
def expressions_file(tmp_path: Path) -> Path:
    """An input file mixing valid and malformed expressions."""
    path = tmp_path / "input.txt"
    path.write_text("2+3*4\n0^0\n5>3\n(2+3\n", encoding="utf-8")
    return path

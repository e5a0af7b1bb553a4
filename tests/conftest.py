"""
Pytest configuration for the payload hydrator.

Provides fixtures for:
- The two-field person spec used throughout the scenarios
- Writing spec/payload JSON files for loader and CLI tests
- Settings isolation (cached settings are cleared around each test)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Iterator, List

import pytest
from typer.testing import CliRunner

from payload_hydrator.config import get_settings
from payload_hydrator.domain.models import FieldSpec
from payload_hydrator.field_table import FieldTable


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """
    Keep env-driven settings deterministic and keep INFO logs out of CLI output.
    """
    for name in ("APP_ENV", "LOG_JSON", "HYDRATOR_STRICT", "HYDRATOR_SHOW_RECORD"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def person_specs() -> List[FieldSpec]:
    return [
        FieldSpec(name="name", required=True),
        FieldSpec(name="age", required=True),
    ]


@pytest.fixture
def person_table(person_specs: List[FieldSpec]) -> FieldTable:
    return FieldTable(person_specs)


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """
    Return a helper that dumps `data` to `tmp_path / name` and returns the path.
    """

    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()

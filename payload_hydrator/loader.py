"""
JSON file loading for field specs and payloads used by the CLI.

A spec file holds a JSON list of field-spec objects, e.g.
``[{"name": "age", "required": false, "default": 0, "type": "int"}]``.
A payload file holds a single JSON object.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from payload_hydrator.errors import InputFileError, InvalidFieldSpec
from payload_hydrator.field_table import FieldTable


def _read_json(path: Path | str) -> Any:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as exc:
        raise InputFileError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    except json.JSONDecodeError as exc:
        raise InputFileError(f"{path} is not valid JSON: {exc}") from exc


def load_field_table(path: Path | str) -> FieldTable:
    data = _read_json(path)
    if isinstance(data, dict) and "fields" in data:
        data = data["fields"]
    if not isinstance(data, list):
        raise InvalidFieldSpec(f"{path} must contain a JSON list of field specs")
    return FieldTable(data)


def load_payload(path: Path | str) -> Dict[str, Any]:
    data = _read_json(path)
    if not isinstance(data, dict):
        raise InputFileError(f"{path} must contain a JSON object, got {type(data).__name__}")
    return data


__all__ = ["load_field_table", "load_payload"]

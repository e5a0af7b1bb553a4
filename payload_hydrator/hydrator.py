"""
Hydration of records from loosely-typed payloads.

`hydrate` never aborts on a field-level discrepancy: it assigns everything it
can in one pass and reports the rest on the returned `HydrationResult`.
Whether a report with issues is acceptable is the caller's decision.

Usage:
    from payload_hydrator.hydrator import hydrate

    result = hydrate(
        [{"name": "name"}, {"name": "age"}],
        {"name": "Sophie", "bio": "hi"},
    )
    result.record    # {"name": "Sophie"}
    result.missing   # ("age",)
    result.unknown   # ("bio",)
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel

from payload_hydrator.domain.models import FieldSource, HydrationResult, TypeMismatch
from payload_hydrator.field_table import FieldTable, SpecLike, as_field_table
from payload_hydrator.utils.logging import get_logger

log = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def hydrate(
    spec: Union[FieldTable, Iterable[SpecLike]],
    payload: Mapping[str, Any],
) -> HydrationResult:
    """
    Populate a record from `payload` according to `spec`.

    Parameters
    ----------
    spec : FieldTable | iterable of FieldSpec or mapping
        Field declarations. Non-table iterables are compiled first, so a
        duplicate name raises `DuplicateFieldSpec` before any assignment.
    payload : Mapping[str, Any]
        Decoded key/value data. Values are passed through as received.

    Returns
    -------
    HydrationResult
        The record plus `missing`, `unknown` and `mismatched` reports.
    """
    if not isinstance(payload, Mapping):
        raise TypeError(f"payload must be a mapping, got {type(payload).__name__}")

    table = as_field_table(spec)
    record: Dict[str, Any] = {}
    sources: Dict[str, FieldSource] = {}
    missing: List[str] = []
    mismatched: List[TypeMismatch] = []

    for field_spec in table:
        name = field_spec.name
        if name in payload:
            value = payload[name]
            if field_spec.accepts(value):
                table.setter(name)(record, value)
                sources[name] = FieldSource.PAYLOAD
            else:
                mismatched.append(
                    TypeMismatch(
                        field=name,
                        expected=field_spec.expected,
                        actual=type(value).__name__,
                    )
                )
                sources[name] = FieldSource.MISMATCHED
        elif field_spec.has_default:
            table.setter(name)(record, field_spec.resolve_default())
            sources[name] = FieldSource.DEFAULT
        elif field_spec.required:
            missing.append(name)
            sources[name] = FieldSource.MISSING
        else:
            sources[name] = FieldSource.OMITTED

    unknown = sorted(str(key) for key in payload if key not in table)

    result = HydrationResult(
        record=record,
        missing=tuple(missing),
        unknown=tuple(unknown),
        mismatched=tuple(mismatched),
        sources=sources,
    )
    log.debug(
        "Hydrated record",
        extra={
            "fields": len(table),
            "assigned": len(record),
            "missing": len(missing),
            "unknown": len(unknown),
            "mismatched": len(mismatched),
        },
    )
    return result


def hydrate_model(
    model_cls: Type[ModelT],
    payload: Mapping[str, Any],
    table: Optional[FieldTable] = None,
) -> Tuple[Optional[ModelT], HydrationResult]:
    """
    Hydrate `payload` against a pydantic model and build the instance when clean.

    The model is only constructed from the hydrated record, so unknown keys
    never reach it. When the result has any issue the instance is None and
    the caller decides what to do with the report. Constraints the model adds
    on top of the field table (validators, nested models) still raise
    pydantic's ValidationError.
    """
    result = hydrate(table if table is not None else FieldTable.from_model(model_cls), payload)
    if not result.ok:
        return None, result
    return model_cls.model_validate(dict(result.record)), result


__all__ = ["hydrate", "hydrate_model"]

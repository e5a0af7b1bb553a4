"""
Domain models for the payload hydrator.

`FieldSpec` describes one field of a record type, `HydrationResult` carries
the record built from a payload together with the report of everything that
could not be resolved. Both are immutable once constructed.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from payload_hydrator.errors import IncompleteHydration

TypeTuple = Tuple[type, ...]

# Names accepted for `FieldSpec.type` when specs come from JSON or env-driven config.
TYPE_NAMES: Dict[str, Optional[TypeTuple]] = {
    "str": (str,),
    "int": (int,),
    "float": (float,),
    "number": (int, float),
    "bool": (bool,),
    "list": (list,),
    "dict": (dict,),
    "any": None,
}


def _named_type(name: str) -> Optional[TypeTuple]:
    key = name.strip().lower()
    if key not in TYPE_NAMES:
        raise ValueError(
            f"Unknown type name '{name}'. Available: {', '.join(sorted(TYPE_NAMES))}"
        )
    return TYPE_NAMES[key]


class FieldSource(str, Enum):
    """Where a field's final state came from."""

    PAYLOAD = "payload"
    DEFAULT = "default"
    MISSING = "missing"
    MISMATCHED = "mismatched"
    OMITTED = "omitted"


class FieldSpec(BaseModel):
    """
    Declaration of a single record field.

    Use ``has_default`` rather than comparing ``default`` to ``None``: a spec
    built with ``default=None`` has a real default of ``None``.
    """

    name: str = Field(..., min_length=1, description="Payload key and record field name.")
    required: bool = Field(True, description="Report the field as missing when unresolved.")
    default: Any = Field(None, description="Value used when the payload lacks the key.")
    default_factory: Optional[Callable[[], Any]] = Field(
        None, description="Callable producing a fresh default per hydration."
    )
    type: Optional[TypeTuple] = Field(
        None, description="Accepted value types; no coercion is performed."
    )
    nullable: Optional[bool] = Field(
        None, description="Whether null passes the type check; unset means not required."
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("type", mode="before")
    @classmethod
    def _resolve_type(cls, value: Any) -> Any:
        if value is None or value is Any or value is object:
            return None
        if isinstance(value, str):
            return _named_type(value)
        if isinstance(value, type):
            return (value,)
        if isinstance(value, (list, tuple)):
            resolved: List[type] = []
            for item in value:
                if item is Any or item is object:
                    return None
                if isinstance(item, str):
                    named = _named_type(item)
                    if named is None:
                        return None
                    resolved.extend(t for t in named if t not in resolved)
                elif item not in resolved:
                    resolved.append(item)
            return tuple(resolved)
        return value

    @model_validator(mode="after")
    def _single_default_source(self) -> "FieldSpec":
        if self.default_factory is not None and "default" in self.model_fields_set:
            raise ValueError(f"Field '{self.name}' sets both default and default_factory")
        return self

    @field_serializer("type")
    def _serialize_type(self, value: Optional[TypeTuple]) -> Optional[List[str]]:
        if value is None:
            return None
        return [t.__name__ for t in value]

    @property
    def has_default(self) -> bool:
        return self.default_factory is not None or "default" in self.model_fields_set

    def resolve_default(self) -> Any:
        """Return a default value owned by the caller (fresh copy or factory output)."""
        if self.default_factory is not None:
            return self.default_factory()
        return copy.deepcopy(self.default)

    def accepts(self, value: Any) -> bool:
        """Check a payload value against the declared type without coercing it."""
        if self.type is None:
            return True
        if value is None:
            return self.is_nullable or type(None) in self.type
        # bool is an int subclass; only an explicit bool/object declaration accepts it.
        if isinstance(value, bool):
            return bool in self.type or object in self.type
        return isinstance(value, self.type)

    @property
    def is_nullable(self) -> bool:
        if self.nullable is not None:
            return self.nullable
        return not self.required

    @property
    def expected(self) -> str:
        if self.type is None:
            return "any"
        return " | ".join(t.__name__ for t in self.type)


class TypeMismatch(BaseModel):
    """A payload value whose type does not match its field declaration."""

    field: str
    expected: str
    actual: str

    model_config = ConfigDict(frozen=True)


@dataclass(frozen=True)
class HydrationResult:
    """
    Outcome of a single hydration.

    Attributes
    ----------
    record : Mapping[str, Any]
        Read-only view of the assigned field values, in declaration order.
    missing : tuple[str, ...]
        Required fields with no payload entry and no default.
    unknown : tuple[str, ...]
        Payload keys that matched no field (sorted).
    mismatched : tuple[TypeMismatch, ...]
        Fields whose payload value was rejected by the type check.
    sources : Mapping[str, FieldSource]
        Final state of every declared field.
    """

    record: Mapping[str, Any]
    missing: Tuple[str, ...] = ()
    unknown: Tuple[str, ...] = ()
    mismatched: Tuple[TypeMismatch, ...] = ()
    sources: Mapping[str, FieldSource] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "record", MappingProxyType(dict(self.record)))
        object.__setattr__(self, "sources", MappingProxyType(dict(self.sources)))
        object.__setattr__(self, "missing", tuple(self.missing))
        object.__setattr__(self, "unknown", tuple(self.unknown))
        object.__setattr__(self, "mismatched", tuple(self.mismatched))

    @property
    def ok(self) -> bool:
        return self.issue_count == 0

    @property
    def issue_count(self) -> int:
        return len(self.missing) + len(self.unknown) + len(self.mismatched)

    def raise_for_issues(self) -> "HydrationResult":
        """Raise `IncompleteHydration` if anything was unresolved, else return self."""
        if not self.ok:
            raise IncompleteHydration(self)
        return self

    def as_dict(self) -> Dict[str, Any]:
        return {
            "record": dict(self.record),
            "missing": list(self.missing),
            "unknown": list(self.unknown),
            "mismatched": [m.model_dump() for m in self.mismatched],
            "sources": {name: source.value for name, source in self.sources.items()},
        }


__all__ = [
    "TYPE_NAMES",
    "FieldSource",
    "FieldSpec",
    "TypeMismatch",
    "HydrationResult",
]

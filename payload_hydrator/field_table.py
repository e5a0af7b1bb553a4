"""
Field tables: the compiled, validated form of a record type's field specs.

A table is built once per record type and reused for every payload. It maps
each field name to a setter, so hydration is a dictionary lookup per payload
key instead of dynamic attribute dispatch.

Usage:
    from payload_hydrator.field_table import FieldTable

    table = FieldTable([{"name": "name"}, {"name": "age", "required": False, "default": 0}])
    "age" in table  # True
"""

from __future__ import annotations

from collections import Counter
from types import MappingProxyType
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    Union,
    get_args,
)

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticUndefined

from payload_hydrator.domain.models import FieldSpec
from payload_hydrator.errors import DuplicateFieldSpec, InvalidFieldSpec
from payload_hydrator.utils.logging import get_logger

log = get_logger(__name__)

Setter = Callable[[Dict[str, Any], Any], None]
SpecLike = Union[FieldSpec, Mapping[str, Any]]


def _make_setter(name: str) -> Setter:
    def _set(target: Dict[str, Any], value: Any) -> None:
        target[name] = value

    _set.__name__ = f"set_{name}"
    return _set


def _coerce_spec(entry: SpecLike, position: int) -> FieldSpec:
    if isinstance(entry, FieldSpec):
        return entry
    if not isinstance(entry, Mapping):
        raise InvalidFieldSpec(
            f"Field spec #{position} must be a FieldSpec or mapping, got {type(entry).__name__}"
        )
    try:
        return FieldSpec.model_validate(dict(entry))
    except ValidationError as exc:
        raise InvalidFieldSpec(f"Field spec #{position} is invalid: {exc}") from exc


# Classes a decoded JSON payload can carry as-is. Anything else (enums, dates,
# UUIDs, nested models, generics) arrives as a JSON primitive and is left for
# the model to validate.
_JSON_NATIVE: Dict[type, Tuple[type, ...]] = {
    str: (str,),
    int: (int,),
    float: (int, float),
    bool: (bool,),
    list: (list,),
    dict: (dict,),
}


def _admits_none(annotation: Any) -> bool:
    if annotation is None or annotation is type(None) or annotation is Any:
        return True
    return any(_admits_none(arg) for arg in get_args(annotation))


def _checkable_type(annotation: Any) -> Optional[Tuple[type, ...]]:
    args = get_args(annotation)
    if args:
        # Optional[X] is checked as X; other unions and generics are not.
        non_null = [arg for arg in args if arg is not type(None)]
        if len(non_null) != 1 or len(non_null) == len(args):
            return None
        annotation = non_null[0]
    if not isinstance(annotation, type) or get_args(annotation):
        return None
    return _JSON_NATIVE.get(annotation)


class FieldTable:
    """
    Ordered, immutable set of field specs with one setter per field.

    Parameters
    ----------
    specs : iterable of FieldSpec or mapping
        Field declarations in declaration order. Names must be unique.

    Raises
    ------
    DuplicateFieldSpec
        If any name appears more than once.
    InvalidFieldSpec
        If an entry cannot be validated into a FieldSpec.
    """

    __slots__ = ("_specs", "_setters")

    def __init__(self, specs: Iterable[SpecLike]) -> None:
        compiled: List[FieldSpec] = []
        for position, entry in enumerate(specs):
            try:
                compiled.append(_coerce_spec(entry, position))
            except InvalidFieldSpec:
                log.error("Rejected field spec", extra={"position": position})
                raise

        counts = Counter(spec.name for spec in compiled)
        duplicates = [name for name, count in counts.items() if count > 1]
        if duplicates:
            log.error("Duplicate field names in spec", extra={"duplicates": sorted(duplicates)})
            raise DuplicateFieldSpec(duplicates)

        self._specs: Tuple[FieldSpec, ...] = tuple(compiled)
        self._setters: Mapping[str, Setter] = MappingProxyType(
            {spec.name: _make_setter(spec.name) for spec in compiled}
        )

    @classmethod
    def from_model(cls, model_cls: Type[BaseModel]) -> "FieldTable":
        """
        Derive a table from a pydantic model's declared fields.

        Required-ness and defaults follow the model. A field annotated with a
        JSON-native class (str, int, float, bool, list, dict) gets that class
        as its accepted type and is nullable only if the annotation admits
        None. Every other annotation is left unchecked here and validated by
        the model.
        """
        specs: List[FieldSpec] = []
        for name, info in model_cls.model_fields.items():
            kwargs: Dict[str, Any] = {"name": info.alias or name, "required": info.is_required()}
            if info.default_factory is not None:
                kwargs["default_factory"] = info.default_factory
            elif info.default is not PydanticUndefined:
                kwargs["default"] = info.default
            accepted = _checkable_type(info.annotation)
            if accepted is not None:
                kwargs["type"] = accepted
                kwargs["nullable"] = _admits_none(info.annotation)
            specs.append(FieldSpec(**kwargs))
        return cls(specs)

    @property
    def specs(self) -> Tuple[FieldSpec, ...]:
        return self._specs

    @property
    def names(self) -> List[str]:
        return [spec.name for spec in self._specs]

    def setter(self, name: str) -> Setter:
        return self._setters[name]

    def __contains__(self, name: object) -> bool:
        return name in self._setters

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __repr__(self) -> str:
        return f"FieldTable({self.names!r})"


def as_field_table(spec: Union[FieldTable, Iterable[SpecLike]]) -> FieldTable:
    """Return `spec` unchanged if it is already a table, else compile it."""
    if isinstance(spec, FieldTable):
        return spec
    return FieldTable(spec)


__all__ = ["FieldTable", "Setter", "SpecLike", "as_field_table"]

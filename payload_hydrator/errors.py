"""
Exception hierarchy for the payload hydrator.

Only configuration problems (a malformed or ambiguous field spec) are raised
by the library itself. Discrepancies in payload data are reported on the
`HydrationResult` instead; `IncompleteHydration` exists for callers that opt
into a strict policy via `HydrationResult.raise_for_issues()`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List

if TYPE_CHECKING:  # pragma: no cover - import cycle guard for type hints only
    from payload_hydrator.domain.models import HydrationResult


class HydrationError(Exception):
    """Base class for all hydrator errors."""


class InvalidFieldSpec(HydrationError, ValueError):
    """A field spec entry could not be validated."""


class DuplicateFieldSpec(HydrationError, ValueError):
    """Two or more field specs share a name."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names: List[str] = sorted(set(names))
        super().__init__(f"Duplicate field names in spec: {', '.join(self.names)}")


class InputFileError(HydrationError):
    """A spec or payload file is unreadable or has the wrong JSON shape."""


class IncompleteHydration(HydrationError):
    """Raised on request when a hydration result carries unresolved fields."""

    def __init__(self, result: "HydrationResult") -> None:
        self.result = result
        parts = []
        if result.missing:
            parts.append(f"missing={list(result.missing)}")
        if result.unknown:
            parts.append(f"unknown={list(result.unknown)}")
        if result.mismatched:
            parts.append(f"mismatched={[m.field for m in result.mismatched]}")
        super().__init__("Hydration incomplete: " + ", ".join(parts))


__all__ = [
    "HydrationError",
    "InvalidFieldSpec",
    "DuplicateFieldSpec",
    "InputFileError",
    "IncompleteHydration",
]

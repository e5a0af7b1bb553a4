"""
Domain package for the payload hydrator.

Exports the field declaration and result models shared by the field table,
the hydrator and the reporter. Keep this package focused on data definitions.
"""

from payload_hydrator.domain.models import (
    FieldSource,
    FieldSpec,
    HydrationResult,
    TypeMismatch,
)

__all__ = [
    "FieldSource",
    "FieldSpec",
    "HydrationResult",
    "TypeMismatch",
]

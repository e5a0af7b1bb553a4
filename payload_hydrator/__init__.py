"""
Payload Hydrator - schema-tolerant population of records from untyped payloads.

Given a record type's field specs and a decoded key/value payload (an API
response, a JSON document), the hydrator assigns every matching entry in a
single pass and reports, instead of raising:

- required fields with no value ("missing")
- payload keys that match no field ("unknown")
- values whose type does not match a typed field ("mismatched")

Whether a result with issues is usable is left to the caller; see
`HydrationResult.raise_for_issues()` for a strict policy.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from payload_hydrator.config import Settings, get_settings
from payload_hydrator.domain.models import FieldSource, FieldSpec, HydrationResult, TypeMismatch
from payload_hydrator.errors import (
    DuplicateFieldSpec,
    HydrationError,
    IncompleteHydration,
    InputFileError,
    InvalidFieldSpec,
)
from payload_hydrator.field_table import FieldTable
from payload_hydrator.hydrator import hydrate, hydrate_model
from payload_hydrator.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Hydration
    "FieldSpec",
    "FieldTable",
    "FieldSource",
    "HydrationResult",
    "TypeMismatch",
    "hydrate",
    "hydrate_model",
    # Errors
    "HydrationError",
    "InvalidFieldSpec",
    "DuplicateFieldSpec",
    "InputFileError",
    "IncompleteHydration",
    # Logging
    "configure_logging",
    "get_logger",
]

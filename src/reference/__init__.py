"""Code reference models and resolution."""

from reference.models import (
    LEGACY_FILENAME,
    REFERENCE_TYPES,
    CursorRange,
    Reference,
    ReferenceRange,
    ReferenceType,
    SelectionRange,
)
from reference.range import Position, Selection, from_selection
from reference.types import Chooser, resolve_reference_type

__all__ = [
    "LEGACY_FILENAME",
    "REFERENCE_TYPES",
    "Chooser",
    "CursorRange",
    "Position",
    "Reference",
    "ReferenceRange",
    "ReferenceType",
    "Selection",
    "SelectionRange",
    "from_selection",
    "resolve_reference_type",
]

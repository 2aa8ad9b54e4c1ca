"""Reference type selection.

A configured reference type is used directly when valid. Anything else
(typically ``"Ask"``) defers to an interactive chooser; a cancelled choice
means no reference is produced.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from reference.models import LEGACY_FILENAME, REFERENCE_TYPES, ReferenceType

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

REFERENCE_TYPE_PLACEHOLDER = "Select reference type"

# A chooser answer is re-validated; a second invalid answer cancels.
MAX_CHOICE_ATTEMPTS = 2


class Chooser(Protocol):
    def __call__(self, choices: Sequence[str], placeholder: str) -> str | None:
        """Return the picked choice, or None when the user cancels."""
        ...


def upgrade_legacy_reference_type(value: str | None) -> str | None:
    """Map the pre-split ``"Filename"`` value onto ``"Filename (with line)"``."""
    if value == LEGACY_FILENAME:
        return ReferenceType.FILENAME_WITH_LINE.value
    return value


def is_reference_type(value: str | None) -> bool:
    return bool(value) and value in REFERENCE_TYPES


def resolve_reference_type(
    config_value: str | None,
    chooser: Chooser | None = None,
) -> ReferenceType | None:
    """Resolve a configured reference type, prompting when it is not valid.

    Args:
        config_value: Raw configured value, e.g. ``"Symbol"`` or ``"Ask"``.
        chooser: Interactive picker; without one an invalid value cancels.

    Returns:
        The reference type, or None when the user cancelled.
    """
    value = upgrade_legacy_reference_type(config_value)
    if is_reference_type(value):
        return ReferenceType(value)

    if chooser is None:
        return None

    for _ in range(MAX_CHOICE_ATTEMPTS):
        choice = chooser(REFERENCE_TYPES, REFERENCE_TYPE_PLACEHOLDER)
        if choice is None:
            return None

        value = upgrade_legacy_reference_type(choice)
        if is_reference_type(value):
            return ReferenceType(value)

        logger.warning("Ignoring unknown reference type choice: %r", choice)

    return None


__all__ = [
    "MAX_CHOICE_ATTEMPTS",
    "REFERENCE_TYPE_PLACEHOLDER",
    "Chooser",
    "is_reference_type",
    "resolve_reference_type",
    "upgrade_legacy_reference_type",
]

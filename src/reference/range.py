"""Editor selection types and conversion to reference ranges."""

from __future__ import annotations

from dataclasses import dataclass, field

from reference.models import CursorRange, ReferenceRange, SelectionRange


@dataclass(frozen=True, order=True)
class Position:
    """A 0-based line/character position in a document."""

    line: int
    character: int = 0


@dataclass(frozen=True)
class Selection:
    """An editor selection; ``active`` is where the cursor sits."""

    start: Position
    end: Position
    active: Position
    is_empty: bool = field(default=False)

    @classmethod
    def cursor(cls, position: Position) -> Selection:
        return cls(start=position, end=position, active=position, is_empty=True)


def from_selection(selection: Selection) -> ReferenceRange:
    """Convert a 0-based editor selection into a 1-based reference range.

    A selection reported as non-empty stays a selection even when it spans a
    single line.
    """
    if selection.is_empty:
        return CursorRange(line=selection.active.line + 1)

    return SelectionRange(
        start_line=selection.start.line + 1,
        end_line=selection.end.line + 1,
    )


__all__ = ["Position", "Selection", "from_selection"]

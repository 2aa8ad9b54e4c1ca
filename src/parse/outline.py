"""Document outline models and symbol lookup by position."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from reference.range import Position

OutlineKind = Literal["class", "function", "method"]


@dataclass(frozen=True)
class Range:
    """A 0-based, end-inclusive span between two positions."""

    start: Position
    end: Position

    def contains(self, position: Position) -> bool:
        return self.start <= position <= self.end


@dataclass
class DocumentSymbol:
    name: str
    kind: OutlineKind
    range: Range
    children: list[DocumentSymbol] = field(default_factory=list)


class OutlineProvider(Protocol):
    def __call__(self, file_path: Path) -> list[DocumentSymbol]:
        """Return the top-level symbols of ``file_path`` in source order."""
        ...


def find_symbol_chain(
    symbols: Sequence[DocumentSymbol] | None, position: Position
) -> list[DocumentSymbol]:
    """Return the symbols enclosing ``position``, outermost first.

    The first symbol whose range contains the position wins at each level.
    """
    chain: list[DocumentSymbol] = []
    candidates = symbols or []
    while True:
        match = next((s for s in candidates if s.range.contains(position)), None)
        if match is None:
            return chain
        chain.append(match)
        candidates = match.children


def symbol_path_at(
    symbols: Sequence[DocumentSymbol] | None, position: Position
) -> str | None:
    """Return the dotted path of the innermost symbol at ``position``.

    Examples:
        ``Greeter.greet`` for a position inside method ``greet`` of class
        ``Greeter``; None when no symbol contains the position.
    """
    chain = find_symbol_chain(symbols, position)
    if not chain:
        return None
    return ".".join(symbol.name for symbol in chain)


__all__ = [
    "DocumentSymbol",
    "OutlineKind",
    "OutlineProvider",
    "Range",
    "find_symbol_chain",
    "symbol_path_at",
]

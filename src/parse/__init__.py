"""Document outlines for coderef."""

from parse.outline import (
    DocumentSymbol,
    OutlineProvider,
    Range,
    find_symbol_chain,
    symbol_path_at,
)
from parse.treesitter_outline import outline_source, python_outline

__all__ = [
    "DocumentSymbol",
    "OutlineProvider",
    "Range",
    "find_symbol_chain",
    "outline_source",
    "python_outline",
    "symbol_path_at",
]

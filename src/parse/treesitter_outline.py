"""Tree-sitter based document outline for Python sources."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tree_sitter import Language, Node, Parser
from tree_sitter_python import language as get_python_language

from parse.outline import DocumentSymbol, OutlineKind, Range
from reference.range import Position

if TYPE_CHECKING:
    from pathlib import Path

PYTHON_SUFFIXES = frozenset({".py", ".pyi"})

_PARSER: Parser | None = None


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with Python language."""
    global _PARSER
    if _PARSER is None:
        lang = Language(get_python_language())
        _PARSER = Parser(lang)

    return _PARSER


def _node_range(node: Node) -> Range:
    return Range(
        start=Position(node.start_point[0], node.start_point[1]),
        end=Position(node.end_point[0], node.end_point[1]),
    )


def _node_name(node: Node) -> str | None:
    name_node = node.child_by_field_name("name")
    if not (name_node and name_node.text):
        return None
    return name_node.text.decode("utf8")


def _handle_class_definition(node: Node) -> DocumentSymbol | None:
    class_name = _node_name(node)
    if class_name is None:
        return None

    children: list[DocumentSymbol] = []
    for child in node.children:
        _traverse_node(child, children, in_class=True)

    return DocumentSymbol(
        name=class_name, kind="class", range=_node_range(node), children=children
    )


def _handle_function_definition(
    node: Node, in_class: bool
) -> DocumentSymbol | None:
    """Function bodies are not descended into; nested helpers stay unnamed."""
    func_name = _node_name(node)
    if func_name is None:
        return None

    kind: OutlineKind = "method" if in_class else "function"
    return DocumentSymbol(name=func_name, kind=kind, range=_node_range(node))


def _traverse_node(
    node: Node,
    symbols: list[DocumentSymbol],
    *,
    in_class: bool,
) -> None:
    """Traverse the syntax tree and collect symbols at this nesting level."""
    symbol: DocumentSymbol | None = None
    if node.type == "class_definition":
        symbol = _handle_class_definition(node)
    elif node.type == "function_definition":
        symbol = _handle_function_definition(node, in_class)

    if symbol is not None:
        symbols.append(symbol)
        return

    for child in node.children:
        _traverse_node(child, symbols, in_class=in_class)


def outline_source(source_bytes: bytes) -> list[DocumentSymbol]:
    """Build the outline of Python source code."""
    tree = _get_parser().parse(source_bytes)
    symbols: list[DocumentSymbol] = []
    _traverse_node(tree.root_node, symbols, in_class=False)
    return symbols


def python_outline(file_path: Path) -> list[DocumentSymbol]:
    """Outline provider for Python files; other files have no outline.

    Args:
        file_path: Path to the document.

    Returns:
        Top-level classes and functions with nested classes and methods.
    """
    if file_path.suffix not in PYTHON_SUFFIXES:
        return []

    try:
        source_bytes = file_path.read_bytes()
    except OSError:
        return []

    return outline_source(source_bytes)


__all__ = ["PYTHON_SUFFIXES", "outline_source", "python_outline"]

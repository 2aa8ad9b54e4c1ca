from __future__ import annotations

from pathlib import Path

import pytest

from parse.outline import DocumentSymbol, Range, find_symbol_chain, symbol_path_at
from parse.treesitter_outline import outline_source, python_outline
from reference.range import Position

FIXTURE = Path(__file__).parent / "fixtures" / "mini_repo" / "pkg_a" / "core.py"


def _symbol(
    name: str, start: tuple[int, int], end: tuple[int, int], *children: DocumentSymbol
) -> DocumentSymbol:
    return DocumentSymbol(
        name=name,
        kind="class" if children else "function",
        range=Range(Position(*start), Position(*end)),
        children=list(children),
    )


def test_symbol_path_descends_into_children() -> None:
    method = _symbol("testMethod", (4, 2), (6, 3))
    cls = _symbol("TestClass", (2, 0), (20, 1), method)

    assert symbol_path_at([cls], Position(5, 10)) == "TestClass.testMethod"


def test_symbol_path_for_top_level_symbol() -> None:
    function = _symbol("topLevelFunction", (0, 0), (10, 1))

    assert symbol_path_at([function], Position(1, 5)) == "topLevelFunction"


def test_symbol_path_stops_at_parent_when_no_child_matches() -> None:
    method = _symbol("testMethod", (4, 2), (6, 3))
    cls = _symbol("TestClass", (2, 0), (20, 1), method)

    assert symbol_path_at([cls], Position(10, 0)) == "TestClass"


def test_symbol_path_none_outside_all_symbols() -> None:
    function = _symbol("f", (3, 0), (5, 0))

    assert symbol_path_at([function], Position(0, 0)) is None
    assert symbol_path_at([], Position(0, 0)) is None
    assert symbol_path_at(None, Position(0, 0)) is None


def test_range_contains_respects_columns_on_boundary_lines() -> None:
    span = Range(Position(4, 4), Position(6, 3))

    assert span.contains(Position(4, 4))
    assert span.contains(Position(6, 3))
    assert not span.contains(Position(4, 0))
    assert not span.contains(Position(6, 4))


def test_python_outline_of_fixture() -> None:
    symbols = python_outline(FIXTURE)

    assert [(s.name, s.kind) for s in symbols] == [
        ("Greeter", "class"),
        ("compute_value", "function"),
    ]
    greeter = symbols[0]
    assert [(s.name, s.kind) for s in greeter.children] == [
        ("Options", "class"),
        ("greet", "method"),
        ("cached", "method"),
    ]
    assert greeter.range.start == Position(5, 0)
    greet = greeter.children[1]
    assert greet.children == []


@pytest.mark.parametrize(
    ("position", "expected"),
    [
        (Position(12, 8), "Greeter.greet"),
        (Position(15, 12), "Greeter.greet"),
        (Position(9, 8), "Greeter.Options"),
        (Position(21, 8), "Greeter.cached"),
        (Position(25, 4), "compute_value"),
        (Position(6, 4), "Greeter"),
        (Position(2, 0), None),
    ],
)
def test_symbol_path_in_fixture(position: Position, expected: str | None) -> None:
    assert symbol_path_at(python_outline(FIXTURE), position) == expected


def test_find_symbol_chain_is_outermost_first() -> None:
    chain = find_symbol_chain(python_outline(FIXTURE), Position(12, 8))

    assert [symbol.name for symbol in chain] == ["Greeter", "greet"]


def test_outline_source_top_level_functions() -> None:
    symbols = outline_source(b"def a():\n    pass\n\n\nasync def b():\n    pass\n")

    assert [(s.name, s.kind) for s in symbols] == [("a", "function"), ("b", "function")]


def test_python_outline_ignores_non_python_files(tmp_path: Path) -> None:
    document = tmp_path / "notes.md"
    document.write_text("def not_code():\n", encoding="utf-8")

    assert python_outline(document) == []


def test_python_outline_missing_file_is_empty(tmp_path: Path) -> None:
    assert python_outline(tmp_path / "missing.py") == []

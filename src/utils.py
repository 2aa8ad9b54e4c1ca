"""Shared utilities for coderef."""

from __future__ import annotations


def surround(text: str, wrapper: str) -> str:
    """Wrap ``text`` on both sides with ``wrapper``.

    Examples:
        >>> surround("src/cli.py:12", "`")
        '`src/cli.py:12`'
        >>> surround("", "@")
        '@@'
    """
    return f"{wrapper}{text}{wrapper}"


def parse_location(location: str) -> tuple[str, int | None, int | None]:
    """Split ``PATH[:LINE[-END]]`` into its path and 1-based line bounds.

    A trailing segment that is not a line range stays part of the path, so
    Windows drive letters survive.

    Examples:
        >>> parse_location("src/cli.py")
        ('src/cli.py', None, None)
        >>> parse_location("src/cli.py:12")
        ('src/cli.py', 12, None)
        >>> parse_location("src/cli.py:5-10")
        ('src/cli.py', 5, 10)
    """
    path, sep, line_part = location.rpartition(":")
    if not sep or not path:
        return location, None, None

    start, dash, end = line_part.partition("-")
    if not start.isdigit() or (dash and not end.isdigit()):
        return location, None, None

    return path, int(start), int(end) if dash else None

"""Compose the clipboard text for a reference.

The text is the reference in backticks followed by its source link in
parentheses, e.g.::

    `src/utils/file.py:10` ([GitHub](https://github.com/user/repo/blob/main/src/utils/file.py#L10))

Either part is left out when it is empty.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from links.line import reference_line_fragment
from links.source import resolve_source_link
from parse.outline import symbol_path_at
from parse.treesitter_outline import python_outline
from reference.assemble import get_reference
from reference.models import ReferenceType
from utils import surround

if TYPE_CHECKING:
    from collections.abc import Callable

    from parse.outline import OutlineProvider
    from reference.assemble import EditorContext
    from reference.models import Reference
    from reference.types import Chooser
    from settings.config import CodeRefConfig


@dataclass(frozen=True)
class CopyResult:
    """Outcome of a copy: ``text`` is None when the user cancelled."""

    reference: Reference | None
    text: str | None

    @property
    def cancelled(self) -> bool:
        return self.text is None


def get_symbol(
    context: EditorContext, outline_provider: OutlineProvider = python_outline
) -> str | None:
    """Return the dotted symbol path at the cursor, if any symbol encloses it."""
    symbols = outline_provider(context.file_path)
    return symbol_path_at(symbols, context.selection.active)


def format_reference_text(
    reference: Reference,
    config: CodeRefConfig,
    symbol: str | None = None,
) -> str:
    """Render the reference itself, without the source link."""
    if reference.type is ReferenceType.SYMBOL:
        return symbol or ""

    path = (
        reference.relative_path if config.include_relative_path else reference.file_name
    )
    if reference.type is ReferenceType.FILENAME_WITH_LINE:
        return f"{path}:{reference_line_fragment(reference.range)}"
    if reference.type is ReferenceType.FILENAME_NO_LINE:
        return path
    msg = f"Unhandled reference type: {reference.type!r}"
    raise AssertionError(msg)


def build_copy_content(
    context: EditorContext,
    config: CodeRefConfig,
    *,
    chooser: Chooser | None = None,
    outline_provider: OutlineProvider = python_outline,
    link_resolver: Callable[[Reference], str | None] = resolve_source_link,
) -> CopyResult:
    """Resolve the reference at ``context`` and compose its clipboard text.

    Returns:
        A CopyResult whose text is None on cancellation and empty when there
        is nothing identifiable to copy.
    """
    reference = get_reference(context, config, chooser)
    if reference is None:
        return CopyResult(reference=None, text=None)

    source = link_resolver(reference) if config.link_source else None
    parenthesis_source = f"({source})" if source else ""

    symbol = None
    if reference.type is ReferenceType.SYMBOL:
        symbol = get_symbol(context, outline_provider)

    reference_text = format_reference_text(reference, config, symbol)
    code_text = surround(reference_text, "`") if reference_text else ""

    text = " ".join(part for part in (code_text, parenthesis_source) if part)
    return CopyResult(reference=reference, text=text)


__all__ = ["CopyResult", "build_copy_content", "format_reference_text", "get_symbol"]

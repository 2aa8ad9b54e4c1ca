"""Line fragments for references and provider URLs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from reference.models import CursorRange, SelectionRange
from vcs.remote import GitProvider, KnownRemote

if TYPE_CHECKING:
    from reference.models import Reference, ReferenceRange
    from vcs.remote import RemoteInfo


def _provider_cursor_line(provider: GitProvider, line: int) -> str:
    if provider in (GitProvider.GITHUB, GitProvider.GITLAB):
        return f"#L{line}"
    if provider is GitProvider.BITBUCKET:
        return f"#lines-{line}"
    if provider is GitProvider.AZURE:
        # Azure's lineEnd points one past the last highlighted line.
        return f"&line={line}&lineEnd={line + 1}"
    if provider is GitProvider.GENERIC:
        return ""
    msg = f"Unhandled git provider: {provider!r}"
    raise AssertionError(msg)


def _provider_selection_lines(
    provider: GitProvider, start_line: int, end_line: int
) -> str:
    if provider is GitProvider.GITHUB:
        return f"#L{start_line}-L{end_line}"
    if provider is GitProvider.GITLAB:
        return f"#L{start_line}-{end_line}"
    if provider is GitProvider.BITBUCKET:
        return f"#lines-{start_line}:{end_line}"
    if provider is GitProvider.AZURE:
        return f"&line={start_line}&lineEnd={end_line + 1}"
    if provider is GitProvider.GENERIC:
        return ""
    msg = f"Unhandled git provider: {provider!r}"
    raise AssertionError(msg)


def provider_line_fragment(remote: RemoteInfo, reference: Reference) -> str:
    """Return the URL suffix that targets the reference's lines on ``remote``."""
    if not isinstance(remote, KnownRemote):
        return ""

    range_ = reference.range
    if isinstance(range_, CursorRange):
        return _provider_cursor_line(remote.provider, range_.line)
    if isinstance(range_, SelectionRange):
        return _provider_selection_lines(
            remote.provider, range_.start_line, range_.end_line
        )
    msg = f"Unhandled reference range: {range_!r}"
    raise AssertionError(msg)


def reference_line_fragment(range_: ReferenceRange) -> str:
    """Return ``"7"`` for a cursor or ``"5-10"`` for a selection."""
    if isinstance(range_, CursorRange):
        return str(range_.line)
    if isinstance(range_, SelectionRange):
        return f"{range_.start_line}-{range_.end_line}"
    msg = f"Unhandled reference range: {range_!r}"
    raise AssertionError(msg)


__all__ = ["provider_line_fragment", "reference_line_fragment"]

"""Assemble a reference from editor state and configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import TYPE_CHECKING

from reference.models import CursorRange, Reference, SelectionRange
from reference.range import from_selection
from reference.types import resolve_reference_type
from vcs.root import get_git_context, path_from_git_root

if TYPE_CHECKING:
    from reference.range import Selection
    from reference.types import Chooser
    from settings.config import CodeRefConfig


@dataclass(frozen=True)
class EditorContext:
    """The active document, its workspace folder, and the selection in it."""

    file_path: Path
    selection: Selection
    workspace_folder: Path | None = None


def _relative_posix(path: Path, start: Path) -> str:
    return PurePath(os.path.relpath(path, start)).as_posix()


def get_reference(
    context: EditorContext,
    config: CodeRefConfig,
    chooser: Chooser | None = None,
) -> Reference | None:
    """Build the reference for the current selection.

    Without a workspace folder the relative path falls back to the
    document's absolute path and git is queried from the document's
    directory.

    Returns:
        The reference, or None when the user cancelled the type choice.
    """
    range_ = from_selection(context.selection)

    if isinstance(range_, CursorRange):
        configured_type = config.cursor_reference_type
    elif isinstance(range_, SelectionRange):
        configured_type = config.selection_reference_type
    else:
        msg = f"Unhandled reference range: {range_!r}"
        raise AssertionError(msg)

    reference_type = resolve_reference_type(configured_type, chooser)
    if reference_type is None:
        return None

    file_path = context.file_path
    if context.workspace_folder is not None:
        workspace_path = context.workspace_folder
        relative_path = _relative_posix(file_path, workspace_path)
        path_in_workspace = relative_path
    else:
        workspace_path = file_path.parent
        relative_path = file_path.as_posix()
        path_in_workspace = file_path.name

    git_root: str | None = None
    root_relative: str | None = None
    if config.use_git_root:
        git_context = get_git_context(workspace_path)
        git_root = git_context.git_root
        root_relative = path_from_git_root(git_context, path_in_workspace)

    return Reference(
        type=reference_type,
        range=range_,
        workspace_path=str(workspace_path),
        relative_path=relative_path,
        file_name=PurePath(relative_path).name,
        git_root=git_root,
        path_from_git_root=root_relative,
    )


__all__ = ["EditorContext", "get_reference"]

"""Repository root discovery and workspace-relative path computation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePath

from vcs.exec import GitCommandError, run_git

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitContext:
    """Where a workspace sits inside its git working tree.

    ``relative_path`` is set only when the workspace is a strict
    subdirectory of ``git_root``; it is None at the root itself and for
    workspaces outside the root.
    """

    workspace_path: str
    git_root: str | None = None
    relative_path: str | None = None


def find_git_root(path: str | Path) -> str | None:
    """Return the top-level directory of the working tree containing ``path``."""
    try:
        result = run_git(["rev-parse", "--show-toplevel"], cwd=path)
    except GitCommandError as exc:
        logger.debug("git root lookup failed in %s: %s", path, exc)
        return None

    return result.stdout.strip() or None


def _relative_to_root(path: str, git_root: str) -> str | None:
    """Return ``path`` relative to ``git_root`` as POSIX, "" at the root.

    Returns None when ``path`` lies outside the root.
    """
    try:
        relative = os.path.relpath(os.path.realpath(path), os.path.realpath(git_root))
    except ValueError:
        # Different drives on Windows.
        return None

    parts = PurePath(relative).parts
    if parts and parts[0] == os.pardir:
        return None
    if relative == os.curdir:
        return ""
    return PurePath(relative).as_posix()


def get_git_context(workspace_path: str | Path) -> GitContext:
    """Resolve the git root of ``workspace_path`` and its position within it."""
    workspace = str(workspace_path)
    git_root = find_git_root(workspace)
    if git_root is None:
        return GitContext(workspace_path=workspace)

    relative = _relative_to_root(workspace, git_root)
    return GitContext(
        workspace_path=workspace,
        git_root=git_root,
        relative_path=relative or None,
    )


def path_from_git_root(context: GitContext, path_in_workspace: str) -> str | None:
    """Join a workspace-relative file path onto the workspace's root offset.

    Returns None when there is no git root or the workspace lies outside it.
    """
    if context.git_root is None:
        return None

    if context.relative_path is not None:
        return f"{context.relative_path}/{path_in_workspace}"

    if _relative_to_root(context.workspace_path, context.git_root) == "":
        return path_in_workspace

    return None


__all__ = ["GitContext", "find_git_root", "get_git_context", "path_from_git_root"]

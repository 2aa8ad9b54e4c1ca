"""Git integration for coderef."""

from vcs.exec import ExecResult, GitCommandError, run_git
from vcs.remote import (
    GitProvider,
    KnownRemote,
    RemoteInfo,
    UnknownRemote,
    current_branch,
    normalize_remote_url,
    resolve_remote,
)
from vcs.root import GitContext, find_git_root, get_git_context, path_from_git_root

__all__ = [
    "ExecResult",
    "GitCommandError",
    "GitContext",
    "GitProvider",
    "KnownRemote",
    "RemoteInfo",
    "UnknownRemote",
    "current_branch",
    "find_git_root",
    "get_git_context",
    "normalize_remote_url",
    "path_from_git_root",
    "resolve_remote",
    "run_git",
]

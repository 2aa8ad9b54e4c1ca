"""Markdown links to a reference on its hosted remote."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from links.azure import build_azure_source_url
from links.line import provider_line_fragment
from vcs.remote import (
    GitProvider,
    KnownRemote,
    UnknownRemote,
    current_branch,
    resolve_remote,
)

if TYPE_CHECKING:
    from reference.models import Reference
    from vcs.remote import RemoteInfo

logger = logging.getLogger(__name__)

PROVIDER_LABELS: dict[GitProvider, str] = {
    GitProvider.GITHUB: "GitHub",
    GitProvider.GITLAB: "GitLab",
    GitProvider.BITBUCKET: "Bitbucket",
    GitProvider.AZURE: "Azure DevOps",
    GitProvider.GENERIC: "source",
}


def to_source_link(
    remote: RemoteInfo, branch: str, reference: Reference
) -> str | None:
    """Render a markdown link to ``reference`` on ``branch`` of ``remote``.

    The repository-root path is preferred over the workspace path since
    hosted file views are rooted at the repository root.

    Returns:
        The markdown link, or None for an unknown remote or an Azure URL that
        does not name an organization and project.
    """
    if isinstance(remote, UnknownRemote):
        return None
    if not isinstance(remote, KnownRemote):
        msg = f"Unhandled remote: {remote!r}"
        raise AssertionError(msg)

    reference_path = reference.path_from_git_root or reference.relative_path
    line_fragment = provider_line_fragment(remote, reference)
    provider = remote.provider
    label = PROVIDER_LABELS[provider]

    if provider is GitProvider.GITHUB:
        target = f"{remote.url}/blob/{branch}/{reference_path}{line_fragment}"
    elif provider is GitProvider.GITLAB:
        target = f"{remote.url}/-/blob/{branch}/{reference_path}{line_fragment}"
    elif provider is GitProvider.BITBUCKET:
        target = f"{remote.url}/src/{branch}/{reference_path}{line_fragment}"
    elif provider is GitProvider.AZURE:
        azure_target = build_azure_source_url(
            remote.url, branch, reference_path, line_fragment
        )
        if azure_target is None:
            logger.debug("cannot build Azure DevOps link from %s", remote.url)
            return None
        target = azure_target
    elif provider is GitProvider.GENERIC:
        target = remote.url
    else:
        msg = f"Unhandled git provider: {provider!r}"
        raise AssertionError(msg)

    return f"[{label}]({target})"


def resolve_source_link(reference: Reference) -> str | None:
    """Look up the remote and branch of the reference's workspace and link it.

    A missing branch is rendered as an empty segment rather than dropping
    the link.
    """
    remote = resolve_remote(reference.workspace_path)
    branch = current_branch(reference.workspace_path) or ""
    return to_source_link(remote, branch, reference)


__all__ = ["PROVIDER_LABELS", "resolve_source_link", "to_source_link"]

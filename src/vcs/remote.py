"""Origin remote discovery and hosting-provider classification.

The ``origin`` fetch URL reported by ``git remote -v`` is classified by
hosting provider and normalized to a canonical HTTPS form that the link
builders can use without further transformation:

* ``git@github.com:user/repo.git``      -> ``https://github.com/user/repo``
* ``https://gitlab.com/user/repo.git``  -> ``https://gitlab.com/user/repo``
* ``git@ssh.dev.azure.com:v3/o/p/r``    -> ``https://dev.azure.com/o/p``
* ``https://o.visualstudio.com/p``      -> ``https://dev.azure.com/o/p``
* ``https://o.visualstudio.com/p/_git/r`` -> ``https://dev.azure.com/o/p/_git/r``

Unrecognized hosts are passed through verbatim as ``generic`` remotes.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import TYPE_CHECKING, Literal
from urllib.parse import urlparse

from pydantic import BaseModel

from vcs.exec import GitCommandError, run_git

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class GitProvider(str, Enum):
    """Hosting services with known browsing URL conventions."""

    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"
    AZURE = "azure"
    GENERIC = "generic"


class KnownRemote(BaseModel):
    """An origin remote with a canonical browsing URL."""

    provider: GitProvider
    url: str


class UnknownRemote(BaseModel):
    """No usable origin remote could be resolved."""

    provider: Literal["unknown"] = "unknown"


RemoteInfo = KnownRemote | UnknownRemote

_HOSTS: dict[GitProvider, str] = {
    GitProvider.GITHUB: "github.com",
    GitProvider.GITLAB: "gitlab.com",
    GitProvider.BITBUCKET: "bitbucket.org",
}

_ORIGIN_URL = re.compile(r"^origin\s+(\S+)")
_GIT_SUFFIX = re.compile(r"\.git$")

_AZURE_SSH = re.compile(r"^git@ssh\.dev\.azure\.com:v3/([^/]+)/([^/]+)(?:/.*)?$")
_AZURE_HTTPS = re.compile(r"^https://(?:[^/@]+@)?(dev\.azure\.com/.+)$")
_AZURE_LEGACY = re.compile(
    r"^https://(?:[^/@]+@)?([^./]+)\.visualstudio\.com/"
    r"(?:DefaultCollection/)?([^/]+?)(?:\.git)?/?$"
)
_AZURE_LEGACY_REPO = re.compile(
    r"^https://(?:[^/@]+@)?([^./]+)\.visualstudio\.com/"
    r"(?:DefaultCollection/)?([^/]+/_git/.+)$"
)


def _is_valid_git_url(url: str) -> bool:
    """Accept scp-style SSH remotes as-is; anything else must parse as a URL."""
    if url.startswith("git@"):
        return True

    try:
        parsed = urlparse(url)
    except ValueError:
        return False

    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


def _classify(url: str) -> GitProvider:
    if "github.com" in url:
        return GitProvider.GITHUB
    if "gitlab.com" in url:
        return GitProvider.GITLAB
    if "bitbucket.org" in url:
        return GitProvider.BITBUCKET
    if "dev.azure.com" in url or "visualstudio.com" in url:
        return GitProvider.AZURE
    return GitProvider.GENERIC


def _normalize_hosted_url(url: str, host: str) -> str:
    escaped = re.escape(host)

    ssh_match = re.match(rf"^git@({escaped}):(.+)$", url)
    if ssh_match:
        repo = _GIT_SUFFIX.sub("", ssh_match.group(2))
        return f"https://{ssh_match.group(1)}/{repo}"

    if re.match(rf"^https://{escaped}/(.+)$", url):
        return _GIT_SUFFIX.sub("", url)

    return url


def _normalize_azure_url(url: str) -> str:
    # A URL that already names a repository keeps its full path; only the
    # host moves to dev.azure.com.
    if "_git/" in url:
        https_match = _AZURE_HTTPS.match(url)
        if https_match:
            return f"https://{https_match.group(1)}"
        legacy_repo_match = _AZURE_LEGACY_REPO.match(url)
        if legacy_repo_match:
            org, repo_path = legacy_repo_match.groups()
            return f"https://dev.azure.com/{org}/{repo_path}"
        return url

    ssh_match = _AZURE_SSH.match(url)
    if ssh_match:
        org, project = ssh_match.groups()
        return f"https://dev.azure.com/{org}/{project}"

    https_match = _AZURE_HTTPS.match(url)
    if https_match:
        return _GIT_SUFFIX.sub("", f"https://{https_match.group(1)}")

    legacy_match = _AZURE_LEGACY.match(url)
    if legacy_match:
        org, project = legacy_match.groups()
        return f"https://dev.azure.com/{org}/{project}"

    return url


def normalize_remote_url(url: str, provider: GitProvider) -> str:
    """Return the canonical HTTPS browsing URL of ``url`` for ``provider``.

    Normalization is a fixed point: normalizing an already normalized URL
    returns it unchanged.
    """
    if provider in _HOSTS:
        return _normalize_hosted_url(url, _HOSTS[provider])
    if provider is GitProvider.AZURE:
        return _normalize_azure_url(url)
    if provider is GitProvider.GENERIC:
        return url
    msg = f"Unhandled git provider: {provider!r}"
    raise AssertionError(msg)


def remote_from_url(raw_url: str) -> RemoteInfo:
    """Classify and normalize a raw remote URL."""
    if not _is_valid_git_url(raw_url):
        logger.debug("origin URL is not a valid git URL: %s", raw_url)
        return UnknownRemote()

    provider = _classify(raw_url)
    return KnownRemote(provider=provider, url=normalize_remote_url(raw_url, provider))


def _origin_fetch_url(remote_output: str) -> str | None:
    for line in remote_output.split("\n"):
        if "(fetch)" not in line:
            continue
        match = _ORIGIN_URL.match(line)
        if match:
            return match.group(1)
    return None


def resolve_remote(workspace_path: str | Path) -> RemoteInfo:
    """Resolve the ``origin`` remote of the repository at ``workspace_path``.

    Any failure (git missing, not a repository, no origin fetch line, invalid
    URL) degrades to :class:`UnknownRemote`.
    """
    try:
        result = run_git(["remote", "-v"], cwd=workspace_path)
    except GitCommandError as exc:
        logger.debug("remote lookup failed in %s: %s", workspace_path, exc)
        return UnknownRemote()

    if not result.stdout:
        return UnknownRemote()

    raw_url = _origin_fetch_url(result.stdout)
    if raw_url is None:
        logger.debug("no origin fetch remote in %s", workspace_path)
        return UnknownRemote()

    return remote_from_url(raw_url)


def current_branch(workspace_path: str | Path) -> str | None:
    """Return the checked-out branch name, or None when it cannot be read."""
    try:
        result = run_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=workspace_path)
    except GitCommandError as exc:
        logger.debug("branch lookup failed in %s: %s", workspace_path, exc)
        return None

    return result.stdout.strip() or None


__all__ = [
    "GitProvider",
    "KnownRemote",
    "RemoteInfo",
    "UnknownRemote",
    "current_branch",
    "normalize_remote_url",
    "remote_from_url",
    "resolve_remote",
]

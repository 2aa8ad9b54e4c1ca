"""Azure DevOps repository browsing URLs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote

_AZURE_URL = re.compile(r"https://dev\.azure\.com/([^/]+)/([^/]+)")

# Characters encodeURIComponent leaves alone besides unreserved ones.
_PATH_SAFE = "!*'()"


@dataclass(frozen=True)
class AzureUrlInfo:
    org: str
    project: str


def parse_azure_url(url: str) -> AzureUrlInfo | None:
    """Extract organization and project from a ``dev.azure.com`` URL."""
    match = _AZURE_URL.match(url)
    if not match:
        return None

    org, project = match.groups()
    return AzureUrlInfo(org=org, project=project)


def build_azure_source_url(
    url: str,
    branch: str,
    relative_path: str,
    line_fragment: str,
) -> str | None:
    """Build the file view URL for ``relative_path`` on ``branch``.

    The path is percent-encoded including ``/``. Returns None when ``url``
    is not an org/project ``dev.azure.com`` URL.
    """
    parsed = parse_azure_url(url)
    if parsed is None:
        return None

    path = quote(relative_path, safe=_PATH_SAFE)
    return (
        f"https://dev.azure.com/{parsed.org}/{parsed.project}/_git/{parsed.project}"
        f"?path={path}&version=GB{branch}{line_fragment}"
    )


__all__ = ["AzureUrlInfo", "build_azure_source_url", "parse_azure_url"]

"""Source links and line fragments for coderef."""

from links.azure import AzureUrlInfo, build_azure_source_url, parse_azure_url
from links.line import provider_line_fragment, reference_line_fragment
from links.source import resolve_source_link, to_source_link

__all__ = [
    "AzureUrlInfo",
    "build_azure_source_url",
    "parse_azure_url",
    "provider_line_fragment",
    "reference_line_fragment",
    "resolve_source_link",
    "to_source_link",
]

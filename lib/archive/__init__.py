"""Archive URL sources.

Fetches historically crawled URLs for a domain from web archives:
- Wayback Machine CDX API
- Common Crawl Index API

Usage:
    from lib.archive import get_source

    source_cls = get_source("wayback")
    urls = await source_cls(timeout=10.0).fetch("example.com")
"""

from lib.archive.errors import (
    ArchiveError,
    DecodeError,
    FetchError,
    FetchTimeoutError,
    HTTPStatusError,
    TransportError,
    UnknownSourceError,
)
from lib.archive.registry import (
    get_source,
    get_source_or_none,
    is_registered,
    list_sources,
    register,
)
from lib.archive.sources import BaseArchiveSource, CommonCrawlSource, WaybackSource

__all__ = [
    # Errors
    "ArchiveError",
    "DecodeError",
    "FetchError",
    "FetchTimeoutError",
    "HTTPStatusError",
    "TransportError",
    "UnknownSourceError",
    # Registry
    "get_source",
    "get_source_or_none",
    "is_registered",
    "list_sources",
    "register",
    # Sources
    "BaseArchiveSource",
    "CommonCrawlSource",
    "WaybackSource",
]

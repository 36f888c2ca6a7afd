"""Archive sources: Wayback Machine CDX and Common Crawl index."""

import json
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Optional

import httpx
from loguru import logger

from lib.archive.errors import (
    DecodeError,
    FetchTimeoutError,
    HTTPStatusError,
    TransportError,
)
from lib.archive.registry import register

DEFAULT_TIMEOUT = 10.0

WAYBACK_CDX_URL = "https://web.archive.org/cdx/search/cdx"

COMMONCRAWL_INDEX_HOST = "https://index.commoncrawl.org"
DEFAULT_CC_INDEX = "CC-MAIN-2023-04"

DEFAULT_HEADERS = {"User-Agent": "Mozilla/5.0 (compatible; paramfinder/0.1)"}


class BaseArchiveSource(ABC):
    """
    Abstract base class for archive backends.

    Subclasses must implement:
    - endpoint: URL of the backend's query API
    - build_params(): Query string for a domain
    - parse(): Turn the response body into a flat list of URLs

    fetch() issues exactly one GET per call, with no retry.
    """

    name: ClassVar[str] = ""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, headers: Optional[dict] = None):
        self.timeout = timeout
        self.headers = headers or dict(DEFAULT_HEADERS)

    @property
    @abstractmethod
    def endpoint(self) -> str:
        """URL of the backend query API."""
        pass

    @abstractmethod
    def build_params(self, domain: str) -> Dict[str, Any]:
        """Query parameters for a domain. httpx URL-encodes the values."""
        pass

    @abstractmethod
    def parse(self, body: str) -> List[str]:
        """
        Parse a response body into URLs.

        Raises ValueError when the body does not have the expected shape.
        Rows without a URL are skipped.
        """
        pass

    async def fetch(self, domain: str) -> List[str]:
        """
        Fetch archived URLs for a domain.

        Raises:
            TransportError: Connection, DNS or read failure (FetchTimeoutError on timeout)
            HTTPStatusError: Non-200 response
            DecodeError: Body is not the expected JSON shape
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers=self.headers,
                follow_redirects=True,
            ) as client:
                response = await client.get(self.endpoint, params=self.build_params(domain))
        except httpx.TimeoutException as e:
            raise FetchTimeoutError(self.timeout, e, domain=domain, source=self.name) from e
        except httpx.RequestError as e:
            raise TransportError(e, domain=domain, source=self.name) from e

        if response.status_code != 200:
            raise HTTPStatusError(response.status_code, domain=domain, source=self.name)

        try:
            urls = self.parse(response.text)
        except (ValueError, RecursionError) as e:
            raise DecodeError(e, domain=domain, source=self.name) from e

        logger.debug(f"{self.name}: {len(urls)} URLs for {domain}")
        return urls


@register("wayback")
class WaybackSource(BaseArchiveSource):
    """
    Wayback Machine CDX API.

    Response is a JSON array of rows, each row an array whose first element
    is the original URL. The CDX server prepends a header row naming the
    requested fields.
    """

    HEADER_ROW = ["original"]

    @property
    def endpoint(self) -> str:
        return WAYBACK_CDX_URL

    def build_params(self, domain: str) -> Dict[str, Any]:
        return {
            "url": f"{domain}/*",
            "output": "json",
            "fl": "original",
            "collapse": "urlkey",  # Dedupe by URL key on the server
        }

    def parse(self, body: str) -> List[str]:
        data = json.loads(body)
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array, got {type(data).__name__}")

        rows = data
        if rows and rows[0] == self.HEADER_ROW:
            rows = rows[1:]

        urls = []
        for row in rows:
            if not isinstance(row, list):
                raise ValueError(f"expected array rows, got {type(row).__name__}")
            if row and isinstance(row[0], str):
                urls.append(row[0])
        return urls


@register("commoncrawl")
class CommonCrawlSource(BaseArchiveSource):
    """
    Common Crawl index API for a single crawl.

    Accepts either a JSON array of records or newline-delimited JSON, one
    record per line, which is what the live index server returns. Records
    are objects with a "url" field.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Optional[dict] = None,
        index: str = DEFAULT_CC_INDEX,
    ):
        super().__init__(timeout=timeout, headers=headers)
        self.index = index

    @property
    def endpoint(self) -> str:
        return f"{COMMONCRAWL_INDEX_HOST}/{self.index}-index"

    def build_params(self, domain: str) -> Dict[str, Any]:
        return {
            "url": f"{domain}/*",
            "output": "json",
        }

    def parse(self, body: str) -> List[str]:
        try:
            data = json.loads(body)
        except json.JSONDecodeError:
            records = [json.loads(line) for line in body.splitlines() if line.strip()]
        else:
            records = [data] if isinstance(data, dict) else data

        if not isinstance(records, list):
            raise ValueError(f"expected a JSON array, got {type(records).__name__}")

        urls = []
        for record in records:
            if not isinstance(record, dict):
                raise ValueError(f"expected object records, got {type(record).__name__}")
            url = record.get("url")
            if isinstance(url, str):
                urls.append(url)
        return urls

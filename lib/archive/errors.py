"""
Archive source errors.

Every failure of a single archive query is a FetchError. The orchestrator
catches these per task; nothing below ever aborts a whole batch.
"""

from typing import List, Optional


class ArchiveError(Exception):
    """Base class for archive source errors."""


class FetchError(ArchiveError):
    """A single (domain, source) query failed."""

    def __init__(self, message: str, domain: str = "", source: str = ""):
        super().__init__(message)
        self.domain = domain
        self.source = source


class TransportError(FetchError):
    """DNS, connection, or read failure talking to the archive."""

    def __init__(
        self,
        cause: Optional[BaseException] = None,
        domain: str = "",
        source: str = "",
        message: Optional[str] = None,
    ):
        self.cause = cause
        super().__init__(
            message or f"transport error: {cause!r}", domain=domain, source=source
        )


class FetchTimeoutError(TransportError):
    """The query did not finish within the configured timeout."""

    def __init__(
        self,
        timeout: float,
        cause: Optional[BaseException] = None,
        domain: str = "",
        source: str = "",
    ):
        self.timeout = timeout
        super().__init__(
            cause, domain=domain, source=source, message=f"timed out after {timeout}s"
        )


class HTTPStatusError(FetchError):
    """Archive answered with a non-200 status code."""

    def __init__(self, code: int, domain: str = "", source: str = ""):
        self.code = code
        super().__init__(
            f"failed to fetch URLs, status code: {code}", domain=domain, source=source
        )


class DecodeError(FetchError):
    """Response body could not be parsed into the expected shape."""

    def __init__(self, cause: object = None, domain: str = "", source: str = ""):
        self.cause = cause
        super().__init__(f"decode error: {cause}", domain=domain, source=source)


class UnknownSourceError(ArchiveError, ValueError):
    """No adapter is registered under the requested name."""

    def __init__(self, name: str, available: Optional[List[str]] = None):
        self.name = name
        listed = ", ".join(available or []) or "(none)"
        super().__init__(f"Unknown source: '{name}'. Available: {listed}")

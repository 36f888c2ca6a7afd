"""
Param finder configuration models.
"""

import math
import os
import re
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from lib.archive.registry import list_sources
from lib.archive.sources import DEFAULT_CC_INDEX, DEFAULT_TIMEOUT

DEFAULT_OUTPUT = "param_urls.txt"

# Go-style duration units, in seconds
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


class ConfigError(ValueError):
    """Invalid or missing configuration. Fatal, raised before any fetching."""


def split_list(value: Optional[str]) -> List[str]:
    """Split a comma-separated flag value, dropping blank items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_duration(value: str) -> float:
    """
    Parse a duration into seconds.

    Accepts bare seconds ("10", "2.5") and Go-style durations
    ("10s", "500ms", "1m30s").
    """
    text = value.strip()
    if not text:
        raise ConfigError("Empty duration")

    try:
        seconds = float(text)
    except ValueError:
        pass
    else:
        if not math.isfinite(seconds):
            raise ConfigError(f"Invalid duration: '{value}'")
        return seconds

    total = 0.0
    pos = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()

    if pos != len(text) or pos == 0:
        raise ConfigError(f"Invalid duration: '{value}'")
    return total


class FinderConfig(BaseModel):
    """Runtime configuration for a param finder run."""

    domains: List[str] = Field(..., description="Target domains to query")
    sources: List[str] = Field(
        default_factory=list_sources,
        description="Archive sources to query (defaults to every registered source)",
    )
    output: str = Field(default=DEFAULT_OUTPUT, description="Output file path")
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, description="Per-request timeout in seconds"
    )
    cc_index: str = Field(default=DEFAULT_CC_INDEX, description="Common Crawl index id")

    @field_validator("domains")
    @classmethod
    def _require_domains(cls, value: List[str]) -> List[str]:
        domains = [d.strip() for d in value if d and d.strip()]
        if not domains:
            raise ValueError("at least one domain is required")
        return domains

    @classmethod
    def from_strings(
        cls,
        domains: Optional[str],
        sources: Optional[str] = None,
        output: Optional[str] = None,
        timeout: Optional[str] = None,
        cc_index: Optional[str] = None,
    ) -> "FinderConfig":
        """
        Build a config from comma-separated flag values.

        Unset values fall back to PARAMFINDER_* environment variables, then
        to the built-in defaults.

        Raises:
            ConfigError: No domains, or an invalid timeout
        """
        domain_list = split_list(domains)
        if not domain_list:
            raise ConfigError("No domains supplied")

        values = {"domains": domain_list}

        source_list = split_list(sources or os.getenv("PARAMFINDER_SOURCES"))
        if source_list:
            values["sources"] = source_list

        output = output or os.getenv("PARAMFINDER_OUTPUT")
        if output:
            values["output"] = output

        timeout = timeout or os.getenv("PARAMFINDER_TIMEOUT")
        if timeout:
            values["timeout"] = parse_duration(timeout)

        cc_index = cc_index or os.getenv("PARAMFINDER_CC_INDEX")
        if cc_index:
            values["cc_index"] = cc_index

        try:
            return cls(**values)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    def source_options(self) -> dict:
        """Constructor options for each source, keyed by source name."""
        return {"commoncrawl": {"index": self.cc_index}}

"""
Param Finder Service - Find URLs with query parameters in web archives.

Supported archives:
- Wayback Machine (CDX API)
- Common Crawl (index API)

Usage:
    from services.paramfinder import Service, FinderConfig

    config = FinderConfig.from_strings("example.com,example.org")
    result = await Service().find(config)

    # Orchestrator only
    urls = await run_all(["example.com"], ["wayback", "commoncrawl"], timeout=10.0)
    param_urls = filter_param_urls(urls)
"""

# Service
from services.paramfinder.service import Service, IService

# Config
from services.paramfinder.config import (
    ConfigError,
    FinderConfig,
    parse_duration,
    split_list,
)

# Models
from services.paramfinder.models import FetchStats, FetchTask, FindResult

# Pipeline stages
from services.paramfinder.orchestrator import FetchOrchestrator, URLAggregate, run_all
from services.paramfinder.filtering import filter_param_urls, has_params
from services.paramfinder.sink import save_urls

__all__ = [
    # Service
    "Service",
    "IService",
    # Config
    "ConfigError",
    "FinderConfig",
    "parse_duration",
    "split_list",
    # Models
    "FetchStats",
    "FetchTask",
    "FindResult",
    # Pipeline stages
    "FetchOrchestrator",
    "URLAggregate",
    "run_all",
    "filter_param_urls",
    "has_params",
    "save_urls",
]

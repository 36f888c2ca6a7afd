"""
Param finder service - Discover parameterized URLs from web archives.

Runs the full pipeline for a FinderConfig:
1. Fetch archived URLs for every (domain, source) pair concurrently
2. Keep URLs that carry query parameters
3. Save them to the output file, one per line
"""

from abc import ABC, abstractmethod
from typing import List

from loguru import logger

from lib.archive import registry
from services.paramfinder.config import FinderConfig
from services.paramfinder.filtering import filter_param_urls
from services.paramfinder.models import FindResult
from services.paramfinder.orchestrator import FetchOrchestrator
from services.paramfinder.sink import save_urls


class IService(ABC):
    """Param Finder Service Interface - Find parameterized URLs in web archives."""

    @abstractmethod
    async def find(self, config: FinderConfig) -> FindResult:
        """
        Fetch, filter and save parameter URLs.

        Args:
            config: Domains, sources, output path and timeout

        Returns:
            FindResult with counts and fetch stats

        Raises:
            OSError: Output file could not be written
        """
        pass

    @abstractmethod
    def list_sources(self) -> List[str]:
        """List all registered archive sources."""
        pass


class Service(IService):
    """Service for finding parameterized URLs in web archives."""

    async def find(self, config: FinderConfig) -> FindResult:
        orchestrator = FetchOrchestrator(
            timeout=config.timeout,
            source_options=config.source_options(),
        )

        logger.info("Fetching URLs from sources...")
        all_urls = await orchestrator.run_all(config.domains, config.sources)

        logger.info("Extracting URLs with parameters...")
        param_urls = filter_param_urls(all_urls)
        logger.info(f"Found {len(param_urls)} URLs with parameters.")

        logger.info(f"Saving URLs to {config.output}...")
        save_urls(param_urls, config.output)

        return FindResult(
            total_urls=len(all_urls),
            param_urls=len(param_urls),
            output_path=config.output,
            stats=orchestrator.stats,
        )

    def list_sources(self) -> List[str]:
        return registry.list_sources()

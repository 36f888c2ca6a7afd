"""
Fetch orchestrator - Fan out one archive query per (domain, source) pair.

Every task starts at once; there is no concurrency cap. A failing task
contributes zero URLs and never affects its siblings. run_all() returns only
after every task has finished.
"""

import asyncio
from typing import Dict, Iterable, List, Optional

from loguru import logger

from lib.archive import registry
from lib.archive.errors import FetchError, FetchTimeoutError, UnknownSourceError
from lib.archive.sources import DEFAULT_TIMEOUT
from services.paramfinder.models import FetchStats, FetchTask


class URLAggregate:
    """
    URL list shared by all fetch tasks.

    Appends are serialized through a lock so one task's batch is never
    interleaved with another's.
    """

    def __init__(self):
        self._urls: List[str] = []
        self._lock = asyncio.Lock()

    async def add(self, urls: Iterable[str]) -> None:
        """Append a batch of URLs atomically."""
        async with self._lock:
            self._urls.extend(urls)

    def snapshot(self) -> List[str]:
        """Copy of the collected URLs."""
        return list(self._urls)

    def __len__(self) -> int:
        return len(self._urls)


def build_tasks(domains: Iterable[str], sources: Iterable[str]) -> List[FetchTask]:
    """Cross product of domains and sources, one task per pair."""
    source_list = list(sources)
    return [
        FetchTask(domain=domain, source=source)
        for domain in domains
        for source in source_list
    ]


class FetchOrchestrator:
    """Run archive queries concurrently and merge their results."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        source_options: Optional[Dict[str, dict]] = None,
    ):
        """
        Args:
            timeout: Per-task timeout in seconds
            source_options: Extra constructor kwargs per source name
                (e.g. {"commoncrawl": {"index": "CC-MAIN-2024-10"}})
        """
        self.timeout = timeout
        self.source_options = source_options or {}
        self.stats = FetchStats()

    async def run_all(self, domains: List[str], sources: List[str]) -> List[str]:
        """
        Fetch URLs for every (domain, source) pair.

        Returns:
            Merged URLs from all successful tasks, in completion order.
            Empty if every task failed.
        """
        tasks = build_tasks(domains, sources)
        self.stats = FetchStats(tasks_dispatched=len(tasks))
        aggregate = URLAggregate()

        logger.info(
            f"Dispatching {len(tasks)} fetch tasks "
            f"({len(domains)} domains x {len(sources)} sources)"
        )

        await asyncio.gather(*[self._run_task(task, aggregate) for task in tasks])

        urls = aggregate.snapshot()
        self.stats.urls_collected = len(urls)
        logger.info(
            f"Fetched {len(urls)} URLs: {self.stats.tasks_succeeded} succeeded, "
            f"{self.stats.tasks_failed} failed, {self.stats.tasks_skipped} skipped"
        )
        return urls

    async def _run_task(self, task: FetchTask, aggregate: URLAggregate) -> None:
        """Run one task. Per-task errors are logged and absorbed here."""
        try:
            source_cls = registry.get_source(task.source)
        except UnknownSourceError:
            logger.warning(f"Unknown source: {task.source} (skipping {task.domain})")
            self.stats.tasks_skipped += 1
            return

        source = source_cls(timeout=self.timeout, **self.source_options.get(task.source, {}))

        try:
            urls = await asyncio.wait_for(source.fetch(task.domain), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            err = FetchTimeoutError(self.timeout, e, domain=task.domain, source=task.source)
            self._log_failure(task, err)
            return
        except FetchError as e:
            self._log_failure(task, e)
            return

        await aggregate.add(urls)
        self.stats.tasks_succeeded += 1
        logger.debug(f"{task.source}: +{len(urls)} URLs for {task.domain}")

    def _log_failure(self, task: FetchTask, error: FetchError) -> None:
        self.stats.tasks_failed += 1
        logger.warning(
            f"Error fetching URLs for {task.domain} from {task.source}: {error}"
        )


async def run_all(
    domains: List[str],
    sources: List[str],
    timeout: float = DEFAULT_TIMEOUT,
    source_options: Optional[Dict[str, dict]] = None,
) -> List[str]:
    """Fetch and merge URLs for every (domain, source) pair."""
    orchestrator = FetchOrchestrator(timeout=timeout, source_options=source_options)
    return await orchestrator.run_all(domains, sources)

"""Tests for param finder service."""

import json

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from lib.archive.errors import HTTPStatusError, TransportError
from lib.archive.sources import BaseArchiveSource
from services.paramfinder.config import FinderConfig
from services.paramfinder.service import IService, Service


def _source(fetch):
    class FakeSource(BaseArchiveSource):
        endpoint = "http://archive.invalid/"

        def build_params(self, domain):
            return {}

        def parse(self, body):
            return []

    FakeSource.fetch = fetch
    return FakeSource


@pytest.fixture
def fake_registry(monkeypatch):
    """Replace the source registry with an empty dict for the test."""
    sources = {}
    monkeypatch.setattr("lib.archive.registry._REGISTRY", sources)
    return sources


class TestService:
    """Tests for Service class."""

    def test_implements_interface(self):
        """Service implements IService interface."""
        assert isinstance(Service(), IService)

    def test_list_sources(self):
        """List registered sources."""
        sources = Service().list_sources()

        assert "wayback" in sources
        assert "commoncrawl" in sources

    @pytest.mark.asyncio
    async def test_single_success_saves_only_param_urls(self, fake_registry, tmp_path):
        """Two domains x two sources, one success: file holds one line."""

        async def fetch(self, domain):
            if self.name == "good" and domain == "a.com":
                return ["http://a.com/?x=1", "http://a.com/"]
            raise HTTPStatusError(503, domain=domain, source=self.name)

        good = _source(fetch)
        good.name = "good"
        bad = _source(fetch)
        bad.name = "bad"
        fake_registry["good"] = good
        fake_registry["bad"] = bad

        output = tmp_path / "param_urls.txt"
        config = FinderConfig(
            domains=["a.com", "b.com"],
            sources=["good", "bad"],
            output=str(output),
            timeout=1.0,
        )

        result = await Service().find(config)

        assert output.read_text() == "http://a.com/?x=1\n"
        assert result.total_urls == 2
        assert result.param_urls == 1
        assert result.output_path == str(output)
        assert result.stats.tasks_dispatched == 4
        assert result.stats.tasks_succeeded == 1
        assert result.stats.tasks_failed == 3

    @pytest.mark.asyncio
    async def test_all_failures_write_empty_file(self, fake_registry, tmp_path):
        """Every task failing still produces an empty output file."""

        async def fetch(self, domain):
            raise TransportError(ConnectionError("refused"), domain=domain)

        fake_registry["down"] = _source(fetch)

        output = tmp_path / "out.txt"
        config = FinderConfig(domains=["a.com"], sources=["down"], output=str(output))

        result = await Service().find(config)

        assert result.param_urls == 0
        assert output.exists()
        assert output.read_text() == ""

    @pytest.mark.asyncio
    async def test_unknown_source_does_not_abort(self, fake_registry, tmp_path):
        """Valid sources still run when the list has unknown names."""

        async def fetch(self, domain):
            return [f"http://{domain}/?q=1"]

        fake_registry["ok"] = _source(fetch)

        output = tmp_path / "out.txt"
        config = FinderConfig(
            domains=["a.com", "b.com"], sources=["nope", "ok"], output=str(output)
        )

        result = await Service().find(config)

        assert sorted(output.read_text().splitlines()) == ["http://a.com/?q=1", "http://b.com/?q=1"]
        assert result.stats.tasks_skipped == 2

    @pytest.mark.asyncio
    async def test_save_failure_raises(self, fake_registry, tmp_path):
        """Unwritable output propagates OSError."""

        async def fetch(self, domain):
            return ["http://a.com/?x=1"]

        fake_registry["ok"] = _source(fetch)

        config = FinderConfig(
            domains=["a.com"],
            sources=["ok"],
            output=str(tmp_path / "missing" / "out.txt"),
        )

        with pytest.raises(OSError):
            await Service().find(config)

    @pytest.mark.asyncio
    async def test_end_to_end_with_real_sources(self, tmp_path):
        """Wayback and Common Crawl responses flow through to the file."""
        wayback_response = MagicMock()
        wayback_response.status_code = 200
        wayback_response.text = json.dumps(
            [["original"], ["http://a.com/?id=1"], ["http://a.com/about"]]
        )

        cc_response = MagicMock()
        cc_response.status_code = 200
        cc_response.text = "\n".join(
            [
                json.dumps({"url": "http://a.com/search?q=x"}),
                json.dumps({"url": "http://a.com/"}),
            ]
        )

        async def get(url, params=None, headers=None):
            if "web.archive.org" in url:
                return wayback_response
            return cc_response

        with patch("httpx.AsyncClient") as mock_client_cls:
            mock_client = AsyncMock()
            mock_client.get = AsyncMock(side_effect=get)
            mock_client.__aenter__ = AsyncMock(return_value=mock_client)
            mock_client.__aexit__ = AsyncMock(return_value=False)
            mock_client_cls.return_value = mock_client

            output = tmp_path / "out.txt"
            config = FinderConfig(domains=["a.com"], output=str(output))
            result = await Service().find(config)

        assert sorted(output.read_text().splitlines()) == [
            "http://a.com/?id=1",
            "http://a.com/search?q=x",
        ]
        assert result.total_urls == 4
        assert mock_client.get.call_count == 2

    @pytest.mark.asyncio
    async def test_end_to_end_transport_failure(self, tmp_path):
        """A network failure on one archive leaves the other's results."""
        wayback_response = MagicMock()
        wayback_response.status_code = 200
        wayback_response.text = json.dumps([["http://a.com/?id=1"]])

        async def get(url, params=None, headers=None):
            if "web.archive.org" in url:
                return wayback_response
            raise httpx.ConnectError("name resolution failed")

        with patch("httpx.AsyncClient") as mock_client_cls:
            mock_client = AsyncMock()
            mock_client.get = AsyncMock(side_effect=get)
            mock_client.__aenter__ = AsyncMock(return_value=mock_client)
            mock_client.__aexit__ = AsyncMock(return_value=False)
            mock_client_cls.return_value = mock_client

            output = tmp_path / "out.txt"
            config = FinderConfig(domains=["a.com"], output=str(output))
            result = await Service().find(config)

        assert output.read_text() == "http://a.com/?id=1\n"
        assert result.stats.tasks_failed == 1
        assert result.stats.tasks_succeeded == 1

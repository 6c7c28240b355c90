import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pytest
import requests

PROJECT_ROOT = Path(__file__).resolve().parents[2]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from headlines.exceptions import FeedFetchError  # noqa: E402
from headlines.models.headline import Headline  # noqa: E402
from headlines.sources.registry import SiteRegistry  # noqa: E402


SAMPLE_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Example News</title>
    <link>http://example.com/</link>
    <description>Example feed</description>
    <item>
      <title>Item A</title>
      <link>http://example.com/a</link>
      <pubDate>Mon, 06 Sep 2021 16:45:00 GMT</pubDate>
    </item>
    <item>
      <title>Item B</title>
      <link>http://example.com/b</link>
    </item>
  </channel>
</rss>
"""


class FakeResponse:
    def __init__(self, content: bytes = b"", status_code: int = 200,
                 read_error: Optional[Exception] = None) -> None:
        self._content = content
        self.status_code = status_code
        self.read_error = read_error
        self.closed = False

    @property
    def content(self) -> bytes:
        if self.read_error is not None:
            raise self.read_error
        return self._content

    def close(self) -> None:
        self.closed = True

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Stands in for requests.Session; maps URLs to responses or exceptions."""

    def __init__(self, routes: Optional[Dict[str, Union[FakeResponse, Exception]]] = None) -> None:
        self.routes = routes or {}
        self.headers: Dict[str, str] = {}
        self.calls: List[Dict[str, Any]] = []

    def get(self, url: str, timeout: Optional[int] = None, stream: bool = False) -> FakeResponse:
        call: Dict[str, Any] = {"url": url, "timeout": timeout}
        if stream:
            call["stream"] = True
        self.calls.append(call)
        result = self.routes.get(url)
        if result is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(result, Exception):
            raise result
        return result


class FakeRegistryLoader:
    def __init__(self, sites: Optional[Dict[str, str]] = None, error: Optional[Exception] = None) -> None:
        self.sites = sites or {}
        self.error = error
        self.load_count = 0

    def load(self) -> SiteRegistry:
        self.load_count += 1
        if self.error is not None:
            raise self.error
        return SiteRegistry(self.sites, source="fake")


class FakeFeedParser:
    def __init__(self, titles: Optional[List[str]] = None, error: Optional[Exception] = None) -> None:
        self.titles = titles if titles is not None else ["Item A", "Item B"]
        self.error = error
        self.calls: List[Dict[str, str]] = []

    def fetch_headlines(self, url: str, source_name: str = "") -> List[Headline]:
        self.calls.append({"url": url, "source_name": source_name})
        if self.error is not None:
            raise FeedFetchError(url, self.error)
        return [Headline(title=title, source=source_name) for title in self.titles]


@pytest.fixture
def registry_file(tmp_path):
    def _factory(content: str, name: str = "rss.csv") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _factory


@pytest.fixture
def fake_session_factory():
    def _factory(routes: Optional[Dict[str, Union[FakeResponse, Exception]]] = None) -> FakeSession:
        return FakeSession(routes)

    return _factory


@pytest.fixture
def fake_loader_factory():
    def _factory(sites: Optional[Dict[str, str]] = None, error: Optional[Exception] = None) -> FakeRegistryLoader:
        return FakeRegistryLoader(sites, error)

    return _factory


@pytest.fixture
def fake_feed_parser_factory():
    def _factory(titles: Optional[List[str]] = None, error: Optional[Exception] = None) -> FakeFeedParser:
        return FakeFeedParser(titles, error)

    return _factory


@pytest.fixture
def sample_rss() -> bytes:
    return SAMPLE_RSS


@pytest.fixture
def clean_env(monkeypatch):
    for key in [
        "HEADLINES_REGISTRY_URL", "HEADLINES_REGISTRY_PATH", "REGISTRY_TIMEOUT", "FEED_TIMEOUT",
        "FEED_USER_AGENT", "HEADLINES_PROPAGATE_FEED_ERRORS", "DISPLAY_TIMEZONE", "ALEXA_SKILL_ID",
        "LOG_LEVEL", "VERBOSE_LOGGING",
    ]:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch

import pytest

from headlines.sources.loader import parse_registry_lines
from headlines.sources.registry import SiteRegistry


@pytest.mark.parametrize("name,url", [
    ("example", "http://feed"),
    ("the new york times", "https://rss.nytimes.com/services/xml/rss/nyt/HomePage.xml"),
    ("hacker news", "https://news.ycombinator.com/rss"),
])
def test_resolve_returns_url_for_every_loaded_line(name, url):
    registry = parse_registry_lines([f"{name},{url}"], "test")

    assert registry.resolve(name.lower()) == url
    assert registry.resolve(name.upper()) == url


def test_mixed_case_keys_are_normalized_at_load():
    registry = parse_registry_lines(["The Verge,https://www.theverge.com/rss/index.xml"], "test")

    assert registry.resolve("the verge") == "https://www.theverge.com/rss/index.xml"
    assert "THE VERGE" in registry
    assert registry.list_available_sites() == ["the verge"]


@pytest.mark.parametrize("name", ["unknown site", "", "   ", None])
def test_unsupported_site_returns_none(name):
    registry = SiteRegistry({"example": "http://feed"})

    assert registry.resolve(name) is None


def test_register_site_overrides_previous_url():
    registry = SiteRegistry()
    registry.register_site("Example", "http://old")
    registry.register_site("example", "http://new")

    assert len(registry) == 1
    assert registry.resolve("EXAMPLE") == "http://new"

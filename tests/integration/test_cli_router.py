import json

import pytest

from cli_router import CLIRouter
from headlines.config import Config
from headlines.container import Container
from headlines.skill import HeadlinesSkill


@pytest.fixture
def router_factory(fake_loader_factory, fake_feed_parser_factory):
    def _factory(sites=None, titles=None, loader_error=None):
        loader = fake_loader_factory(sites if sites is not None else {"example": "http://feed"}, loader_error)
        parser = fake_feed_parser_factory(titles)
        container = Container()
        container.register_instance("config", Config())
        container.register_instance("registry_loader", loader)
        container.register_instance("feed_parser", parser)
        container.register_instance("skill", HeadlinesSkill(loader, parser))
        return CLIRouter(container=container)

    return _factory


def test_registry_list(router_factory, capsys):
    exit_code = router_factory({"example": "http://feed", "other": "http://other"}).route_command(["registry", "list"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "example: http://feed" in out
    assert "other: http://other" in out


@pytest.mark.parametrize("site,expected_code", [("Example", 0), ("missing", 1)])
def test_registry_resolve(site, expected_code, router_factory):
    assert router_factory().route_command(["registry", "resolve", site]) == expected_code


def test_headlines_get_ssml(router_factory, capsys):
    exit_code = router_factory(titles=["Item A"]).route_command(["headlines", "get", "example", "--format", "ssml"])

    assert exit_code == 0
    assert "<speak>Here are your headlines from example<p>Item A</p></speak>" in capsys.readouterr().out


def test_headlines_get_json_respects_limit(router_factory, capsys):
    exit_code = router_factory(titles=["A", "B", "C"]).route_command(
        ["headlines", "get", "example", "--format", "json", "--limit", "2"]
    )

    data = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert [item["title"] for item in data] == ["A", "B"]


def test_skill_invoke_intent(router_factory, capsys):
    exit_code = router_factory().route_command(["skill", "invoke", "--intent", "GetHeadlines", "--site", "example"])

    response = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert response["response"]["outputSpeech"]["type"] == "SSML"


def test_skill_invoke_request_file(router_factory, tmp_path, capsys):
    request_file = tmp_path / "session.json"
    request_file.write_text(json.dumps([
        {
            "version": "1.0",
            "session": {"new": True, "sessionId": "s1", "application": {"applicationId": "app"}},
            "request": {"type": "LaunchRequest", "requestId": "r1"},
        },
        {
            "version": "1.0",
            "session": {"new": False, "sessionId": "s1", "application": {"applicationId": "app"}},
            "request": {"type": "IntentRequest", "requestId": "r2", "intent": {"name": "AMAZON.StopIntent"}},
        },
    ]), encoding="utf-8")

    exit_code = router_factory().route_command(["skill", "invoke", "--request", str(request_file)])

    assert exit_code == 0
    assert '"shouldEndSession": true' in capsys.readouterr().out


def test_registry_failure_returns_error_code(router_factory):
    from headlines.exceptions import RegistrySourceUnavailableError

    error = RegistrySourceUnavailableError("http://remote", "rss.csv", OSError("missing"))
    assert router_factory(loader_error=error).route_command(["registry", "list"]) == 1


def test_missing_command_prints_help(router_factory):
    assert router_factory().route_command([]) == 1


@pytest.mark.parametrize("command", ["registry", "headlines", "skill"])
def test_missing_subcommand_prints_command_help(command, router_factory, capsys):
    exit_code = router_factory().route_command([command])

    assert exit_code == 1
    assert "usage:" in capsys.readouterr().out

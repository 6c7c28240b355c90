import pytest

from headlines.exceptions import FeedFetchError, RegistrySourceUnavailableError, UnknownIntentError
from headlines.formatters import GOODBYE_TEXT, HELP_TEXT, REPROMPT_TEXT, UNSUPPORTED_TEXT, WELCOME_TEXT
from headlines.models.events import IntentRequest, LaunchRequest, SessionContext, SessionEnded, SessionStarted
from headlines.models.speech import PlainText, Ssml
from headlines.skill import HeadlinesSkill


@pytest.fixture
def skill_factory(fake_loader_factory, fake_feed_parser_factory):
    def _factory(sites=None, titles=None, loader_error=None, feed_error=None, propagate_feed_errors=False):
        loader = fake_loader_factory(sites if sites is not None else {"example": "http://feed"}, loader_error)
        parser = fake_feed_parser_factory(titles, feed_error)
        return HeadlinesSkill(loader, parser, propagate_feed_errors=propagate_feed_errors)

    return _factory


def started_context(skill, session_id="session-1"):
    context = SessionContext(session_id=session_id)
    skill.dispatch(context, SessionStarted(request_id="req-start"))
    return context


def get_headlines(site):
    return IntentRequest(request_id="req-1", intent_name="GetHeadlines", slots={"Site": site})


def test_session_start_loads_registry_into_context(skill_factory):
    skill = skill_factory()
    context = SessionContext(session_id="s")

    result = skill.dispatch(context, SessionStarted(request_id="r"))

    assert result is None
    assert context.registry.resolve("example") == "http://feed"


def test_session_start_surfaces_load_failure(skill_factory):
    error = RegistrySourceUnavailableError("http://remote", "rss.csv", OSError("missing"))
    skill = skill_factory(loader_error=error)

    with pytest.raises(RegistrySourceUnavailableError):
        skill.dispatch(SessionContext(session_id="s"), SessionStarted(request_id="r"))


def test_launch_returns_welcome_without_touching_registry(skill_factory):
    skill = skill_factory()
    context = SessionContext(session_id="s")

    response = skill.dispatch(context, LaunchRequest(request_id="r"))

    assert response.is_ask
    assert response.output_speech == PlainText(WELCOME_TEXT)
    assert isinstance(response.reprompt, PlainText)
    assert context.registry is None
    assert skill.registry_loader.load_count == 0


def test_get_headlines_reads_feed(skill_factory):
    skill = skill_factory(titles=["Item A", "Item B"])
    context = started_context(skill)

    response = skill.dispatch(context, get_headlines("example"))

    assert response.is_ask
    assert response.output_speech == Ssml(
        "<speak>Here are your headlines from example<p>Item A</p><p>Item B</p></speak>"
    )
    assert response.reprompt == PlainText(REPROMPT_TEXT)
    assert skill.feed_parser.calls == [{"url": "http://feed", "source_name": "example"}]


def test_site_name_is_matched_case_insensitively(skill_factory):
    skill = skill_factory()
    context = started_context(skill)

    response = skill.dispatch(context, get_headlines("EXAMPLE"))

    assert "Here are your headlines from EXAMPLE" in response.output_speech.ssml


def test_unsupported_site_apologizes_without_fetching(skill_factory):
    skill = skill_factory()
    context = started_context(skill)

    response = skill.dispatch(context, get_headlines("nowhere"))

    assert response.is_ask
    assert response.output_speech == Ssml(f"<speak>{UNSUPPORTED_TEXT}</speak>")
    assert response.reprompt == PlainText(REPROMPT_TEXT)
    assert skill.feed_parser.calls == []


@pytest.mark.parametrize("site", [None, "", "  "])
def test_missing_site_slot_asks_again(site, skill_factory):
    skill = skill_factory()
    context = started_context(skill)

    response = skill.dispatch(context, get_headlines(site))

    assert response.is_ask
    assert isinstance(response.output_speech, PlainText)
    assert skill.feed_parser.calls == []


def test_registry_loaded_lazily_when_session_start_was_missed(skill_factory):
    skill = skill_factory()
    context = SessionContext(session_id="s")

    skill.dispatch(context, get_headlines("example"))
    skill.dispatch(context, get_headlines("example"))

    assert skill.registry_loader.load_count == 1
    assert context.registry is not None


def test_feed_failure_apologizes_by_default(skill_factory):
    skill = skill_factory(feed_error=ConnectionError("down"))
    context = started_context(skill)

    response = skill.dispatch(context, get_headlines("example"))

    assert response.is_ask
    assert "couldn't get the headlines from example" in response.output_speech.ssml


def test_feed_failure_propagates_when_configured(skill_factory):
    skill = skill_factory(feed_error=ConnectionError("down"), propagate_feed_errors=True)
    context = started_context(skill)

    with pytest.raises(FeedFetchError):
        skill.dispatch(context, get_headlines("example"))


@pytest.mark.parametrize("intent_name", ["Help", "AMAZON.HelpIntent"])
def test_help_intent(intent_name, skill_factory):
    response = skill_factory().dispatch(SessionContext(session_id="s"), IntentRequest("r", intent_name))

    assert response.is_ask
    assert response.output_speech == PlainText(HELP_TEXT)
    assert response.reprompt == PlainText(REPROMPT_TEXT)


@pytest.mark.parametrize("intent_name", ["Stop", "Cancel", "AMAZON.StopIntent", "AMAZON.CancelIntent"])
def test_stop_and_cancel_end_session(intent_name, skill_factory):
    skill = skill_factory(loader_error=RuntimeError("registry never needed"))

    response = skill.dispatch(SessionContext(session_id="s"), IntentRequest("r", intent_name))

    assert not response.is_ask
    assert response.reprompt is None
    assert response.output_speech == PlainText(GOODBYE_TEXT)


@pytest.mark.parametrize("intent_name", ["PlayMusic", "AMAZON.FallbackIntent", ""])
def test_unknown_intent_raises(intent_name, skill_factory):
    with pytest.raises(UnknownIntentError) as excinfo:
        skill_factory().dispatch(SessionContext(session_id="s"), IntentRequest("r", intent_name))

    assert excinfo.value.intent_name == intent_name


def test_session_ended_is_a_no_op(skill_factory):
    skill = skill_factory()
    context = started_context(skill)

    assert skill.dispatch(context, SessionEnded(request_id="r", reason="USER_INITIATED")) is None


def test_sessions_do_not_share_registries(fake_feed_parser_factory):
    class SequenceLoader:
        def __init__(self):
            self.registries = [{"one": "http://one"}, {"two": "http://two"}]

        def load(self):
            from headlines.sources.registry import SiteRegistry
            return SiteRegistry(self.registries.pop(0))

    skill = HeadlinesSkill(SequenceLoader(), fake_feed_parser_factory())
    first = started_context(skill, "first")
    second = started_context(skill, "second")

    assert first.registry.resolve("one") == "http://one"
    assert first.registry.resolve("two") is None
    assert second.registry.resolve("two") == "http://two"

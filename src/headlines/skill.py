#!/usr/bin/env python3
"""
Intent dispatcher for the headlines skill.

``HeadlinesSkill.dispatch`` maps a session context and one platform event to
a speech response. The registry a session needs is carried on its
``SessionContext``; nothing is shared between sessions.
"""

import logging
from typing import Optional

from .exceptions import FeedFetchError, UnknownIntentError
from .formatters import (
    feed_unavailable_response,
    goodbye_response,
    headlines_response,
    help_response,
    missing_site_response,
    unsupported_response,
    welcome_response,
)
from .models.events import Event, IntentRequest, LaunchRequest, SessionContext, SessionEnded, SessionStarted
from .models.speech import SpeechResponse
from .sources.registry import SiteRegistry

logger = logging.getLogger(__name__)

SLOT_SITE = "Site"

INTENT_GET_HEADLINES = "GetHeadlines"
INTENT_HELP = "Help"
INTENT_STOP = "Stop"
INTENT_CANCEL = "Cancel"

# Built-in platform intent names
INTENT_ALIASES = {
    "AMAZON.HelpIntent": INTENT_HELP,
    "AMAZON.StopIntent": INTENT_STOP,
    "AMAZON.CancelIntent": INTENT_CANCEL,
}


class HeadlinesSkill:
    """Handles platform events for the headlines skill."""

    def __init__(self, registry_loader, feed_parser, propagate_feed_errors: bool = False):
        """
        Initialize skill.

        Args:
            registry_loader: Object with ``load() -> SiteRegistry``
            feed_parser: Object with ``fetch_headlines(url, source_name) -> List[Headline]``
            propagate_feed_errors: Re-raise FeedFetchError instead of apologizing
        """
        self.registry_loader = registry_loader
        self.feed_parser = feed_parser
        self.propagate_feed_errors = propagate_feed_errors

    def dispatch(self, context: SessionContext, event: Event) -> Optional[SpeechResponse]:
        """
        Handle one platform event.

        Returns:
            Response for launch and intent events, None for session lifecycle events

        Raises:
            RegistryLoadError: If the registry cannot be loaded
            UnknownIntentError: If the intent is not handled by this skill
        """
        if isinstance(event, SessionStarted):
            self.on_session_started(context, event)
            return None
        if isinstance(event, LaunchRequest):
            return self.on_launch(context, event)
        if isinstance(event, IntentRequest):
            return self.on_intent(context, event)
        if isinstance(event, SessionEnded):
            self.on_session_ended(context, event)
            return None
        raise TypeError(f"Unsupported event type: {type(event).__name__}")

    def on_session_started(self, context: SessionContext, event: SessionStarted) -> None:
        logger.info(f"onSessionStarted requestId={event.request_id}, sessionId={context.session_id}")
        context.registry = self.registry_loader.load()

    def on_launch(self, context: SessionContext, event: LaunchRequest) -> SpeechResponse:
        logger.info(f"onLaunch requestId={event.request_id}, sessionId={context.session_id}")
        return welcome_response()

    def on_intent(self, context: SessionContext, event: IntentRequest) -> SpeechResponse:
        logger.info(f"onIntent requestId={event.request_id}, sessionId={context.session_id}, "
                    f"intent={event.intent_name}")

        intent_name = INTENT_ALIASES.get(event.intent_name, event.intent_name)

        if intent_name == INTENT_GET_HEADLINES:
            return self.get_headlines(context, event)
        elif intent_name == INTENT_HELP:
            return help_response()
        elif intent_name in (INTENT_STOP, INTENT_CANCEL):
            return goodbye_response()
        else:
            raise UnknownIntentError(event.intent_name)

    def on_session_ended(self, context: SessionContext, event: SessionEnded) -> None:
        logger.info(f"onSessionEnded requestId={event.request_id}, sessionId={context.session_id}, "
                    f"reason={event.reason}")

    def get_headlines(self, context: SessionContext, event: IntentRequest) -> SpeechResponse:
        """Resolve the requested site, fetch its feed and read the headlines."""
        site_name = event.slot_value(SLOT_SITE)
        if site_name is None:
            logger.info("GetHeadlines received without a site name")
            return missing_site_response()

        site_url = self._registry_for(context).resolve(site_name)
        if site_url is None:
            logger.info(f"Site '{site_name}' is not supported")
            return unsupported_response()

        logger.info(f"handleHeadlinesRequest siteUrl={site_url}")
        try:
            headlines = self.feed_parser.fetch_headlines(site_url, site_name)
        except FeedFetchError as e:
            logger.error(f"Headlines unavailable for '{site_name}': {e}", extra={'error': e.to_dict()})
            if self.propagate_feed_errors:
                raise
            return feed_unavailable_response(site_name)

        for headline in headlines:
            logger.debug(headline.title)

        return headlines_response(site_name, headlines)

    def _registry_for(self, context: SessionContext) -> SiteRegistry:
        if context.registry is None:
            logger.info(f"No registry for session {context.session_id}; loading on first use")
            context.registry = self.registry_loader.load()
        return context.registry

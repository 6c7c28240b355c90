#!/usr/bin/env python3
"""
Formatting utilities for spoken responses.

Builds the SSML read back to the user and the plain-text renderings used by
cards and the command line.
"""

from html import escape
from typing import List, Optional

from .models.headline import Headline
from .models.speech import OutputSpeech, PlainText, SimpleCard, SpeechResponse, Ssml

WELCOME_TEXT = "What sites would you like headlines for?"
WELCOME_REPROMPT_TEXT = (
    "With headlines grabber, you can ask for the headlines of various sites. "
    "For example, you could say get me the headlines for The New York Times. "
    "Now, which site do you want to hear from?"
)
HELP_TEXT = "You can ask for the headlines for supported sites, such as from the New York Times"
REPROMPT_TEXT = "Which site would you like to hear from?"
UNSUPPORTED_TEXT = (
    "Sorry, the site you have requested is not currently supported. "
    "If you would like to request support, please notify the developer of this skill."
)
FEED_UNAVAILABLE_TEXT = "Sorry, I couldn't get the headlines from {site} right now. Please try again later."
MISSING_SITE_TEXT = "I didn't catch the site name. Which site would you like to hear from?"
GOODBYE_TEXT = "Goodbye"

CARD_TITLE = "Headlines from {site}"


def _speak(body: str) -> str:
    return f"<speak>{body}</speak>"


def _xml(text: str) -> str:
    return escape(text, quote=False)


def render_headlines(site_name: str, headlines: List[Headline]) -> str:
    """
    Render headlines as one SSML document.

    An introductory sentence naming the site is followed by one paragraph per
    headline, in the order given.
    """
    parts = [f"Here are your headlines from {_xml(site_name)}"]
    for headline in headlines:
        parts.append(f"<p>{_xml(headline.title)}</p>")
    return _speak("".join(parts))


def render_unsupported() -> str:
    """Render the apology for a site that is not in the registry."""
    return _speak(UNSUPPORTED_TEXT)


def render_feed_unavailable(site_name: str) -> str:
    """Render the apology for a feed that could not be fetched."""
    return _speak(_xml(FEED_UNAVAILABLE_TEXT.format(site=site_name)))


def render_card(site_name: str, headlines: List[Headline]) -> SimpleCard:
    """Render headlines as a companion-app card."""
    content = "\n".join(f"• {headline.title}" for headline in headlines)
    return SimpleCard(title=CARD_TITLE.format(site=site_name), content=content)


def format_headline(headline: Headline, timezone_name: str = "UTC") -> str:
    """Format a single headline for terminal display."""
    published = headline.published_in(timezone_name)
    timestamp = published.strftime("%Y-%m-%d %H:%M") if published else "unknown time"
    return f"[{timestamp}] {headline.title}\n    {headline.link}\n"


def new_ask_response(output: OutputSpeech, reprompt: OutputSpeech,
                     card: Optional[SimpleCard] = None) -> SpeechResponse:
    """Wrap output and reprompt into a response that keeps the session open."""
    return SpeechResponse.ask(output, reprompt, card=card)


def new_tell_response(output: OutputSpeech) -> SpeechResponse:
    """Wrap output into a response that ends the session."""
    return SpeechResponse.tell(output)


def welcome_response() -> SpeechResponse:
    return new_ask_response(PlainText(WELCOME_TEXT), PlainText(WELCOME_REPROMPT_TEXT))


def help_response() -> SpeechResponse:
    return new_ask_response(PlainText(HELP_TEXT), PlainText(REPROMPT_TEXT))


def goodbye_response() -> SpeechResponse:
    return new_tell_response(PlainText(GOODBYE_TEXT))


def missing_site_response() -> SpeechResponse:
    return new_ask_response(PlainText(MISSING_SITE_TEXT), PlainText(REPROMPT_TEXT))


def headlines_response(site_name: str, headlines: List[Headline]) -> SpeechResponse:
    return new_ask_response(
        Ssml(render_headlines(site_name, headlines)),
        PlainText(REPROMPT_TEXT),
        card=render_card(site_name, headlines)
    )


def unsupported_response() -> SpeechResponse:
    return new_ask_response(Ssml(render_unsupported()), PlainText(REPROMPT_TEXT))


def feed_unavailable_response(site_name: str) -> SpeechResponse:
    return new_ask_response(Ssml(render_feed_unavailable(site_name)), PlainText(REPROMPT_TEXT))

#!/usr/bin/env python3
"""
Core data models for the headlines skill.
"""

from .headline import Headline
from .speech import PlainText, Ssml, OutputSpeech, SimpleCard, SpeechResponse
from .events import SessionStarted, LaunchRequest, IntentRequest, SessionEnded, Event, SessionContext

__all__ = [
    'Headline', 'PlainText', 'Ssml', 'OutputSpeech', 'SimpleCard', 'SpeechResponse',
    'SessionStarted', 'LaunchRequest', 'IntentRequest', 'SessionEnded', 'Event', 'SessionContext'
]

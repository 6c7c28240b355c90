#!/usr/bin/env python3
"""
Alexa integration for the headlines skill.

Translates the platform's JSON request envelope into skill events, keeps one
SessionContext per live session, and serializes responses back into the
platform's JSON response envelope.
"""

import logging
import threading
import time
from typing import Any, Dict, Optional

from headlines.exceptions import InvalidApplicationError, InvalidRequestError
from headlines.models.events import (
    Event,
    IntentRequest,
    LaunchRequest,
    SessionContext,
    SessionEnded,
    SessionStarted,
)
from headlines.models.speech import SpeechResponse

logger = logging.getLogger(__name__)

RESPONSE_VERSION = "1.0"
DEFAULT_MAX_SESSIONS = 1000
DEFAULT_IDLE_TIMEOUT = 3600


class SessionStore:
    """
    In-process contexts for live sessions, keyed by session id.

    Sessions the platform abandons without a SessionEndedRequest are dropped
    once idle for ``idle_timeout`` seconds, and the least recently used ones
    are evicted when more than ``max_sessions`` are live.
    """

    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS,
                 idle_timeout: int = DEFAULT_IDLE_TIMEOUT):
        self.max_sessions = max_sessions
        self.idle_timeout = idle_timeout
        self._contexts: Dict[str, SessionContext] = {}
        self._last_seen: Dict[str, float] = {}
        self._lock = threading.Lock()

    def open(self, session_id: str, application_id: Optional[str] = None,
             attributes: Optional[Dict[str, Any]] = None) -> SessionContext:
        """Create a fresh context, replacing any stale one with the same id."""
        context = SessionContext(
            session_id=session_id,
            application_id=application_id,
            attributes=dict(attributes or {})
        )
        with self._lock:
            self._contexts[session_id] = context
            self._last_seen[session_id] = time.time()
            self._evict()
        return context

    def get_or_open(self, session_id: str, application_id: Optional[str] = None,
                    attributes: Optional[Dict[str, Any]] = None) -> SessionContext:
        """Return the live context for a session, creating one if needed."""
        with self._lock:
            self._evict()
            context = self._contexts.get(session_id)
            if context is not None:
                self._last_seen[session_id] = time.time()
        if context is None:
            logger.debug(f"No live context for session {session_id}; opening one")
            return self.open(session_id, application_id, attributes)
        if attributes:
            context.attributes.update(attributes)
        return context

    def _evict(self) -> None:
        """Drop idle contexts, then the least recently used ones over the bound."""
        now = time.time()
        expired = [sid for sid, seen in self._last_seen.items() if now - seen > self.idle_timeout]
        overflow = len(self._contexts) - len(expired) - self.max_sessions
        if overflow > 0:
            live = sorted((seen, sid) for sid, seen in self._last_seen.items() if sid not in expired)
            expired.extend(sid for _, sid in live[:overflow])

        for session_id in expired:
            self._contexts.pop(session_id, None)
            self._last_seen.pop(session_id, None)
        if expired:
            logger.debug(f"Evicted {len(expired)} session contexts")

    def close(self, session_id: str) -> None:
        with self._lock:
            self._contexts.pop(session_id, None)
            self._last_seen.pop(session_id, None)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._contexts

    def __len__(self) -> int:
        with self._lock:
            return len(self._contexts)


def parse_event(request: Dict[str, Any]) -> Event:
    """
    Build a skill event from the envelope's ``request`` object.

    Raises:
        InvalidRequestError: If the request type is unsupported or fields are missing
    """
    request_type = request.get('type')
    request_id = request.get('requestId')
    if not request_id:
        raise InvalidRequestError("missing requestId", request_type)

    if request_type == 'LaunchRequest':
        return LaunchRequest(request_id=request_id)

    if request_type == 'IntentRequest':
        intent = request.get('intent') or {}
        intent_name = intent.get('name')
        if not intent_name:
            raise InvalidRequestError("intent request without intent name", request_type)
        slots = {
            name: (slot or {}).get('value')
            for name, slot in (intent.get('slots') or {}).items()
        }
        return IntentRequest(request_id=request_id, intent_name=intent_name, slots=slots)

    if request_type == 'SessionEndedRequest':
        return SessionEnded(request_id=request_id, reason=request.get('reason'))

    raise InvalidRequestError(f"unsupported request type {request_type}", request_type)


def build_response_envelope(response: Optional[SpeechResponse],
                            session_attributes: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Serialize a speech response into the platform's response envelope."""
    return {
        'version': RESPONSE_VERSION,
        'sessionAttributes': dict(session_attributes or {}),
        'response': response.to_dict() if response is not None else {}
    }


class AlexaRequestHandler:
    """Routes platform request envelopes through the headlines skill."""

    def __init__(self, skill, skill_id: Optional[str] = None, sessions: Optional[SessionStore] = None):
        """
        Initialize handler.

        Args:
            skill: HeadlinesSkill instance
            skill_id: Expected application id; requests for other ids are rejected
            sessions: Session store (a private one is created if omitted)
        """
        self.skill = skill
        self.skill_id = skill_id
        self.sessions = sessions if sessions is not None else SessionStore()

    def handle(self, envelope: Dict[str, Any]) -> Dict[str, Any]:
        """
        Handle one request envelope.

        Returns:
            Response envelope

        Raises:
            InvalidRequestError: If the envelope is malformed or for another skill
            RegistryLoadError: If the session's registry cannot be loaded
            UnknownIntentError: If the intent is not handled by this skill
        """
        if not isinstance(envelope, dict):
            raise InvalidRequestError("request envelope must be a JSON object")

        session = envelope.get('session')
        request = envelope.get('request')
        if not isinstance(session, dict) or not isinstance(request, dict):
            raise InvalidRequestError("request envelope requires session and request objects",
                                      request.get('type') if isinstance(request, dict) else None)

        session_id = session.get('sessionId')
        if not session_id:
            raise InvalidRequestError("missing sessionId", request.get('type'))

        application_id = (session.get('application') or {}).get('applicationId')
        self._verify_application(application_id)

        event = parse_event(request)
        attributes = session.get('attributes') or {}

        if session.get('new'):
            context = self.sessions.open(session_id, application_id, attributes)
            try:
                self.skill.dispatch(context, SessionStarted(request_id=event.request_id))
            except Exception:
                self.sessions.close(session_id)
                raise
        else:
            context = self.sessions.get_or_open(session_id, application_id, attributes)

        try:
            response = self.skill.dispatch(context, event)
        finally:
            if isinstance(event, SessionEnded):
                self.sessions.close(session_id)

        if response is not None and response.should_end_session:
            self.sessions.close(session_id)

        return build_response_envelope(response, context.attributes)

    def _verify_application(self, application_id: Optional[str]) -> None:
        if self.skill_id and application_id != self.skill_id:
            logger.warning(f"Rejected request for application {application_id}")
            raise InvalidApplicationError(application_id, self.skill_id)


_handler: Optional[AlexaRequestHandler] = None
_handler_lock = threading.Lock()


def get_request_handler() -> AlexaRequestHandler:
    """Get the process-wide request handler built from the service container."""
    global _handler
    if _handler is None:
        with _handler_lock:
            if _handler is None:
                from headlines.container import get_config, get_skill
                config = get_config()
                skill_id = config.alexa.skill_id if config.verifies_skill_id() else None
                _handler = AlexaRequestHandler(get_skill(), skill_id=skill_id)
    return _handler


def reset_request_handler() -> None:
    """Drop the process-wide handler (useful for testing)."""
    global _handler
    with _handler_lock:
        _handler = None


def lambda_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """Serverless entry point; errors propagate to the host runtime."""
    try:
        return get_request_handler().handle(event)
    except Exception as e:
        logger.error(f"Request failed: {e}", exc_info=True)
        raise

#!/usr/bin/env python3
"""
Platform event variants and per-session context.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Any, Optional, Union

if TYPE_CHECKING:
    from ..sources.registry import SiteRegistry


@dataclass(frozen=True)
class SessionStarted:
    request_id: str


@dataclass(frozen=True)
class LaunchRequest:
    request_id: str


@dataclass(frozen=True)
class IntentRequest:
    request_id: str
    intent_name: str
    slots: Dict[str, Optional[str]] = field(default_factory=dict)

    def slot_value(self, name: str) -> Optional[str]:
        """Return a slot's spoken value, or None when absent or blank."""
        value = self.slots.get(name)
        if value is None or not str(value).strip():
            return None
        return str(value).strip()


@dataclass(frozen=True)
class SessionEnded:
    request_id: str
    reason: Optional[str] = None


Event = Union[SessionStarted, LaunchRequest, IntentRequest, SessionEnded]


@dataclass
class SessionContext:
    """
    State owned by one platform session, including its site registry.
    """
    session_id: str
    registry: Optional["SiteRegistry"] = None
    application_id: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

#!/usr/bin/env python3
"""
Speech response models.

Output speech is either plain text or SSML.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional, Union


@dataclass(frozen=True)
class PlainText:
    """Spoken plain text."""
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'PlainText', 'text': self.text}


@dataclass(frozen=True)
class Ssml:
    """Spoken SSML markup, including the enclosing <speak> element."""
    ssml: str

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'SSML', 'ssml': self.ssml}


OutputSpeech = Union[PlainText, Ssml]


@dataclass(frozen=True)
class SimpleCard:
    """Title and body shown in the companion app."""
    title: str
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'Simple', 'title': self.title, 'content': self.content}


@dataclass(frozen=True)
class SpeechResponse:
    """
    Response returned to the voice platform.

    Use ``ask`` for responses that keep the session open and ``tell`` for
    terminal ones; an ask response always carries a reprompt.
    """
    output_speech: OutputSpeech
    reprompt: Optional[OutputSpeech] = None
    should_end_session: bool = True
    card: Optional[SimpleCard] = None

    def __post_init__(self):
        if not self.should_end_session and self.reprompt is None:
            raise ValueError("an ask response requires a reprompt")
        if self.should_end_session and self.reprompt is not None:
            raise ValueError("a tell response cannot carry a reprompt")

    @classmethod
    def ask(cls, output_speech: OutputSpeech, reprompt: OutputSpeech,
            card: Optional[SimpleCard] = None) -> 'SpeechResponse':
        """Build a response that keeps the session open and arms a reprompt."""
        return cls(output_speech=output_speech, reprompt=reprompt, should_end_session=False, card=card)

    @classmethod
    def tell(cls, output_speech: OutputSpeech, card: Optional[SimpleCard] = None) -> 'SpeechResponse':
        """Build a terminal response that closes the session."""
        return cls(output_speech=output_speech, reprompt=None, should_end_session=True, card=card)

    @property
    def is_ask(self) -> bool:
        return not self.should_end_session

    def to_dict(self) -> Dict[str, Any]:
        """Serialize into the platform's ``response`` object."""
        payload: Dict[str, Any] = {
            'outputSpeech': self.output_speech.to_dict(),
            'shouldEndSession': self.should_end_session
        }
        if self.reprompt is not None:
            payload['reprompt'] = {'outputSpeech': self.reprompt.to_dict()}
        if self.card is not None:
            payload['card'] = self.card.to_dict()
        return payload

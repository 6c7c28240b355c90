#!/usr/bin/env python3
"""
Skill command endpoints for replaying platform requests locally.
"""

import json
import logging
import uuid
from argparse import Namespace
from typing import Any, Dict, List, Optional

from .base import BaseCommand
from integrations.alexa import AlexaRequestHandler

logger = logging.getLogger(__name__)


def build_envelope(request: Dict[str, Any], session_id: str, new: bool,
                   application_id: Optional[str] = None) -> Dict[str, Any]:
    """Wrap a request object in a minimal platform envelope."""
    return {
        'version': '1.0',
        'session': {
            'new': new,
            'sessionId': session_id,
            'application': {'applicationId': application_id},
            'attributes': {}
        },
        'request': request
    }


class SkillCommand(BaseCommand):
    """Run platform requests through the skill without a device."""

    SUBCOMMANDS = ['invoke']

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute skill subcommand."""
        try:
            if subcommand == "invoke":
                return self.invoke(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except Exception as e:
            return self.handle_error(e, f"skill {subcommand}")

    def invoke(self, args: Namespace) -> int:
        """Send a request file, or a launch/intent built from flags, and print the responses."""
        handler = AlexaRequestHandler(self.skill, skill_id=self.config.alexa.skill_id)
        envelopes = self._load_envelopes(args)

        for envelope in envelopes:
            response = handler.handle(envelope)
            print(json.dumps(response, ensure_ascii=False, indent=2))

        return 0

    def _load_envelopes(self, args: Namespace) -> List[Dict[str, Any]]:
        if args.request:
            with open(args.request, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return data if isinstance(data, list) else [data]

        session_id = f"SessionId.{uuid.uuid4()}"
        application_id = self.config.alexa.skill_id

        if args.intent:
            slots = {}
            if args.site:
                slots['Site'] = {'name': 'Site', 'value': args.site}
            request = {
                'type': 'IntentRequest',
                'requestId': f"EdwRequestId.{uuid.uuid4()}",
                'intent': {'name': args.intent, 'slots': slots}
            }
        else:
            request = {
                'type': 'LaunchRequest',
                'requestId': f"EdwRequestId.{uuid.uuid4()}"
            }

        return [build_envelope(request, session_id, new=True, application_id=application_id)]

#!/usr/bin/env python3
"""
Voice platform integrations.
"""

from .alexa import AlexaRequestHandler, SessionStore, lambda_handler

__all__ = ['AlexaRequestHandler', 'SessionStore', 'lambda_handler']

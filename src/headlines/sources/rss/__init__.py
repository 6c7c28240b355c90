#!/usr/bin/env python3
"""
RSS feed retrieval.
"""

from .parser import RSSParser

__all__ = ['RSSParser']

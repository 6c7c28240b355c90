#!/usr/bin/env python3
"""
Headline data model.

Represents a single feed item as read out by the skill.
"""

from datetime import datetime
from typing import Dict, Any, Optional
from dataclasses import dataclass

import pytz


@dataclass
class Headline:
    """
    A single headline from a site's feed.

    Only ``title`` is spoken; the remaining fields are kept for cards and
    the command line.
    """
    title: str
    link: str = ""
    published: Optional[datetime] = None
    summary: str = ""
    source: str = ""

    def __post_init__(self):
        """Clean data after initialization."""
        self.title = (self.title or "").strip()
        self.link = (self.link or "").strip()
        self.summary = (self.summary or "").strip()
        self.source = (self.source or "").strip()

        if self.published is not None and self.published.tzinfo is None:
            self.published = pytz.utc.localize(self.published)

    def published_in(self, timezone_name: str) -> Optional[datetime]:
        """Return the publish time converted to the given timezone."""
        if self.published is None:
            return None
        return self.published.astimezone(pytz.timezone(timezone_name))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'title': self.title,
            'link': self.link,
            'published': self.published.isoformat() if self.published else None,
            'summary': self.summary,
            'source': self.source
        }

    def __repr__(self):
        return f"Headline(title='{self.title[:50]}', source='{self.source}')"

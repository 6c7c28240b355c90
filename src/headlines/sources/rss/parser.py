#!/usr/bin/env python3
"""
RSS parser for site feeds.

Fetches a feed over HTTP and turns its entries into Headline objects in the
order the feed lists them.
"""

import logging
from datetime import datetime
from typing import Any, List, Optional

import feedparser
import pytz
import requests
from dateutil import parser as date_parser

from ...exceptions import FeedFetchError
from ...models.headline import Headline

logger = logging.getLogger(__name__)


class RSSParser:
    """Generic RSS/Atom feed parser."""

    def __init__(self, timeout: int = 10, user_agent: str = 'Mozilla/5.0 (compatible; HeadlinesGrabber/1.0)',
                 session: Optional[requests.Session] = None):
        """
        Initialize RSS parser.

        Args:
            timeout: Request timeout in seconds
            user_agent: User-Agent header sent with feed requests
            session: Optional requests session (injected in tests)
        """
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': user_agent
        })

    def fetch_feed(self, url: str) -> feedparser.FeedParserDict:
        """
        Fetch and parse a feed from URL.

        Args:
            url: Feed URL

        Returns:
            Parsed feed object

        Raises:
            FeedFetchError: If the feed cannot be downloaded or parsed
        """
        try:
            logger.info(f"Fetching feed from: {url}")
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to fetch feed {url}: {e}")
            raise FeedFetchError(url, e) from e

        feed = feedparser.parse(response.content)

        if feed.bozo:
            if not feed.entries:
                logger.error(f"Feed at {url} could not be parsed: {feed.bozo_exception}")
                raise FeedFetchError(url, feed.bozo_exception)
            logger.warning(f"Feed parsing warning for {url}: {feed.bozo_exception}")

        return feed

    def parse_entries(self, feed: feedparser.FeedParserDict, source_name: str = "") -> List[Headline]:
        """
        Parse entries from a feed into Headline objects.

        Args:
            feed: Parsed feed object
            source_name: Name of the site the feed belongs to

        Returns:
            List of headlines in feed order
        """
        headlines = []
        entries = getattr(feed, 'entries', [])

        logger.info(f"Found {len(entries)} entries in {source_name or 'feed'}")

        for entry in entries:
            headlines.append(Headline(
                title=getattr(entry, 'title', ''),
                link=getattr(entry, 'link', ''),
                published=self._parse_published_date(entry),
                summary=getattr(entry, 'summary', ''),
                source=source_name
            ))

        return headlines

    def fetch_headlines(self, url: str, source_name: str = "") -> List[Headline]:
        """
        Fetch a feed and return its headlines.

        Args:
            url: Feed URL
            source_name: Name of the site the feed belongs to

        Returns:
            List of headlines in feed order

        Raises:
            FeedFetchError: If the feed cannot be downloaded or parsed
        """
        feed = self.fetch_feed(url)
        return self.parse_entries(feed, source_name)

    def _parse_published_date(self, entry: Any) -> Optional[datetime]:
        """Parse published date from feed entry, normalized to UTC."""
        for field in ['published', 'updated', 'created']:
            date_str = getattr(entry, field, None)
            if not date_str:
                continue
            try:
                dt = date_parser.parse(date_str)
            except (ValueError, OverflowError) as e:
                logger.debug(f"Failed to parse date '{date_str}': {e}")
                continue

            if dt.tzinfo is None:
                # Assume UTC if no timezone info
                dt = pytz.utc.localize(dt)
            return dt.astimezone(pytz.utc)

        parsed = getattr(entry, 'published_parsed', None)
        if parsed:
            try:
                return pytz.utc.localize(datetime(*parsed[:6]))
            except (TypeError, ValueError) as e:
                logger.debug(f"Failed to parse published_parsed: {e}")

        return None

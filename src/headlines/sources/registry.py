#!/usr/bin/env python3
"""
Site registry mapping spoken site names to feed URLs.

Keys are normalized identically at registration and at lookup.
"""

import logging
from typing import Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


def normalize_site_name(name: Optional[str]) -> str:
    """Normalize a site name for use as a registry key."""
    return (name or "").strip().lower()


class SiteRegistry:
    """Lookup table from site name to feed URL for one session."""

    def __init__(self, sites: Optional[Dict[str, str]] = None, source: str = "memory"):
        """
        Initialize registry.

        Args:
            sites: Optional initial mapping of site name to feed URL
            source: Where the entries came from ("remote", "local", ...)
        """
        self._sites: Dict[str, str] = {}
        self.source = source
        for name, url in (sites or {}).items():
            self.register_site(name, url)

    def register_site(self, name: str, feed_url: str) -> None:
        """
        Register a site, replacing any previous URL for the same name.

        Args:
            name: Site name as authored
            feed_url: Feed URL for the site
        """
        key = normalize_site_name(name)
        if key in self._sites and self._sites[key] != feed_url:
            logger.debug(f"Overriding feed URL for site '{key}'")
        self._sites[key] = feed_url

    def resolve(self, raw_site_name: Optional[str]) -> Optional[str]:
        """
        Resolve a spoken site name to its feed URL.

        Returns:
            The feed URL, or None when the site is not supported
        """
        key = normalize_site_name(raw_site_name)
        if not key:
            return None
        return self._sites.get(key)

    def list_available_sites(self) -> List[str]:
        """Get sorted list of supported site names."""
        return sorted(self._sites.keys())

    def to_dict(self) -> Dict[str, str]:
        return dict(self._sites)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_site_name(name) in self._sites

    def __len__(self) -> int:
        return len(self._sites)

    def __iter__(self) -> Iterator[str]:
        return iter(self._sites)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SiteRegistry):
            return NotImplemented
        return self._sites == other._sites

    def __repr__(self):
        return f"SiteRegistry(sites={len(self._sites)}, source='{self.source}')"

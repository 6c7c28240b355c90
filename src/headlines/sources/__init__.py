#!/usr/bin/env python3
"""
Feed sources for the headlines skill.

The registry maps spoken site names to feed URLs; the loader builds it from
the remote or packaged ``rss.csv``.
"""

from .registry import SiteRegistry, normalize_site_name
from .loader import RegistryLoader, parse_registry_lines

__all__ = ['SiteRegistry', 'normalize_site_name', 'RegistryLoader', 'parse_registry_lines']

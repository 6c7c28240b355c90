#!/usr/bin/env python3
"""
Headlines Grabber voice skill.

Reads the latest headlines of a spoken site name from that site's feed.
"""

__version__ = "1.0.0"

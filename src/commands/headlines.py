#!/usr/bin/env python3
"""
Headlines command endpoints for fetching a site's feed from the terminal.
"""

import json
import logging
from argparse import Namespace

from .base import BaseCommand
from headlines.formatters import format_headline, render_headlines

logger = logging.getLogger(__name__)


class HeadlinesCommand(BaseCommand):
    """Fetch and display headlines for a site."""

    SUBCOMMANDS = ['get']

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute headlines subcommand."""
        try:
            if subcommand == "get":
                return self.get(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except Exception as e:
            return self.handle_error(e, f"headlines {subcommand}")

    def get(self, args: Namespace) -> int:
        """Resolve a site and print its current headlines."""
        registry = self.registry_loader.load()
        url = registry.resolve(args.site)
        if url is None:
            print(f"❌ '{args.site}' is not a supported site")
            return 1

        headlines = self.feed_parser.fetch_headlines(url, args.site)
        if args.limit:
            headlines = headlines[:args.limit]

        if args.format == 'json':
            print(json.dumps([headline.to_dict() for headline in headlines], ensure_ascii=False, indent=2))
        elif args.format == 'ssml':
            print(render_headlines(args.site, headlines))
        else:
            print(f"\n=== Headlines from {args.site} ({len(headlines)}) ===")
            for headline in headlines:
                print(format_headline(headline, self.config.app.display_timezone))

        return 0

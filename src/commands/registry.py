#!/usr/bin/env python3
"""
Registry command endpoints for inspecting the supported sites.
"""

import logging
from argparse import Namespace

from .base import BaseCommand

logger = logging.getLogger(__name__)


class RegistryCommand(BaseCommand):
    """Inspect the site registry."""

    SUBCOMMANDS = ['list', 'resolve']

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute registry subcommand."""
        try:
            if subcommand == "list":
                return self.list_sites(args)
            elif subcommand == "resolve":
                return self.resolve(args)
            else:
                available = ", ".join(self.get_available_subcommands())
                self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
                return 1

        except Exception as e:
            return self.handle_error(e, f"registry {subcommand}")

    def list_sites(self, args: Namespace) -> int:
        """Load the registry and print every supported site."""
        registry = self.registry_loader.load()
        sites = registry.to_dict()

        print(f"\n=== Supported Sites ({len(sites)}, from {registry.source} registry) ===")
        for name in registry.list_available_sites():
            print(f"  • {name}: {sites[name]}")

        return 0

    def resolve(self, args: Namespace) -> int:
        """Resolve one spoken site name to its feed URL."""
        registry = self.registry_loader.load()
        url = registry.resolve(args.site)

        if url is None:
            print(f"❌ '{args.site}' is not a supported site")
            return 1

        print(f"✅ {args.site} -> {url}")
        return 0

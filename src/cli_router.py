#!/usr/bin/env python3
"""
CLI Router for the headlines skill.

Developer entry point for inspecting the registry, fetching feeds and
replaying platform requests without a device.
"""

import argparse
import logging
import sys
from typing import Dict, Optional, List

from commands import get_command, COMMANDS
from headlines.config import get_config_manager
from headlines.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class CLIRouter:
    """
    CLI router for headlines skill commands.

    Command structure:
    - python run.py registry list
    - python run.py registry resolve "bbc news"
    - python run.py headlines get npr --limit 5
    - python run.py skill invoke --intent GetHeadlines --site npr
    """

    def __init__(self, container=None):
        """Initialize CLI router."""
        self._command_parsers: Dict[str, argparse.ArgumentParser] = {}
        self.parser = self._create_parser()
        self._container = container

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser."""
        parser = argparse.ArgumentParser(
            description="Headlines Grabber voice skill",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_examples_text()
        )

        subparsers = parser.add_subparsers(
            dest='command',
            help='Available commands',
            metavar='{command}'
        )

        self._add_registry_parser(subparsers)
        self._add_headlines_parser(subparsers)
        self._add_skill_parser(subparsers)

        return parser

    def _add_registry_parser(self, subparsers):
        """Add registry command parser."""
        registry_parser = subparsers.add_parser(
            'registry',
            help='Inspect the supported sites'
        )
        self._command_parsers['registry'] = registry_parser

        registry_subparsers = registry_parser.add_subparsers(
            dest='subcommand',
            help='Registry operations',
            metavar='{list,resolve}'
        )

        registry_subparsers.add_parser('list', help='List supported sites and their feeds')

        resolve_parser = registry_subparsers.add_parser('resolve', help='Resolve a site name to its feed URL')
        resolve_parser.add_argument('site', help='Site name as it would be spoken')

    def _add_headlines_parser(self, subparsers):
        """Add headlines command parser."""
        headlines_parser = subparsers.add_parser(
            'headlines',
            help="Fetch a site's headlines"
        )
        self._command_parsers['headlines'] = headlines_parser

        headlines_subparsers = headlines_parser.add_subparsers(
            dest='subcommand',
            help='Headlines operations',
            metavar='{get}'
        )

        get_parser = headlines_subparsers.add_parser('get', help='Fetch and print headlines for a site')
        get_parser.add_argument('site', help='Site name as it would be spoken')
        get_parser.add_argument('--limit', type=int, default=0, help='Show at most N headlines (default: all)')
        get_parser.add_argument('--format', choices=['text', 'json', 'ssml'], default='text', help='Output format')

    def _add_skill_parser(self, subparsers):
        """Add skill command parser."""
        skill_parser = subparsers.add_parser(
            'skill',
            help='Run platform requests through the skill'
        )
        self._command_parsers['skill'] = skill_parser

        skill_subparsers = skill_parser.add_subparsers(
            dest='subcommand',
            help='Skill operations',
            metavar='{invoke}'
        )

        invoke_parser = skill_subparsers.add_parser('invoke', help='Send a request and print the response')
        source = invoke_parser.add_mutually_exclusive_group()
        source.add_argument('--request', help='JSON file holding one request envelope or a list of them')
        source.add_argument('--intent', help='Intent name to send (default: a launch request)')
        invoke_parser.add_argument('--site', help='Value of the Site slot for --intent')

    def _get_examples_text(self) -> str:
        """Get examples text for help."""
        return """
Examples:
  python run.py registry list
  python run.py registry resolve "The New York Times"
  python run.py headlines get npr --limit 5
  python run.py headlines get bbc --format ssml
  python run.py skill invoke
  python run.py skill invoke --intent GetHeadlines --site "hacker news"
  python run.py skill invoke --request session.json
"""

    def route_command(self, args: Optional[List[str]] = None) -> int:
        """
        Route command to appropriate handler.

        Args:
            args: Command line arguments (uses sys.argv if None)

        Returns:
            Exit code
        """
        try:
            if args is None:
                args = sys.argv[1:]

            parsed_args = self.parser.parse_args(args)

            if not parsed_args.command:
                self.parser.print_help()
                return 1

            return self._handle_command(parsed_args)

        except SystemExit as e:
            # argparse calls sys.exit() on error or help
            return e.code if e.code is not None else 0

    def _handle_command(self, args: argparse.Namespace) -> int:
        """Handle command structure."""
        logger.debug(f"Handling command: {args.command}")

        if args.command not in COMMANDS:
            available = ', '.join(COMMANDS.keys())
            logger.error(f"Unknown command '{args.command}'. Available: {available}")
            return 1

        subcommand = getattr(args, 'subcommand', None)
        if not subcommand:
            logger.error(f"No subcommand specified for '{args.command}'")
            self._command_parsers[args.command].print_help()
            return 1

        command = get_command(args.command, self._container)
        return command.execute(subcommand, args)


def main(args: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    try:
        get_config_manager().update_logging()
    except ConfigurationError as e:
        logger.error(str(e))
        return 78

    router = CLIRouter()
    return router.route_command(args)


if __name__ == '__main__':
    sys.exit(main())

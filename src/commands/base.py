#!/usr/bin/env python3
"""
Base command class for the modular command architecture.

Provides common functionality and interface that all commands inherit.
Uses dependency injection for better testability.
"""

import logging
from abc import ABC, abstractmethod
from typing import List
from argparse import Namespace

from headlines.container import get_container
from headlines.exceptions import HeadlinesError

logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """
    Base class for all command endpoints.

    Provides access to the configured services and the shared error handling
    that every command uses.
    """

    def __init__(self, container=None):
        """
        Initialize base command with dependency injection container.

        Args:
            container: Optional container instance. If None, uses global container.
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self._container = container or get_container()

    @property
    def config(self):
        """Get configuration from container."""
        return self._container.get('config')

    @property
    def registry_loader(self):
        """Get registry loader from container."""
        return self._container.get('registry_loader')

    @property
    def feed_parser(self):
        """Get feed parser from container."""
        return self._container.get('feed_parser')

    @property
    def skill(self):
        """Get skill dispatcher from container."""
        return self._container.get('skill')

    @abstractmethod
    def execute(self, subcommand: str, args: Namespace) -> int:
        """
        Execute the command with given subcommand and arguments.

        Args:
            subcommand: The specific action to perform
            args: Parsed command line arguments

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        pass

    def get_available_subcommands(self) -> List[str]:
        """Get list of available subcommands for this command."""
        return list(getattr(self, 'SUBCOMMANDS', []))

    def handle_error(self, error: Exception, context: str = "") -> int:
        """
        Standard error handling for commands.

        Args:
            error: The exception that occurred
            context: Additional context about where the error occurred

        Returns:
            Appropriate exit code
        """
        error_msg = f"{context}: {error}" if context else str(error)

        if isinstance(error, HeadlinesError):
            # Expected failures do not need a traceback
            self.logger.error(error_msg, extra={'error': error.to_dict()})
        else:
            self.logger.error(error_msg, exc_info=True)

        if isinstance(error, KeyboardInterrupt):
            self.logger.info("Command interrupted by user")
            return 130
        elif isinstance(error, FileNotFoundError):
            return 2
        elif isinstance(error, PermissionError):
            return 13
        elif isinstance(error, ValueError):
            return 22
        else:
            return 1

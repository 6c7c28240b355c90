#!/usr/bin/env python3
"""
Standardized exception hierarchy for the headlines skill.

Provides specific exception types for registry loading, feed retrieval and
platform request handling, each carrying machine-readable error context.
"""

from typing import Optional, Dict, Any


class HeadlinesError(Exception):
    """Base exception for all headlines skill errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context
        }


# Registry-related exceptions
class RegistryLoadError(HeadlinesError):
    """Base exception for site registry loading failures."""
    pass


class RegistrySourceUnavailableError(RegistryLoadError):
    """Neither the remote nor the local registry source could be opened."""

    def __init__(self, remote_url: str, local_path: str, original_error: Exception):
        message = f"No registry source available (remote {remote_url}, local {local_path})"
        context = {
            'remote_url': remote_url,
            'local_path': local_path,
            'original_error': str(original_error)
        }
        super().__init__(message, error_code='NoSource', context=context)


class RegistryParseError(RegistryLoadError):
    """Registry content could not be read or contained a malformed line."""

    def __init__(self, source: str, reason: str, line_number: Optional[int] = None, line: Optional[str] = None):
        location = f" at line {line_number}" if line_number is not None else ""
        message = f"Failed to parse {source} registry{location}: {reason}"
        context = {
            'source': source,
            'reason': reason,
            'line_number': line_number,
            'line': line
        }
        super().__init__(message, error_code='ParseFailure', context=context)


# Feed-related exceptions
class FeedFetchError(HeadlinesError):
    """Feed could not be retrieved or parsed."""

    def __init__(self, url: str, original_error: Exception):
        message = f"Failed to fetch feed from {url}"
        context = {
            'url': url,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)
        self.original_error = original_error


# Dispatch-related exceptions
class UnknownIntentError(HeadlinesError):
    """Dispatcher received an intent it does not handle."""

    def __init__(self, intent_name: Optional[str]):
        message = f"Invalid Intent: {intent_name}"
        super().__init__(message, context={'intent_name': intent_name})
        self.intent_name = intent_name


class InvalidRequestError(HeadlinesError):
    """Platform request envelope is malformed or of an unsupported type."""

    def __init__(self, issue: str, request_type: Optional[str] = None):
        message = f"Invalid platform request: {issue}"
        context = {
            'issue': issue,
            'request_type': request_type
        }
        super().__init__(message, context=context)


class InvalidApplicationError(InvalidRequestError):
    """Request was addressed to a different skill id."""

    def __init__(self, application_id: Optional[str], expected_id: str):
        super().__init__(f"unexpected application id {application_id}")
        self.context.update({
            'application_id': application_id,
            'expected_id': expected_id
        })


# Configuration-related exceptions
class ConfigurationError(HeadlinesError):
    """Configuration is invalid or missing."""

    def __init__(self, config_key: str, issue: str):
        message = f"Configuration error for {config_key}: {issue}"
        context = {
            'config_key': config_key,
            'issue': issue
        }
        super().__init__(message, context=context)

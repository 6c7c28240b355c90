#!/usr/bin/env python3
"""
Centralized Configuration Manager

Provides a single source of truth for the skill's configuration,
including environment variables, .env defaults, and validation.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

import pytz

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_URL = "https://raw.githubusercontent.com/rezie/HeadlinesGrabber/master/rss.csv"
DEFAULT_REGISTRY_PATH = str(Path(__file__).parent / "data" / "rss.csv")
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; HeadlinesGrabber/1.0)"


@dataclass
class RegistryConfig:
    """Where the site registry is loaded from."""
    remote_url: str = DEFAULT_REGISTRY_URL
    local_path: str = DEFAULT_REGISTRY_PATH
    timeout: int = 5


@dataclass
class FeedConfig:
    """RSS feed retrieval settings."""
    timeout: int = 10
    user_agent: str = DEFAULT_USER_AGENT
    propagate_errors: bool = False


@dataclass
class AlexaConfig:
    """Voice platform settings."""
    skill_id: Optional[str] = None


@dataclass
class ApplicationConfig:
    """Core application configuration."""
    display_timezone: str = "UTC"

    # Logging
    log_level: str = "INFO"
    verbose_logging: bool = False


@dataclass
class Config:
    """Master configuration container."""
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    feeds: FeedConfig = field(default_factory=FeedConfig)
    alexa: AlexaConfig = field(default_factory=AlexaConfig)
    app: ApplicationConfig = field(default_factory=ApplicationConfig)

    def verifies_skill_id(self) -> bool:
        """Check if incoming requests must match a configured skill id."""
        return bool(self.alexa.skill_id)


class ConfigManager:
    """Manages application configuration with validation and environment loading."""

    def __init__(self, env_file_path: str = ".env"):
        """
        Initialize configuration manager.

        Args:
            env_file_path: Path to .env file relative to project root
        """
        self._config: Optional[Config] = None
        self._env_file_path = env_file_path
        self._load_environment()

    def _load_environment(self) -> None:
        """Load environment variables from .env file."""
        # src/headlines/config.py -> project root
        project_root = Path(__file__).parent.parent.parent
        env_path = project_root / self._env_file_path

        if env_path.exists():
            self._load_env_file(env_path)
        else:
            logger.debug(f"No .env file found at {env_path}")

    def _load_env_file(self, env_path: Path) -> None:
        """Load variables from .env file."""
        try:
            with open(env_path, 'r', encoding='utf-8') as f:
                lines = f.readlines()
        except OSError as e:
            logger.error(f"Error loading .env file {env_path}: {e}")
            return

        loaded_count = 0
        for line_num, line in enumerate(lines, 1):
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith('#'):
                continue

            if '=' not in line:
                logger.warning(f"Invalid .env format at line {line_num}: {line}")
                continue

            key, value = line.split('=', 1)
            key = key.strip()
            value = value.strip()

            if value[:1] in ('"', "'") and value[-1:] == value[:1]:
                value = value[1:-1]

            # Environment variables take precedence
            if key not in os.environ:
                os.environ[key] = value
                loaded_count += 1
                logger.debug(f"Loaded {key} from .env")
            else:
                logger.debug(f"Skipped {key} (already in environment)")

        logger.info(f"Loaded {loaded_count} variables from {env_path}")

    def get_config(self, force_reload: bool = False) -> Config:
        """
        Get application configuration.

        Args:
            force_reload: Force reloading configuration from environment

        Returns:
            Complete configuration object
        """
        if self._config is None or force_reload:
            self._config = self._build_config()
        return self._config

    def _build_config(self) -> Config:
        """Build configuration from environment variables."""
        registry_config = RegistryConfig(
            remote_url=os.getenv('HEADLINES_REGISTRY_URL', DEFAULT_REGISTRY_URL),
            local_path=os.getenv('HEADLINES_REGISTRY_PATH', DEFAULT_REGISTRY_PATH),
            timeout=self._get_int_env('REGISTRY_TIMEOUT', 5)
        )

        feed_config = FeedConfig(
            timeout=self._get_int_env('FEED_TIMEOUT', 10),
            user_agent=os.getenv('FEED_USER_AGENT', DEFAULT_USER_AGENT),
            propagate_errors=self._get_bool_env('HEADLINES_PROPAGATE_FEED_ERRORS', False)
        )

        alexa_config = AlexaConfig(
            skill_id=os.getenv('ALEXA_SKILL_ID') or None
        )

        app_config = ApplicationConfig(
            display_timezone=os.getenv('DISPLAY_TIMEZONE', 'UTC'),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            verbose_logging=self._get_bool_env('VERBOSE_LOGGING', False)
        )

        config = Config(
            registry=registry_config,
            feeds=feed_config,
            alexa=alexa_config,
            app=app_config
        )

        self._validate_config(config)
        return config

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer environment variable."""
        raw = os.getenv(key)
        if raw is None or raw == '':
            return default
        try:
            return int(raw)
        except ValueError:
            raise ConfigurationError(key, f"expected an integer, got {raw!r}")

    def _get_bool_env(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        raw = os.getenv(key)
        if raw is None or raw == '':
            return default
        return raw.strip().lower() in ['1', 'true', 'yes', 'on']

    def _validate_config(self, config: Config) -> None:
        """Validate configuration values."""
        errors = []

        if not config.registry.remote_url.startswith(('http://', 'https://')):
            errors.append(('HEADLINES_REGISTRY_URL', "must start with http:// or https://"))

        if config.registry.timeout < 1:
            errors.append(('REGISTRY_TIMEOUT', "must be at least 1 second"))

        if config.feeds.timeout < 1:
            errors.append(('FEED_TIMEOUT', "must be at least 1 second"))

        if config.app.display_timezone not in pytz.all_timezones_set:
            errors.append(('DISPLAY_TIMEZONE', f"unknown timezone {config.app.display_timezone}"))

        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if config.app.log_level not in valid_log_levels:
            errors.append(('LOG_LEVEL', f"must be one of: {', '.join(valid_log_levels)}"))

        if errors:
            key = errors[0][0]
            raise ConfigurationError(key, '; '.join(f"{k} {issue}" for k, issue in errors))

        logger.debug("Configuration validation passed")

    def update_logging(self) -> None:
        """Configure logging based on current configuration."""
        config = self.get_config()

        numeric_level = getattr(logging, config.app.log_level)
        logging.getLogger().setLevel(numeric_level)

        if config.app.verbose_logging:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
        else:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

        for handler in logging.getLogger().handlers:
            handler.setLevel(numeric_level)
            formatter = logging.Formatter(format_str, datefmt='%Y-%m-%d %H:%M:%S')
            handler.setFormatter(formatter)


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> Config:
    """Get application configuration."""
    return get_config_manager().get_config()


def reset_config() -> None:
    """Reset configuration manager (useful for testing)."""
    global _config_manager
    _config_manager = None

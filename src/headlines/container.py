#!/usr/bin/env python3
"""
Dependency Injection Container

Provides a centralized way to build the skill's services from configuration
instead of instantiating them throughout the codebase.
"""

import logging
from typing import Any, Dict, Callable, TypeVar, Optional, Set
import threading

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Container:
    """Simple dependency injection container with lifecycle management."""

    def __init__(self):
        """Initialize empty container."""
        self._factories: Dict[str, Callable] = {}
        self._singletons: Dict[str, Any] = {}
        self._singleton_names: Set[str] = set()
        self._lock = threading.RLock()

    def register_singleton(self, service_name: str, factory: Callable[[], T]) -> None:
        """
        Register a service as singleton (created once, reused).

        Args:
            service_name: Unique name for the service
            factory: Function that creates the service instance
        """
        with self._lock:
            self._singleton_names.add(service_name)
            self._factories[service_name] = factory
            # Remove any existing instance to force recreation
            self._singletons.pop(service_name, None)

    def register_factory(self, service_name: str, factory: Callable[[], T]) -> None:
        """
        Register a service as factory (new instance each time).

        Args:
            service_name: Unique name for the service
            factory: Function that creates service instances
        """
        with self._lock:
            self._singleton_names.discard(service_name)
            self._factories[service_name] = factory

    def register_instance(self, service_name: str, instance: T) -> None:
        """
        Register an existing instance as singleton.

        Args:
            service_name: Unique name for the service
            instance: Pre-created service instance
        """
        with self._lock:
            self._singletons[service_name] = instance

    def get(self, service_name: str) -> Any:
        """
        Get service instance by name.

        Raises:
            KeyError: If service is not registered
        """
        if service_name in self._singletons:
            return self._singletons[service_name]

        if service_name not in self._factories:
            raise KeyError(f"Service '{service_name}' not registered")

        with self._lock:
            factory = self._factories[service_name]

            if service_name in self._singleton_names:
                # Double-check after acquiring the lock
                if service_name not in self._singletons:
                    self._singletons[service_name] = factory()
                    logger.debug(f"Created singleton instance for '{service_name}'")
                return self._singletons[service_name]

            instance = factory()
            logger.debug(f"Created new instance for '{service_name}'")
            return instance

    def clear(self) -> None:
        """Clear all registered services and instances."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_names.clear()


# Global container instance
_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get global container instance (thread-safe singleton)."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                _container = Container()
                _setup_default_services(_container)
    return _container


def reset_container() -> None:
    """Reset global container (useful for testing)."""
    global _container
    with _container_lock:
        if _container:
            _container.clear()
        _container = None


def _setup_default_services(container: Container) -> None:
    """Set up default service registrations with configuration injection."""

    def create_config():
        from .config import get_config
        return get_config()

    def create_registry_loader():
        from .sources.loader import RegistryLoader
        config = container.get('config')
        return RegistryLoader(
            remote_url=config.registry.remote_url,
            local_path=config.registry.local_path,
            timeout=config.registry.timeout
        )

    def create_feed_parser():
        from .sources.rss.parser import RSSParser
        config = container.get('config')
        return RSSParser(timeout=config.feeds.timeout, user_agent=config.feeds.user_agent)

    def create_skill():
        from .skill import HeadlinesSkill
        config = container.get('config')
        return HeadlinesSkill(
            registry_loader=container.get('registry_loader'),
            feed_parser=container.get('feed_parser'),
            propagate_feed_errors=config.feeds.propagate_errors
        )

    container.register_singleton('config', create_config)
    container.register_singleton('registry_loader', create_registry_loader)
    container.register_singleton('feed_parser', create_feed_parser)
    container.register_singleton('skill', create_skill)

    logger.debug("Default services registered in container")


# Convenience functions for common usage patterns

def get_config():
    """Get configuration instance from container."""
    return get_container().get('config')


def get_skill():
    """Get skill instance from container."""
    return get_container().get('skill')

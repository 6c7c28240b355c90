#!/usr/bin/env python3
"""
Site registry loader.

Reads the ``name,url`` registry from a remote copy first and falls back to
the copy packaged with the skill when the remote one cannot be fetched.
"""

import logging
from typing import Iterable, Optional

import requests

from ..exceptions import RegistryParseError, RegistrySourceUnavailableError
from .registry import SiteRegistry

logger = logging.getLogger(__name__)

CSV_DELIMITER = ","


def parse_registry_lines(lines: Iterable[str], source: str) -> SiteRegistry:
    """
    Parse registry lines into a new SiteRegistry.

    Blank lines are skipped. Any other line must hold a site name and a URL
    separated by the first comma; otherwise the whole load is rejected.

    Args:
        lines: Iterable of raw text lines
        source: Label recorded on the registry and used in errors

    Returns:
        Populated SiteRegistry

    Raises:
        RegistryParseError: If a line is malformed or the stream fails mid-read
    """
    registry = SiteRegistry(source=source)
    line_number = 0

    try:
        for line_number, raw_line in enumerate(lines, 1):
            line = raw_line.strip()
            if not line:
                continue

            if CSV_DELIMITER not in line:
                raise RegistryParseError(source, "missing delimiter", line_number, line)

            name, url = line.split(CSV_DELIMITER, 1)
            name, url = name.strip(), url.strip()
            if not name or not url:
                raise RegistryParseError(source, "empty site name or URL", line_number, line)

            registry.register_site(name, url)
    except (OSError, UnicodeDecodeError) as e:
        raise RegistryParseError(source, f"read failed: {e}", line_number + 1)

    logger.info(f"Parsed {len(registry)} sites from {source} registry")
    return registry


class RegistryLoader:
    """Loads the site registry from a remote URL with a local fallback."""

    def __init__(self, remote_url: str, local_path: str, timeout: int = 5,
                 session: Optional[requests.Session] = None):
        """
        Initialize registry loader.

        Args:
            remote_url: URL of the up-to-date registry
            local_path: Path of the packaged fallback registry
            timeout: Request timeout in seconds for the remote fetch
            session: Optional requests session (injected in tests)
        """
        self.remote_url = remote_url
        self.local_path = local_path
        self.timeout = timeout
        self.session = session or requests.Session()

    def load(self) -> SiteRegistry:
        """
        Load a fresh registry.

        Returns:
            SiteRegistry built from the remote copy, or the local one if the
            remote copy is unreachable

        Raises:
            RegistrySourceUnavailableError: If neither source can be opened
            RegistryParseError: If the content that was opened is malformed
        """
        try:
            response = self._open_remote()
        except requests.RequestException as e:
            logger.warning(f"Remote registry unavailable ({e}); falling back to {self.local_path}")
            return self._load_local(e)

        try:
            content = response.content
        except requests.RequestException as e:
            raise RegistryParseError("remote", f"read failed: {e}") from e
        finally:
            response.close()

        try:
            text = content.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise RegistryParseError("remote", f"not valid UTF-8: {e}")

        return parse_registry_lines(text.splitlines(), source="remote")

    def _open_remote(self) -> requests.Response:
        """Open the remote registry; the body is read by the caller."""
        logger.info(f"Fetching site registry from: {self.remote_url}")
        response = self.session.get(self.remote_url, timeout=self.timeout, stream=True)
        try:
            response.raise_for_status()
        except requests.RequestException:
            response.close()
            raise
        return response

    def _load_local(self, remote_error: Exception) -> SiteRegistry:
        """Load the packaged registry file."""
        try:
            stream = open(self.local_path, 'r', encoding='utf-8-sig')
        except OSError as e:
            logger.error(f"Local registry {self.local_path} could not be opened: {e}")
            raise RegistrySourceUnavailableError(self.remote_url, self.local_path, e) from remote_error

        with stream:
            return parse_registry_lines(stream, source="local")

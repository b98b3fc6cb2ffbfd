"""Connector settings, read from node inputs or the environment."""

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.grandcentr.al/v1"
DEFAULT_PATH = "tools"
DEFAULT_TIMEOUT = 60.0
# Provenance tag sent with deleteWebhook
DEFAULT_SOURCE = "n8n"


@dataclass
class GrandCentralSettings:
    """
    Settings for talking to the GrandCentral API.

    Attributes:
        api_key: Bearer token for the Authorization header
        base_url: API root, requests go to ``{base_url}/{path}``
        timeout: Total request timeout in seconds
        source: Provenance tag sent when deleting webhooks
    """
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    source: str = DEFAULT_SOURCE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GrandCentralSettings":
        """
        Build settings from GRANDCENTRAL_* environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            GrandCentralSettings with unset variables left at their defaults
        """
        env = os.environ if environ is None else environ

        timeout = DEFAULT_TIMEOUT
        raw_timeout = env.get("GRANDCENTRAL_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                logger.warning(
                    f"Ignoring invalid GRANDCENTRAL_TIMEOUT={raw_timeout!r}, "
                    f"using {DEFAULT_TIMEOUT}s"
                )

        return cls(
            api_key=env.get("GRANDCENTRAL_API_KEY") or None,
            base_url=env.get("GRANDCENTRAL_BASE_URL") or DEFAULT_BASE_URL,
            timeout=timeout,
            source=env.get("GRANDCENTRAL_WEBHOOK_SOURCE") or DEFAULT_SOURCE,
        )

    def with_api_key(self, api_key: Optional[str]) -> "GrandCentralSettings":
        """Return a copy using the given key, or self when no key is given."""
        if not api_key:
            return self
        return replace(self, api_key=api_key)

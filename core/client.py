"""
Async HTTP client for the GrandCentral REST API.

Every action is a JSON request to ``{base_url}/{path}`` with bearer
authentication. The client is a thin pass-through: no retries, no
backoff. Failures surface as GrandCentralError subclasses.
"""

import asyncio
import json
import logging
import time
from typing import Any, Callable, Optional

import aiohttp

from .errors import (
    GrandCentralApiError,
    GrandCentralAuthError,
    GrandCentralConnectionError,
)
from .settings import DEFAULT_PATH, GrandCentralSettings
from ..utils.helpers import censor_token
from ..utils.validation import sanitize_for_logging

logger = logging.getLogger(__name__)

# Singleton client instance
_client: Optional["GrandCentralClient"] = None


def get_client() -> "GrandCentralClient":
    """Get or create the singleton client, configured from the environment."""
    global _client
    if _client is None:
        _client = GrandCentralClient()
    return _client


class GrandCentralClient:
    """
    Async HTTP client for the GrandCentral API.

    Features:
    - Async HTTP with connection pooling
    - Bearer authentication from settings or a credential provider
    - JSON request bodies, optional query string
    """

    def __init__(
        self,
        settings: Optional[GrandCentralSettings] = None,
        credentials: Optional[Callable[[], Optional[str]]] = None,
        max_connections: int = 10,
        max_connections_per_host: int = 5,
    ):
        """
        Initialize the client.

        Args:
            settings: Connector settings (defaults to GrandCentralSettings.from_env())
            credentials: Optional callable returning the API key; takes
                precedence over settings.api_key
            max_connections: Maximum total connections
            max_connections_per_host: Maximum connections per host
        """
        self.settings = settings or GrandCentralSettings.from_env()
        self._credentials = credentials
        self._session: Optional[aiohttp.ClientSession] = None
        self._session_loop: Optional[asyncio.AbstractEventLoop] = None
        self.timeout = aiohttp.ClientTimeout(total=self.settings.timeout)
        self.max_connections = max_connections
        self.max_connections_per_host = max_connections_per_host

    async def __aenter__(self) -> "GrandCentralClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session with connection pooling."""
        current_loop = asyncio.get_running_loop()

        # Create new session if none exists, if closed, or if event loop changed
        if (self._session is None or
            self._session.closed or
            self._session_loop is not current_loop):
            if self._session and not self._session.closed:
                try:
                    await self._session.close()
                except RuntimeError as e:
                    # Session belonged to a loop that is already gone
                    logger.debug(f"Could not close stale session: {e}")

            connector = aiohttp.TCPConnector(
                limit=self.max_connections,
                limit_per_host=self.max_connections_per_host,
                keepalive_timeout=30,
                enable_cleanup_closed=True,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=self.timeout,
            )
            self._session_loop = current_loop
        return self._session

    def build_url(self, path: Optional[str] = None) -> str:
        """Build the request URL for a path, defaulting to the tools endpoint."""
        base = self.settings.base_url.rstrip("/")
        return f"{base}/{(path or DEFAULT_PATH).lstrip('/')}"

    def get_api_key(self) -> Optional[str]:
        if self._credentials is not None:
            return self._credentials()
        return self.settings.api_key

    def get_auth_headers(self) -> dict:
        """
        Get authentication headers for HTTP requests.

        Raises:
            GrandCentralAuthError: If no API key is configured
        """
        api_key = self.get_api_key()
        if not api_key:
            raise GrandCentralAuthError(
                "No GrandCentral API key configured "
                "(set GRANDCENTRAL_API_KEY or pass api_key)"
            )
        return {"Authorization": f"Bearer {api_key}"}

    async def request(
        self,
        body: Optional[dict],
        path: Optional[str] = None,
        query: Optional[dict] = None,
        method: str = "POST",
    ) -> Any:
        """
        Send one JSON request to the GrandCentral API.

        Args:
            body: JSON body; dropped from the request when None or empty
            path: URL path below the base URL (default: "tools")
            query: Optional query-string parameters
            method: HTTP method

        Returns:
            Decoded JSON response, or the raw text if it is not JSON

        Raises:
            GrandCentralAuthError: No API key configured
            GrandCentralApiError: Non-2xx response
            GrandCentralConnectionError: Network error or timeout
        """
        url = self.build_url(path)
        headers = {"Content-Type": "application/json"}
        headers.update(self.get_auth_headers())

        request_kwargs: dict = {"headers": headers}
        if body:
            request_kwargs["json"] = body
        if query:
            request_kwargs["params"] = _encode_query(query)

        if body:
            logger.debug(f"GrandCentral {method} {url}: {sanitize_for_logging(body)}")
        else:
            logger.debug(f"GrandCentral {method} {url} (no body)")

        session = await self.get_session()
        start_time = time.time()

        try:
            response = await session.request(method, url, **request_kwargs)
            try:
                text = await response.text()
                elapsed_ms = (time.time() - start_time) * 1000

                if not 200 <= response.status < 300:
                    logger.warning(
                        f"GrandCentral {method} {url} failed with HTTP {response.status} "
                        f"after {elapsed_ms:.0f}ms"
                    )
                    raise GrandCentralApiError(
                        f"HTTP {response.status}: {text[:500]}",
                        status=response.status,
                        body=text[:500],
                    )

                logger.debug(
                    f"GrandCentral {method} {url} -> {response.status} in {elapsed_ms:.0f}ms"
                )
            finally:
                response.close()

        except aiohttp.ClientError as e:
            logger.warning(f"GrandCentral client error: {e}")
            raise GrandCentralConnectionError(f"Client error: {str(e)}") from e
        except asyncio.TimeoutError as e:
            logger.warning(f"GrandCentral request timed out: {method} {url}")
            raise GrandCentralConnectionError("Request timeout") from e

        if not text:
            return {}
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return text

    async def test_credentials(self) -> bool:
        """
        Check the API with the configured key (GET /tools).

        Returns:
            True when the API accepted the key

        Raises:
            GrandCentralError: If the check failed
        """
        await self.request(None, method="GET")
        logger.info(f"GrandCentral credentials verified for key {self._censored_key()}")
        return True

    def _censored_key(self) -> str:
        return censor_token(self.get_api_key())

    async def close(self):
        """Close the HTTP session and release resources."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
            logger.debug("GrandCentral client session closed")


def _encode_query(query: dict) -> dict:
    """Encode query values for the URL; booleans as true/false, None dropped."""
    encoded = {}
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        else:
            encoded[key] = str(value)
    return encoded


async def close_client():
    """Close the global client instance."""
    global _client
    if _client:
        await _client.close()
        _client = None

"""HTTP transport for the Eporner API"""

import httpx
import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Protocol

from ..core.settings import get_settings
from ..core.exceptions import ConfigurationError, TransportError

# Setup logging
logger = logging.getLogger(__name__)

# Accept header per requested response format
ACCEPT_TYPES = {
    "json": "application/json",
    "xml": "application/xml",
    "txt": "text/plain",
}


@dataclass(frozen=True)
class RawResponse:
    """Status, lower-cased headers and undecoded body of an API response"""
    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""


class TransportGateway(Protocol):
    """
    Contract for anything able to perform an API GET request.

    Implementations raise :class:`TransportError` for any network-level
    failure; callers treat every cause the same way.
    """

    def get(self, endpoint: str, params: Mapping[str, str]) -> RawResponse:
        ...  # pragma: no cover


class HttpClient:
    """
    Blocking httpx-based transport.

    Performs exactly one request per call: no retries, no caching. Timeouts
    are owned here and come from settings unless given explicitly.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None
    ):
        """
        Initialize the HTTP transport.

        Args:
            api_key: Optional bearer token (if None, loads from settings)
            base_url: API base URL (if None, loads from settings)
            timeout: Total request timeout in seconds
            connect_timeout: Connection timeout in seconds
            client: Preconfigured httpx client, mainly for tests
        """
        self.settings = get_settings()
        self.api_key = api_key if api_key is not None else self.settings.api_key
        self.base_url = (base_url or self.settings.base_url).rstrip("/")

        if not self.base_url:
            raise ConfigurationError("API base URL is required")

        self.client = client or httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(
                timeout or self.settings.timeout,
                connect=connect_timeout or self.settings.connect_timeout
            )
        )

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.close()

    def close(self) -> None:
        self.client.close()

    def get(self, endpoint: str, params: Mapping[str, str]) -> RawResponse:
        """
        Make a GET request to the API.

        Args:
            endpoint: Endpoint path, e.g. ``/api/v2/video/search/``
            params: Query string values

        Returns:
            The raw response with lower-cased header names

        Raises:
            TransportError: On network failure, timeout or a non-2xx status
        """
        logger.debug(f"GET {endpoint} params={dict(params)}")
        headers = self._headers(params.get("format"))

        try:
            response = self.client.get(endpoint, params=dict(params), headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Request to {endpoint} failed: {e}")
            raise TransportError.from_http_error(e) from e

        return RawResponse(
            status_code=response.status_code,
            headers={key.lower(): value for key, value in response.headers.items()},
            body=response.content
        )

    def _headers(self, fmt: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "User-Agent": self.settings.user_agent,
            "Accept": ACCEPT_TYPES.get(fmt, ACCEPT_TYPES["json"]),
        }

        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        return headers

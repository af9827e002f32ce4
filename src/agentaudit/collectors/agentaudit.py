"""AgentAudit service collector - fetches the full package risk dataset."""

import logging
from typing import Any, Optional

import httpx

from agentaudit import __version__
from agentaudit.errors import (
    HttpError,
    NetworkError,
    ParseError,
    RedirectLimitError,
    RequestTimeoutError,
)

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://www.agentaudit.dev"
REQUEST_TIMEOUT = 30.0
MAX_REDIRECTS = 5


class AgentAuditCollector:
    """Collector for the AgentAudit package dataset."""

    PACKAGES_PATH = "/api/packages"

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize AgentAudit collector."""
        # Redirects are followed by hand so the hop count spans the whole chain
        self.client = httpx.AsyncClient(
            timeout=REQUEST_TIMEOUT,
            follow_redirects=False,
            headers={
                "Accept": "application/json",
                "User-Agent": f"agentaudit-gate/{__version__}",
            },
            transport=transport,
        )

    @classmethod
    def build_packages_url(cls, api_url: str, verify: str = "", timeout: str = "") -> str:
        """Build the dataset endpoint, forwarding only the non-empty options."""
        params = {}
        if verify:
            params["verify"] = verify
        if timeout:
            params["timeout"] = timeout
        url = httpx.URL(f"{api_url.rstrip('/')}{cls.PACKAGES_PATH}")
        return str(url.copy_merge_params(params)) if params else str(url)

    async def fetch(self, url: str) -> Any:
        """
        GET a URL and decode its JSON body.

        Args:
            url: Absolute URL to fetch

        Returns:
            Decoded JSON body

        Raises:
            NetworkError: connection failed
            RequestTimeoutError: no response within REQUEST_TIMEOUT
            RedirectLimitError: more than MAX_REDIRECTS redirects
            HttpError: final status was not 200
            ParseError: body was not valid JSON
        """
        current = httpx.URL(url)
        redirects = 0

        while True:
            try:
                response = await self.client.get(current)
            except httpx.TimeoutException as e:
                raise RequestTimeoutError() from e
            except httpx.TransportError as e:
                raise NetworkError(f"Network error: {e}") from e

            location = response.headers.get("location")
            if 300 <= response.status_code < 400 and location:
                redirects += 1
                if redirects > MAX_REDIRECTS:
                    raise RedirectLimitError(MAX_REDIRECTS)
                current = current.join(location)
                logger.debug(f"Following redirect {redirects} to {current}")
                continue

            if response.status_code != 200:
                raise HttpError(response.status_code, response.text)

            try:
                return response.json()
            except ValueError as e:
                raise ParseError(str(e)) from e

    async def collect(self, api_url: str, verify: str = "", timeout: str = "") -> Any:
        """
        Fetch the full AgentAudit dataset.

        Args:
            api_url: Service origin
            verify: Optional verification mode forwarded as a query parameter
            timeout: Optional timeout forwarded as a query parameter

        Returns:
            Decoded response body (array or wrapper object)
        """
        endpoint = self.build_packages_url(api_url, verify, timeout)
        logger.info(f"Fetching packages from {endpoint}")
        return await self.fetch(endpoint)

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

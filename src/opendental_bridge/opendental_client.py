"""HTTP client for the OpenDental backend service.

The backend is a FastAPI service that fronts OpenDental and does the actual
data retrieval. This module only forwards requests to it:

1. Resolve the endpoint path against the configured base URL
2. Attach query parameters
3. Send exactly one request, cancelling it if the timeout elapses
4. Return the parsed JSON body, or raise a specific error

There are no retries. If a call fails, the caller decides whether to
invoke the tool again.

Usage:
    client = await get_client()
    body = await client.request(
        "/api/patient_chart", params={"patient_name": "Jane Doe"}, timeout=60
    )
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from opendental_bridge.config import DEFAULT_TIMEOUT_SECONDS, OPENDENTAL_API_URL

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ("GET", "POST")


class OpenDentalError(Exception):
    """Base class for every backend call failure."""


class OpenDentalRequestError(OpenDentalError):
    """Raised when the request never produced a response (network failure)."""


class OpenDentalTimeoutError(OpenDentalRequestError):
    """Raised when the request was cancelled because it ran past its timeout."""

    def __init__(self, url: str, timeout: float) -> None:
        self.url = url
        self.timeout = timeout
        super().__init__(f"Request to {url} timed out after {timeout:g}s")


class OpenDentalAPIError(OpenDentalError):
    """Raised when the backend answers with a non-2xx status."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Backend returned {status_code}: {detail}")


class OpenDentalResponseError(OpenDentalError):
    """Raised when the backend body is not valid JSON."""


class OpenDentalClient:
    """Async client that forwards tool calls to the OpenDental backend.

    Attributes:
        base_url: The backend server URL (e.g., "http://localhost:8000").
        default_timeout: Seconds to wait when a call gives no timeout.
    """

    def __init__(
        self,
        base_url: str = OPENDENTAL_API_URL,
        default_timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = base_url
        self.default_timeout = default_timeout
        self._http = httpx.AsyncClient(timeout=httpx.Timeout(default_timeout))

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    def build_url(self, path: str) -> httpx.URL:
        """Resolve an endpoint path against the base URL.

        An absolute path ("/api/patients") replaces any path on the base URL,
        the same way a browser resolves a link.
        """
        return httpx.URL(self.base_url).join(path)

    async def request(
        self,
        path: str,
        method: str = "POST",
        params: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Send one request to the backend and return its JSON body.

        Args:
            path: Endpoint path, e.g. "/api/patients".
            method: "GET" or "POST".
            params: Optional query parameters.
            timeout: Seconds before the request is cancelled. Defaults to
                ``default_timeout``.

        Returns:
            The parsed JSON response (usually a dict).

        Raises:
            ValueError: If ``method`` is not GET or POST.
            OpenDentalTimeoutError: If the timeout elapsed first.
            OpenDentalRequestError: If the request could not be sent, e.g.
                the backend is unreachable or its URL is malformed.
            OpenDentalAPIError: If the backend returned a non-2xx status.
            OpenDentalResponseError: If the body is not valid JSON.
        """
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported method {method!r}; use GET or POST")
        if timeout is None:
            timeout = self.default_timeout

        try:
            url = self.build_url(path)
        except httpx.InvalidURL as exc:
            raise OpenDentalRequestError(
                f"Invalid backend URL {self.base_url!r}: {exc}"
            ) from exc
        logger.debug("%s %s params=%s timeout=%ss", method, url, params, timeout)

        # wait_for cancels the in-flight request once the timeout elapses.
        # httpx enforces the same timeout on the socket as well.
        try:
            response = await asyncio.wait_for(
                self._http.request(method, url, params=params, timeout=timeout),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("%s %s timed out after %ss", method, url, timeout)
            raise OpenDentalTimeoutError(str(url), timeout) from exc
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as exc:
            raise OpenDentalRequestError(f"Request to {url} failed: {exc}") from exc

        if not response.is_success:
            logger.warning("%s %s returned %d", method, url, response.status_code)
            raise OpenDentalAPIError(
                status_code=response.status_code,
                detail=response.reason_phrase,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise OpenDentalResponseError(
                f"Backend returned malformed JSON from {url}: {exc}"
            ) from exc


# --- Module-level singleton ---
# One pooled client for the whole process. Each tool calls get_client().

_client: OpenDentalClient | None = None


async def get_client() -> OpenDentalClient:
    """Get or create the shared OpenDentalClient."""
    global _client  # noqa: PLW0603
    if _client is None:
        _client = OpenDentalClient()
    return _client


async def close_client() -> None:
    """Close the shared client, if one was created."""
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.close()
        _client = None

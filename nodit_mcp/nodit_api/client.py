"""
Thin HTTP client for Nodit endpoints.

The client sends one request per call, with no retries, and maps transport and
status failures to internal exceptions that the tool layer can turn into safe,
user-facing messages.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import httpx

from nodit_mcp.config import NoditConfig, default_config

logger = logging.getLogger(__name__)

BODY_METHODS = {"POST", "PUT", "PATCH"}


class NoditApiError(Exception):
    """Base exception for Nodit API errors."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MissingApiKeyError(NoditApiError):
    """Raised when no API key is configured."""


class RequestTimeoutError(NoditApiError):
    """Raised when the upstream call exceeds the configured timeout."""


class TransportError(NoditApiError):
    """Raised for DNS, connection and other network-level failures."""


class UpstreamError(NoditApiError):
    """Raised when Nodit responds with a non-success status."""


class MalformedResponseError(NoditApiError):
    """Raised when a success response does not carry valid JSON."""


class NoditApiClient:
    """Async client that dispatches resolved Nodit requests."""

    def __init__(
        self,
        config: NoditConfig | None = None,
        *,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or default_config
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _build_headers(self) -> Dict[str, str]:
        if not self.config.api_key:
            raise MissingApiKeyError(
                "NODIT_API_KEY environment variable is not set. It is required to call "
                "nodit api. Please check your mcp server configuration."
            )
        return {
            "X-API-KEY": self.config.api_key,
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": self.config.user_agent,
        }

    def _process_response(self, response: httpx.Response) -> str:
        body = response.text
        if response.status_code >= 400:
            raise UpstreamError(
                f"Nodit API returned status {response.status_code}.",
                status_code=response.status_code,
                body=body,
            )
        try:
            json.loads(body)
        except ValueError as exc:
            raise MalformedResponseError(
                "API returned OK status but body was not valid JSON.",
                status_code=response.status_code,
                body=body,
            ) from exc
        return body

    async def request(self, method: str, url: str, *, json_body: Any = None) -> str:
        """
        Send one request and return the raw JSON response text.

        Raises:
            MissingApiKeyError, RequestTimeoutError, TransportError,
            UpstreamError or MalformedResponseError.
        """
        headers = self._build_headers()
        method = method.upper()
        client = await self._get_client()
        kwargs: Dict[str, Any] = {"headers": headers}
        if method in BODY_METHODS:
            kwargs["json"] = json_body if json_body is not None else {}

        logger.info("Calling Nodit API method=%s url=%s", method, url)
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            logger.warning("Nodit API timed out for %s", url)
            raise RequestTimeoutError("Request timed out") from exc
        except httpx.RequestError as exc:
            logger.warning("Nodit API unreachable for %s: %s", url, exc)
            raise TransportError(str(exc) or "Network error") from exc

        result = self._process_response(response)
        logger.info("Nodit API success status=%s url=%s", response.status_code, url)
        return result

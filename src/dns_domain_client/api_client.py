"""
HTTP transport for the DNS management API.

This module provides the async API client that owns the HTTP connection,
credentials and base URL, and the structural protocols the domain client
relies on, so any object exposing get/post/delete can stand in for it.
"""

import time
from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from . import __version__
from .audit_logger import AuditLogger
from .config import DEFAULT_BASE_URL, ClientConfig
from .domain_client import DomainClient
from .exceptions import TransportError


@runtime_checkable
class Response(Protocol):
    """What the domain client reads from a response."""

    @property
    def status_code(self) -> int:
        ...

    @property
    def text(self) -> str:
        ...

    def json(self) -> Any:
        ...


@runtime_checkable
class Transport(Protocol):
    """
    Protocol for HTTP transports.

    Each method performs one request and raises TransportError when the
    request could not be completed.
    """

    async def get(self, path: str) -> Response:
        ...

    async def post(self, path: str, body: Any) -> Response:
        ...

    async def delete(self, path: str) -> Response:
        ...


class APIClient:
    """
    Async API client bound to a base URL and an API token.

    The underlying httpx client is created on first use or on context
    manager entry and closed by close() / context manager exit.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        auth_scheme: str = "Token",
        user_agent: Optional[str] = None,
        logger: Optional[AuditLogger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            token: API token sent in the Authorization header
            base_url: API root; request paths are resolved beneath it
            timeout: Request timeout in seconds
            auth_scheme: Authorization scheme preceding the token
            user_agent: Optional User-Agent override
            logger: Optional request logger
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        self._base_url = base_url
        self._timeout = timeout
        self._headers = {
            "Authorization": f"{auth_scheme} {token}",
            "User-Agent": user_agent or f"dns-domain-client/{__version__}",
            "Accept": "application/json",
        }
        self._logger = logger
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        logger: Optional[AuditLogger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "APIClient":
        """Create a client from a ClientConfig."""
        return cls(
            token=config.token,
            base_url=config.base_url,
            timeout=config.timeout,
            auth_scheme=config.auth_scheme,
            user_agent=config.user_agent,
            logger=logger,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> "APIClient":
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=self._headers,
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            )
        return self._client

    def domain(self) -> DomainClient:
        """Return the domain operations bound to this client."""
        return DomainClient(self)

    async def get(self, path: str) -> httpx.Response:
        return await self._request("GET", path)

    async def post(self, path: str, body: Any) -> httpx.Response:
        return await self._request("POST", path, body)

    async def delete(self, path: str) -> httpx.Response:
        return await self._request("DELETE", path)

    async def _request(
        self, method: str, path: str, body: Any = None
    ) -> httpx.Response:
        """
        Perform a single request.

        Raises:
            TransportError: If the request fails at the network/protocol level
        """
        client = self._ensure_client()
        start_time = time.perf_counter()

        try:
            if body is None:
                response = await client.request(method, path)
            else:
                response = await client.request(method, path, json=body)
        except httpx.HTTPError as e:
            if self._logger:
                self._logger.log_transport_error(
                    method,
                    path,
                    e,
                    self._elapsed_ms(start_time),
                    request_url=f"{self._base_url}{path}",
                )
            raise TransportError(
                f"{method} {path} failed: {e}",
                details={
                    "method": method,
                    "path": path,
                    "error_type": type(e).__name__,
                },
            ) from e

        if self._logger:
            self._logger.log_request(
                method, path, response.status_code, self._elapsed_ms(start_time)
            )

        return response

    def _elapsed_ms(self, start_time: float) -> float:
        """Calculate elapsed time in milliseconds."""
        return (time.perf_counter() - start_time) * 1000

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

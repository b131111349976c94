"""
Tests for the API client transport.

Covers header construction, base URL resolution, conversion of httpx
failures into TransportError, request logging and client lifecycle.
"""

import asyncio
from io import StringIO

import httpx
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from dns_domain_client import __version__
from dns_domain_client.api_client import APIClient, Transport
from dns_domain_client.audit_logger import AuditLogger
from dns_domain_client.config import ClientConfig
from dns_domain_client.domain_client import DomainClient
from dns_domain_client.enums import LogLevel
from dns_domain_client.exceptions import TransportError


def capture(requests: list) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=[])

    return httpx.MockTransport(handler)


def get(client: APIClient, path: str) -> httpx.Response:
    async def _run():
        async with client:
            return await client.get(path)

    return asyncio.run(_run())


class TestRequestHeaders:
    """Every request carries the credentials and identification headers."""

    def test_default_headers(self) -> None:
        requests: list = []
        client = APIClient(token="abc123", transport=capture(requests))
        get(client, "/domains/")

        headers = requests[0].headers
        assert headers["Authorization"] == "Token abc123"
        assert headers["User-Agent"] == f"dns-domain-client/{__version__}"
        assert headers["Accept"] == "application/json"

    def test_custom_scheme_and_user_agent(self) -> None:
        requests: list = []
        client = APIClient(
            token="abc123",
            auth_scheme="Bearer",
            user_agent="my-tool/1.0",
            transport=capture(requests),
        )
        get(client, "/domains/")

        assert requests[0].headers["Authorization"] == "Bearer abc123"
        assert requests[0].headers["User-Agent"] == "my-tool/1.0"


class TestBaseUrlResolution:
    """Paths resolve beneath the base URL's own path."""

    def test_default_base_url(self) -> None:
        requests: list = []
        client = APIClient(token="t", transport=capture(requests))
        get(client, "/domains/")

        assert str(requests[0].url) == "https://desec.io/api/v1/domains/"

    @given(prefix=st.sampled_from(["/api/v1", "/api/v1/", "/v2", ""]))
    @settings(max_examples=20)
    def test_prefix_kept(self, prefix: str) -> None:
        requests: list = []
        client = APIClient(
            token="t",
            base_url=f"https://dns.example.net{prefix}",
            transport=capture(requests),
        )
        get(client, "/domains/example.com/zonefile/")

        expected = prefix.rstrip("/") + "/domains/example.com/zonefile/"
        assert requests[0].url.path == expected

    def test_from_config(self) -> None:
        requests: list = []
        config = ClientConfig(token="cfg-token", base_url="https://dns.example.net/api")
        client = APIClient.from_config(config, transport=capture(requests))
        get(client, "/domains/")

        assert requests[0].url.path == "/api/domains/"
        assert requests[0].headers["Authorization"] == "Token cfg-token"


class TestTransportErrors:
    """httpx failures surface as TransportError with context."""

    @pytest.mark.parametrize("error_class", [
        httpx.ConnectError,
        httpx.ReadTimeout,
        httpx.RemoteProtocolError,
    ])
    def test_http_errors_wrapped(self, error_class) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise error_class("failed", request=request)

        client = APIClient(token="t", transport=httpx.MockTransport(handler))

        with pytest.raises(TransportError) as exc_info:
            get(client, "/domains/")

        error = exc_info.value
        assert error.details["method"] == "GET"
        assert error.details["path"] == "/domains/"
        assert error.details["error_type"] == error_class.__name__
        assert isinstance(error.__cause__, error_class)


class TestRequestLogging:
    """Requests are logged at debug level with the token masked."""

    def test_successful_request_logged(self) -> None:
        stream = StringIO()
        logger = AuditLogger(output_format="json", output_stream=stream, level=LogLevel.DEBUG, keep_entries=True)
        client = APIClient(token="t", logger=logger, transport=capture([]))
        get(client, "/domains/")

        entries = logger.entries
        assert len(entries) == 1
        assert entries[0].level == LogLevel.DEBUG
        assert entries[0].data["status_code"] == 200
        assert entries[0].data["path"] == "/domains/"

    def test_debug_filtered_at_info(self) -> None:
        logger = AuditLogger(output_stream=StringIO(), level=LogLevel.INFO, keep_entries=True)
        client = APIClient(token="t", logger=logger, transport=capture([]))
        get(client, "/domains/")

        assert logger.entries == []

    def test_failure_logged_as_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        stream = StringIO()
        logger = AuditLogger(output_format="text", output_stream=stream, keep_entries=True)
        client = APIClient(token="secret-value", logger=logger, transport=httpx.MockTransport(handler))

        with pytest.raises(TransportError):
            get(client, "/domains/")

        entries = logger.entries
        assert len(entries) == 1
        assert entries[0].level == LogLevel.ERROR
        assert entries[0].data["error_type"] == "ConnectError"
        assert entries[0].data["path"] == "/domains/"
        assert "secret-value" not in stream.getvalue()

    def test_entries_not_retained_by_default(self) -> None:
        stream = StringIO()
        logger = AuditLogger(output_format="json", output_stream=stream, level=LogLevel.DEBUG)
        client = APIClient(token="t", logger=logger, transport=capture([]))
        for _ in range(5):
            get(client, "/domains/")

        assert len(stream.getvalue().splitlines()) == 5
        assert logger.entries == []


class TestLifecycle:
    """The httpx client is created lazily and released on close."""

    def test_close_releases_client(self) -> None:
        client = APIClient(token="t", transport=capture([]))

        async def _run():
            await client.get("/domains/")
            assert client._client is not None
            await client.close()
            assert client._client is None

        asyncio.run(_run())

    def test_domain_accessor_binds_client(self) -> None:
        client = APIClient(token="t")
        domains = client.domain()

        assert isinstance(domains, DomainClient)
        assert domains.transport is client

    def test_satisfies_transport_protocol(self) -> None:
        assert isinstance(APIClient(token="t"), Transport)

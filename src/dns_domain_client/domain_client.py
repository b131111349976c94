"""
Domain operations of the DNS management API.

Each operation issues exactly one request through the bound transport and
maps the response status to a typed result or a typed error:

- the documented success status decodes the body
- statuses the operation documents (400, 404) raise their own error kind
- every other status raises UnexpectedStatusError with status and body text

Nothing is retried, cached or logged here; transport failures surface as
TransportError straight from the transport.
"""

from typing import TYPE_CHECKING, Any, Callable, TypeVar

from .exceptions import (
    ApiError,
    InvalidResponseError,
    NotFoundError,
    UnexpectedStatusError,
)
from .models import Domain, DomainList, domain_list_from_json

if TYPE_CHECKING:
    from .api_client import Response, Transport

T = TypeVar("T")

HTTP_OK = 200
HTTP_NO_CONTENT = 204
HTTP_BAD_REQUEST = 400
HTTP_NOT_FOUND = 404

DOMAINS_PATH = "/domains/"


def _body_text(response: "Response") -> str:
    """Body text of an error response, empty when it cannot be read."""
    try:
        return response.text
    except (UnicodeDecodeError, LookupError):
        return ""


def _decode_json(response: "Response", build: Callable[[Any], T]) -> T:
    try:
        return build(response.json())
    except (ValueError, TypeError, RecursionError) as e:
        raise InvalidResponseError(f"Invalid API response: {e}") from e


def _decode_text(response: "Response") -> str:
    try:
        return response.text
    except (UnicodeDecodeError, LookupError) as e:
        raise InvalidResponseError(f"Invalid API response: {e}") from e


def _unexpected(response: "Response") -> UnexpectedStatusError:
    return UnexpectedStatusError(response.status_code, _body_text(response))


class DomainClient:
    """Domain management operations bound to a transport."""

    def __init__(self, transport: "Transport") -> None:
        self._transport = transport

    @property
    def transport(self) -> "Transport":
        return self._transport

    async def create_domain(self, name: str) -> Domain:
        """
        Create a domain.

        Raises:
            ApiError: Server rejected the name (400)
            UnexpectedStatusError: Any other non-200 status (e.g. 409)
            InvalidResponseError: 200 with an undecodable body
            TransportError: The request failed
        """
        response = await self._transport.post(DOMAINS_PATH, {"name": name})

        if response.status_code == HTTP_OK:
            return _decode_json(response, Domain.from_dict)
        if response.status_code == HTTP_BAD_REQUEST:
            raise ApiError(response.status_code, _body_text(response))
        raise _unexpected(response)

    async def get_domains(self) -> DomainList:
        """List all domains in server order."""
        response = await self._transport.get(DOMAINS_PATH)

        if response.status_code == HTTP_OK:
            return _decode_json(response, domain_list_from_json)
        raise _unexpected(response)

    async def get_domain(self, name: str) -> Domain:
        """
        Fetch a single domain.

        Raises:
            NotFoundError: No such domain (404)
        """
        response = await self._transport.get(f"{DOMAINS_PATH}{name}/")

        if response.status_code == HTTP_OK:
            return _decode_json(response, Domain.from_dict)
        if response.status_code == HTTP_NOT_FOUND:
            raise NotFoundError()
        raise _unexpected(response)

    async def delete_domain(self, name: str) -> str:
        """Delete a domain and return the raw response body (often empty)."""
        response = await self._transport.delete(f"{DOMAINS_PATH}{name}/")

        if response.status_code == HTTP_NO_CONTENT:
            return _decode_text(response)
        raise _unexpected(response)

    async def get_owning_domain(self, qname: str) -> Domain:
        """
        Fetch the domain that owns the record name ``qname``.

        Raises:
            NotFoundError: No hosted domain owns qname (404)
        """
        response = await self._transport.get(f"{DOMAINS_PATH}?owns_qname={qname}")

        if response.status_code == HTTP_OK:
            return _decode_json(response, Domain.from_dict)
        if response.status_code == HTTP_NOT_FOUND:
            raise NotFoundError()
        raise _unexpected(response)

    async def get_zonefile(self, name: str) -> str:
        """Fetch the zonefile of a domain as unparsed text."""
        response = await self._transport.get(f"{DOMAINS_PATH}{name}/zonefile/")

        if response.status_code == HTTP_OK:
            return _decode_text(response)
        raise _unexpected(response)

"""
DNS Domain Client - async client for a DNS hosting management API.

This package provides typed access to domain management: creating, listing,
fetching and deleting domains, looking up the domain owning a record name,
and downloading zonefiles.
"""

__version__ = "0.1.0"

from dns_domain_client.exceptions import (
    DomainClientError,
    TransportError,
    NotFoundError,
    ApiError,
    UnexpectedStatusError,
    InvalidResponseError,
    ValidationError,
)
from dns_domain_client.enums import (
    ErrorCode,
    LogLevel,
)
from dns_domain_client.models import (
    Domain,
    DNSSECKeyInfo,
    DomainList,
)
from dns_domain_client.config import (
    ClientConfig,
    LoggingConfig,
    load_config_from_env,
    load_config_from_file,
    save_config_to_file,
)
from dns_domain_client.audit_logger import (
    AuditLogger,
    LogEntry,
)
from dns_domain_client.domain_client import (
    DomainClient,
)
from dns_domain_client.api_client import (
    APIClient,
    Response,
    Transport,
)
from dns_domain_client.domain_validator import (
    DomainNameValidator,
)
from dns_domain_client.cli import (
    main as cli_main,
    create_parser,
)

__all__ = [
    # Exceptions
    "DomainClientError",
    "TransportError",
    "NotFoundError",
    "ApiError",
    "UnexpectedStatusError",
    "InvalidResponseError",
    "ValidationError",
    # Enums
    "ErrorCode",
    "LogLevel",
    # Models
    "Domain",
    "DNSSECKeyInfo",
    "DomainList",
    # Configuration
    "ClientConfig",
    "LoggingConfig",
    "load_config_from_env",
    "load_config_from_file",
    "save_config_to_file",
    # Logging
    "AuditLogger",
    "LogEntry",
    # Clients
    "DomainClient",
    "APIClient",
    "Response",
    "Transport",
    # Validation
    "DomainNameValidator",
    # CLI
    "cli_main",
    "create_parser",
]

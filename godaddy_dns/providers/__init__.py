"""
Registrar provider implementations.

This package contains the GoDaddy API client, its rate-limited
transport, and an in-memory mock registrar.
"""

from .dns_client import DNSClient
from .base_provider import RegistrarProvider, WriteMode
from .godaddy_client import GoDaddyClient
from .mock_provider import MockRegistrarProvider
from .transport import RateLimitedTransport

__all__ = [
    "DNSClient",
    "RegistrarProvider",
    "WriteMode",
    "GoDaddyClient",
    "MockRegistrarProvider",
    "RateLimitedTransport",
]

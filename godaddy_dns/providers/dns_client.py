"""
DNS Client - Unified interface for registrar providers

This module picks the registrar provider named in the configuration,
currently GoDaddy or the in-memory mock.
"""

import logging
from typing import Dict, List, Optional

from ..config import godaddy_settings
from ..core.records import Domain, DomainRecord
from ..exceptions import ConfigurationError
from .base_provider import RegistrarProvider, WriteMode
from .godaddy_client import GoDaddyClient
from .mock_provider import MockRegistrarProvider
from .transport import RateLimitedTransport

logger = logging.getLogger(__name__)


class DNSClient:
    """Unified DNS client that supports multiple providers."""

    def __init__(self, config: Dict, provider: Optional[RegistrarProvider] = None):
        """Initialize DNS client with configuration."""
        self.config = config
        self.provider = provider or self._get_provider()

    def _get_provider(self) -> RegistrarProvider:
        """Get registrar provider based on configuration."""
        provider_name = self.config.get("default_provider", "godaddy")
        provider_config = self.config.get("dns_providers", {}).get(provider_name) or {}

        if provider_name == "godaddy":
            settings = godaddy_settings(provider_config)
            return GoDaddyClient(
                settings["base_url"],
                settings["key"],
                settings["secret"],
                transport=RateLimitedTransport(interval=settings["rate_limit"]),
            )
        elif provider_name == "mock":
            return MockRegistrarProvider(provider_config)
        else:
            raise ConfigurationError(f"Unknown provider '{provider_name}'")

    def list_domains(self, customer_id: str) -> List[Domain]:
        return self.provider.list_domains(customer_id)

    def get_domain(self, customer_id: str, name: str) -> Domain:
        return self.provider.get_domain(customer_id, name)

    def list_records(self, customer_id: str, domain: str) -> List[DomainRecord]:
        """Get all DNS records for a domain."""
        return self.provider.list_records(customer_id, domain)

    def write_records(
        self,
        customer_id: str,
        domain: str,
        mode: WriteMode,
        record_type,
        records: List[DomainRecord],
        name: Optional[str] = None,
    ) -> bool:
        """Submit a write through the provider's guarded dispatcher."""
        return self.provider.write_records(
            customer_id, domain, mode, record_type, records, name=name
        )

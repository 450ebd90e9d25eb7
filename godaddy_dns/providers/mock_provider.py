"""
Mock registrar provider for testing and demonstration.

This module provides a mock provider that stores domains and records in
memory and applies the same PATCH/PUT semantics as the registrar API.
"""

import logging
from typing import Dict, List, Optional

from ..core.records import STATUS_ACTIVE, Domain, DomainRecord, RecordType
from ..exceptions import NotFoundError
from .base_provider import RegistrarProvider, WriteMode

logger = logging.getLogger(__name__)


class MockRegistrarProvider(RegistrarProvider):
    """Mock registrar provider for testing and demonstration purposes."""

    def __init__(self, config: Dict = None):
        """Initialize mock provider.

        ``config["domains"]`` maps domain names to their numeric IDs.
        """
        config = config or {}
        self.domains: Dict[str, Domain] = {}
        self.records: Dict[str, List[DomainRecord]] = {}
        self.calls = []

        for index, (name, domain_id) in enumerate(
            (config.get("domains") or {}).items(), start=1
        ):
            self.add_domain(name, domain_id or index)

        logger.info("Mock registrar provider initialized")

    def add_domain(
        self, name: str, domain_id: int, records: Optional[List[DomainRecord]] = None
    ) -> Domain:
        domain = Domain(id=int(domain_id), name=name, status=STATUS_ACTIVE)
        self.domains[name] = domain
        self.records[name] = list(records or [])
        return domain

    def list_domains(self, customer_id: str) -> List[Domain]:
        return list(self.domains.values())

    def get_domain(self, customer_id: str, name: str) -> Domain:
        return self._domain(name)

    def list_records(self, customer_id: str, domain: str) -> List[DomainRecord]:
        self._domain(domain)
        logger.info(f"Mock: Retrieved {len(self.records[domain])} records")
        return list(self.records[domain])

    def add_records(
        self, customer_id: str, domain: str, record_type: RecordType, records: List[DomainRecord]
    ) -> None:
        self._domain(domain)
        self.calls.append((WriteMode.ADD, record_type, None, list(records)))

        existing = {record.key for record in self.records[domain]}
        for record in records:
            if record.key not in existing:
                self.records[domain].append(record)
                existing.add(record.key)
        logger.info(f"Mock: Added {len(records)} {record_type} records to {domain}")

    def replace_records_by_type(
        self, customer_id: str, domain: str, record_type: RecordType, records: List[DomainRecord]
    ) -> None:
        self._domain(domain)
        self.calls.append((WriteMode.REPLACE_TYPE, record_type, None, list(records)))

        kept = [r for r in self.records[domain] if r.type != record_type]
        self.records[domain] = kept + list(records)
        logger.info(f"Mock: Replaced {record_type} records of {domain}")

    def replace_records_by_type_and_name(
        self,
        customer_id: str,
        domain: str,
        record_type: RecordType,
        name: str,
        records: List[DomainRecord],
    ) -> None:
        self._domain(domain)
        self.calls.append((WriteMode.REPLACE_TYPE_NAME, record_type, name, list(records)))

        kept = [r for r in self.records[domain] if r.slot != (record_type, name)]
        self.records[domain] = kept + list(records)
        logger.info(f"Mock: Replaced {record_type} records named '{name}' of {domain}")

    def _domain(self, name: str) -> Domain:
        try:
            return self.domains[name]
        except KeyError:
            raise NotFoundError(404, "NOT_FOUND", f"Domain '{name}' not found") from None

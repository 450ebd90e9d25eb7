"""
Desired state of a domain's records.

A DomainRecordResource holds explicit records together with the shortcut
lists of apex addresses and nameservers; converge() expands the
shortcuts into full records.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from ..utils.validators import validate_data
from .records import (
    RecordOptions,
    RecordType,
    DomainRecord,
    DEFAULT_TTL,
    new_address_record,
    new_domain_record,
    new_nameserver_record,
)

logger = logging.getLogger(__name__)


@dataclass
class DomainRecordResource:
    """Declared records for one domain."""

    domain: str
    customer: str = ""
    records: List[DomainRecord] = field(default_factory=list)
    addresses: List[str] = field(default_factory=list)
    nameservers: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.addresses = [validate_data(RecordType.A.value, a) for a in self.addresses]
        self.nameservers = [
            validate_data(RecordType.NS.value, ns) for ns in self.nameservers
        ]

    @classmethod
    def from_config(cls, description: Dict) -> "DomainRecordResource":
        """
        Build a resource from a declarative description.

        Args:
            description: Mapping with "domain" and optional "customer",
                "records", "addresses" and "nameservers" keys. Each entry
                of "records" carries name/type/data and optionally ttl,
                priority, weight, port, service and protocol.

        Raises:
            ValidationError: If any record or shortcut value is invalid
        """
        records = [
            new_domain_record(
                entry.get("name", ""),
                entry.get("type", ""),
                entry.get("data", ""),
                entry.get("ttl", DEFAULT_TTL),
                RecordOptions(
                    priority=entry.get("priority", 0),
                    weight=entry.get("weight", 0),
                    port=entry.get("port"),
                    service=entry.get("service") or "",
                    protocol=entry.get("protocol") or "",
                ),
            )
            for entry in description.get("records") or []
        ]

        return cls(
            domain=description.get("domain", ""),
            customer=description.get("customer") or "",
            records=records,
            addresses=list(description.get("addresses") or []),
            nameservers=list(description.get("nameservers") or []),
        )

    @property
    def replace_nameservers(self) -> bool:
        """Whether nameservers are managed by this resource."""
        return bool(self.nameservers) or any(
            record.type == RecordType.NS for record in self.records
        )

    def converge(self) -> List[DomainRecord]:
        """Return the declared records followed by the expanded shortcuts."""
        desired = list(self.records)
        desired.extend(new_address_record(ip) for ip in self.addresses)
        desired.extend(new_nameserver_record(host) for host in self.nameservers)
        logger.debug(f"Expanded {len(desired)} desired records for {self.domain}")
        return desired

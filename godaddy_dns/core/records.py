"""
Record model - Domains, domain records and their construction rules

A DomainRecord only exists once every field passed validation; the
factory functions below are the sole way desired records are built.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from ..exceptions import ValidationError
from ..utils.validators import (
    validate_data,
    validate_name,
    validate_port,
    validate_priority,
    validate_ttl,
    validate_underscore_prefixed,
    validate_weight,
)

logger = logging.getLogger(__name__)

DEFAULT_TTL = 3600
DEFAULT_PRIORITY = 0
DEFAULT_WEIGHT = 0
DEFAULT_PORT = 0

APEX = "@"

STATUS_ACTIVE = "ACTIVE"


class RecordType(Enum):
    """DNS record types supported by the registrar."""

    A = "A"
    AAAA = "AAAA"
    CAA = "CAA"
    CNAME = "CNAME"
    MX = "MX"
    NS = "NS"
    SOA = "SOA"
    SRV = "SRV"
    TXT = "TXT"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value) -> "RecordType":
        """Map a wire string (case-insensitive) to a RecordType."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        supported = ", ".join(t.value for t in cls)
        raise ValidationError(f"type must be one of: [{supported}]")


CRITICAL_TYPES = (RecordType.NS, RecordType.SOA)


@dataclass(frozen=True)
class Domain:
    """A domain registered with the registrar."""

    id: int
    name: str
    status: str = ""

    @classmethod
    def from_api(cls, payload: Dict) -> "Domain":
        return cls(
            id=int(payload.get("domainId", 0)),
            name=payload.get("domain", ""),
            status=payload.get("status", ""),
        )

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE


@dataclass(frozen=True)
class RecordOptions:
    """Optional record fields, each validated on its own."""

    priority: int = DEFAULT_PRIORITY
    weight: int = DEFAULT_WEIGHT
    port: Optional[int] = None
    service: str = ""
    protocol: str = ""

    def validated(self) -> "RecordOptions":
        return RecordOptions(
            priority=validate_priority(self.priority),
            weight=validate_weight(self.weight),
            port=validate_port(self.port),
            service=validate_underscore_prefixed("service", self.service, "_ldap"),
            protocol=validate_underscore_prefixed("protocol", self.protocol, "_tcp"),
        )


@dataclass(frozen=True)
class DomainRecord:
    """A single DNS record as understood by the registrar API."""

    type: RecordType
    name: str
    data: str
    ttl: int = DEFAULT_TTL
    priority: int = DEFAULT_PRIORITY
    weight: int = DEFAULT_WEIGHT
    port: Optional[int] = None
    service: str = ""
    protocol: str = ""

    @property
    def key(self):
        """Identity used for diff/merge: (type, name, data)."""
        return (self.type, self.name, self.data)

    @property
    def slot(self):
        """Identity used for per-record updates: (type, name)."""
        return (self.type, self.name)

    @property
    def is_apex(self) -> bool:
        return self.name == APEX

    def to_api(self) -> Dict:
        """Serialize to the registrar's JSON shape."""
        payload = {
            "type": self.type.value,
            "name": self.name,
            "data": self.data,
            "priority": self.priority,
            "ttl": self.ttl,
            "weight": self.weight,
        }
        if self.service:
            payload["service"] = self.service
        if self.protocol:
            payload["protocol"] = self.protocol
        if self.port:
            payload["port"] = self.port
        return payload

    @classmethod
    def from_api(cls, payload: Dict) -> "DomainRecord":
        """Build a snapshot of a remote record.

        Remote data is taken as-is; only the type is checked against the
        supported set.
        """
        return cls(
            type=RecordType.parse(payload.get("type", "")),
            name=payload.get("name", ""),
            data=payload.get("data", ""),
            ttl=payload.get("ttl", DEFAULT_TTL),
            priority=payload.get("priority") or DEFAULT_PRIORITY,
            weight=payload.get("weight") or DEFAULT_WEIGHT,
            port=payload.get("port") or None,
            service=payload.get("service") or "",
            protocol=payload.get("protocol") or "",
        )

    def __str__(self) -> str:
        return f"{self.type.value} {self.name} -> {self.data} (ttl {self.ttl})"


def new_domain_record(
    name: str,
    record_type,
    data: str,
    ttl: int = DEFAULT_TTL,
    options: Optional[RecordOptions] = None,
) -> DomainRecord:
    """
    Validate and construct a DomainRecord.

    Args:
        name: Record name, "@" for the zone apex
        record_type: A RecordType or its wire string
        data: Record value (address, hostname, text, ...)
        ttl: Time to live in seconds
        options: Optional priority/weight/port/service/protocol fields

    Returns:
        A valid DomainRecord

    Raises:
        ValidationError: Naming the first constraint the input violates
    """
    name = validate_name(name)
    ttl = validate_ttl(ttl)
    rtype = RecordType.parse(record_type)
    data = validate_data(rtype.value, data)
    opts = (options or RecordOptions()).validated()

    return DomainRecord(
        type=rtype,
        name=name,
        data=data,
        ttl=ttl,
        priority=opts.priority,
        weight=opts.weight,
        port=opts.port,
        service=opts.service,
        protocol=opts.protocol,
    )


def new_address_record(ip: str) -> DomainRecord:
    """Construct an apex A record with the default TTL."""
    return new_domain_record(APEX, RecordType.A, ip, DEFAULT_TTL)


def new_nameserver_record(host: str) -> DomainRecord:
    """Construct an apex NS record with the default TTL."""
    return new_domain_record(APEX, RecordType.NS, host, DEFAULT_TTL)


def is_default_address_record(record: DomainRecord) -> bool:
    return (
        record.name == APEX
        and record.type == RecordType.A
        and record.ttl == DEFAULT_TTL
    )


def is_default_nameserver_record(record: DomainRecord) -> bool:
    return (
        record.name == APEX
        and record.type == RecordType.NS
        and record.ttl == DEFAULT_TTL
    )


def is_type_submission_disallowed(record_type, records: List[DomainRecord]) -> bool:
    """
    Check whether submitting ``records`` for ``record_type`` is forbidden.

    The registrar treats an empty NS or SOA list as removal of mandatory
    zone metadata, so those two types are never submitted empty. Any
    other type, or a non-empty list, may be submitted.
    """
    return len(records) == 0 and RecordType.parse(record_type) in CRITICAL_TYPES


def records_of_type(record_type, records: Iterable[DomainRecord]) -> List[DomainRecord]:
    rtype = RecordType.parse(record_type)
    return [record for record in records if record.type == rtype]


DEFAULT_RECORDS = (
    DomainRecord(type=RecordType.CNAME, name="www", data=APEX, ttl=DEFAULT_TTL),
    DomainRecord(
        type=RecordType.CNAME,
        name="_domainconnect",
        data="_domainconnect.gd.domaincontrol.com",
        ttl=DEFAULT_TTL,
    ),
)

"""
Base registrar provider interface.

This module defines the abstract base class that all registrar providers must implement.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

from ..core.records import (
    Domain,
    DomainRecord,
    RecordType,
    is_type_submission_disallowed,
)

logger = logging.getLogger(__name__)


class WriteMode(Enum):
    """Submission shapes supported by the registrar's record endpoints."""

    ADD = "add"
    REPLACE_TYPE = "replace-type"
    REPLACE_TYPE_NAME = "replace-type-name"


class RegistrarProvider(ABC):
    """Abstract base class for registrar providers."""

    @abstractmethod
    def list_domains(self, customer_id: str) -> List[Domain]:
        """List the domains owned by the account (or end customer)."""
        pass

    @abstractmethod
    def get_domain(self, customer_id: str, name: str) -> Domain:
        """Get a single domain, raising NotFoundError if it is unknown."""
        pass

    @abstractmethod
    def list_records(self, customer_id: str, domain: str) -> List[DomainRecord]:
        """Get every DNS record of a domain."""
        pass

    @abstractmethod
    def add_records(
        self, customer_id: str, domain: str, record_type: RecordType, records: List[DomainRecord]
    ) -> None:
        """Merge records of one type into the domain."""
        pass

    @abstractmethod
    def replace_records_by_type(
        self, customer_id: str, domain: str, record_type: RecordType, records: List[DomainRecord]
    ) -> None:
        """Overwrite every record of one type."""
        pass

    @abstractmethod
    def replace_records_by_type_and_name(
        self,
        customer_id: str,
        domain: str,
        record_type: RecordType,
        name: str,
        records: List[DomainRecord],
    ) -> None:
        """Overwrite the records matching one (type, name) pair."""
        pass

    def write_records(
        self,
        customer_id: str,
        domain: str,
        mode: WriteMode,
        record_type,
        records: List[DomainRecord],
        name: Optional[str] = None,
    ) -> bool:
        """
        Submit a write in the requested shape.

        Writes that would leave the zone without NS or SOA records are
        skipped rather than sent.

        Returns:
            True if the write was submitted, False if it was skipped
        """
        record_type = RecordType.parse(record_type)
        if is_type_submission_disallowed(record_type, records):
            logger.info(f"Skipping empty {record_type} submission for {domain}")
            return False

        if mode == WriteMode.ADD:
            self.add_records(customer_id, domain, record_type, records)
        elif mode == WriteMode.REPLACE_TYPE:
            self.replace_records_by_type(customer_id, domain, record_type, records)
        elif mode == WriteMode.REPLACE_TYPE_NAME:
            if not name:
                raise ValueError("a record name is required to replace by type and name")
            self.replace_records_by_type_and_name(
                customer_id, domain, record_type, name, records
            )
        else:
            raise ValueError(f"Unsupported write mode: {mode}")
        return True

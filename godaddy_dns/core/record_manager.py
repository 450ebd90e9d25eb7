"""
Record Manager - Reconciliation of desired and remote domain records

This module decides which registrar writes bring a domain's remote
records in line with a desired record set, and executes them in order.
Three strategies are available:

- CREATE: merge each declared type into the zone (additive)
- REPLACE: overwrite each declared type wholesale (full replace)
- UPDATE: correct changed non-apex records one (type, name) at a time and
  rewrite the apex records per type (scoped diff)

Writes never carry an empty NS or SOA list.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from ..exceptions import ReconciliationCancelled, RegistrarError
from ..providers.base_provider import WriteMode
from .records import (
    APEX,
    DEFAULT_RECORDS,
    DomainRecord,
    RecordType,
    is_default_address_record,
    is_default_nameserver_record,
    is_type_submission_disallowed,
    records_of_type,
)

logger = logging.getLogger(__name__)


class ReconcileStrategy(Enum):
    """How desired records are written to the registrar."""

    UPDATE = "update"
    CREATE = "create"
    REPLACE = "replace"


@dataclass(frozen=True)
class WriteOperation:
    """One planned registrar write."""

    mode: WriteMode
    record_type: RecordType
    records: List[DomainRecord]
    name: Optional[str] = None

    def describe(self) -> str:
        if self.mode == WriteMode.ADD:
            return f"add {self.record_type} records"
        if self.mode == WriteMode.REPLACE_TYPE:
            return f"replace {self.record_type} records"
        return f"replace {self.record_type} records named '{self.name}'"


@dataclass
class DomainRecordState:
    """Remote records split into shortcut lists and explicit records."""

    addresses: List[str] = field(default_factory=list)
    nameservers: List[str] = field(default_factory=list)
    records: List[DomainRecord] = field(default_factory=list)


class RecordManager:
    """Plans and applies DNS record writes."""

    def __init__(self, dns_client):
        """Initialize record manager with DNS client."""
        self.dns_client = dns_client

    def reconcile(
        self,
        customer_id: str,
        domain: str,
        desired: List[DomainRecord],
        strategy: ReconcileStrategy = ReconcileStrategy.UPDATE,
        cancel_event=None,
    ) -> List[WriteOperation]:
        """
        Converge the remote records of ``domain`` toward ``desired``.

        Args:
            customer_id: Optional end-customer the calls are made for
            domain: Domain name
            desired: Fully expanded desired records
            strategy: Which write strategy to use
            cancel_event: Optional threading.Event checked between writes

        Returns:
            The write operations that were submitted
        """
        plan = self.plan(customer_id, domain, desired, strategy)
        return self.apply(customer_id, domain, plan, cancel_event=cancel_event)

    def plan(
        self,
        customer_id: str,
        domain: str,
        desired: List[DomainRecord],
        strategy: ReconcileStrategy,
    ) -> List[WriteOperation]:
        """Build the write plan for a strategy, fetching remote records if needed."""
        if strategy == ReconcileStrategy.CREATE:
            return self.plan_additive(desired)
        if strategy == ReconcileStrategy.REPLACE:
            return self.plan_full_replace(desired)

        remote = self.fetch_records(customer_id, domain)
        return self.plan_scoped(desired, remote)

    def fetch_records(self, customer_id: str, domain: str) -> List[DomainRecord]:
        logger.info(f"Fetching {domain} records...")
        try:
            return self.dns_client.list_records(customer_id, domain)
        except RegistrarError as e:
            raise e.with_step(f"couldn't fetch records of {domain}")

    def plan_additive(self, desired: List[DomainRecord]) -> List[WriteOperation]:
        """Plan one additive write per type that has desired records."""
        plan = []
        for record_type in RecordType:
            records = records_of_type(record_type, desired)
            if not records:
                continue
            plan.append(WriteOperation(WriteMode.ADD, record_type, records))
        return plan

    def plan_full_replace(self, desired: List[DomainRecord]) -> List[WriteOperation]:
        """
        Plan one replace-by-type write per type present in ``desired``.

        Remote records of a planned type that are not desired are removed by
        omission; types that are not declared at all are left untouched.
        """
        plan = []
        for record_type in RecordType:
            records = records_of_type(record_type, desired)
            if not records or is_type_submission_disallowed(record_type, records):
                continue
            plan.append(WriteOperation(WriteMode.REPLACE_TYPE, record_type, records))
        return plan

    def plan_scoped(
        self, desired: List[DomainRecord], remote: List[DomainRecord]
    ) -> List[WriteOperation]:
        """
        Plan the narrowest writes correcting ``remote`` toward ``desired``.

        Non-apex records are grouped by (type, name). A group is rewritten
        whole when the remote holds records with the same type and name and
        their data differs from the group's. Apex records are always rewritten per type,
        one (type, "@") write each.
        """
        apex = [record for record in desired if record.name == APEX]
        scoped = [record for record in desired if record.name != APEX]

        remote_slots: Dict[tuple, List[DomainRecord]] = {}
        for record in remote:
            remote_slots.setdefault(record.slot, []).append(record)

        groups: "OrderedDict[tuple, List[DomainRecord]]" = OrderedDict()
        for record in scoped:
            groups.setdefault(record.slot, []).append(record)

        plan = []
        for (record_type, name), records in groups.items():
            existing = remote_slots.get((record_type, name), [])
            current = {record.data for record in existing}
            wanted = {record.data for record in records}
            if not existing or current == wanted:
                logger.debug(f"No change needed: {record_type} {name}")
                continue

            logger.info(
                f"Update needed: {record_type} {name} "
                f"{', '.join(sorted(current))} -> {', '.join(sorted(wanted))}"
            )
            plan.append(WriteOperation(WriteMode.REPLACE_TYPE_NAME, record_type, records, name))

        for record_type in RecordType:
            records = records_of_type(record_type, apex)
            if not records or is_type_submission_disallowed(record_type, records):
                continue
            plan.append(WriteOperation(WriteMode.REPLACE_TYPE_NAME, record_type, records, APEX))

        return plan

    def apply(
        self,
        customer_id: str,
        domain: str,
        plan: List[WriteOperation],
        cancel_event=None,
    ) -> List[WriteOperation]:
        """
        Execute a plan in order.

        The first failing write stops the plan; writes already applied stay
        applied. The error propagates with the failing step recorded on it.
        """
        applied = []
        for operation in plan:
            if cancel_event is not None and cancel_event.is_set():
                raise ReconciliationCancelled(
                    f"reconciliation of {domain} cancelled"
                ).with_step(operation.describe())

            try:
                submitted = self.dns_client.write_records(
                    customer_id,
                    domain,
                    operation.mode,
                    operation.record_type,
                    operation.records,
                    name=operation.name,
                )
            except RegistrarError as e:
                logger.error(f"Failed to {operation.describe()} of {domain}: {e.describe()}")
                raise e.with_step(f"couldn't {operation.describe()} of {domain}")

            if submitted:
                applied.append(operation)

        logger.info(f"Applied {len(applied)}/{len(plan)} writes to {domain}")
        return applied

    def read_state(
        self, customer_id: str, domain: str, manage_nameservers: bool = True
    ) -> DomainRecordState:
        """Fetch remote records and split out the apex shortcut records."""
        state = DomainRecordState()
        for record in self.fetch_records(customer_id, domain):
            if is_default_nameserver_record(record):
                if manage_nameservers:
                    state.nameservers.append(record.data)
            elif is_default_address_record(record):
                state.addresses.append(record.data)
            else:
                state.records.append(record)
        return state

    def restore_defaults(self, customer_id: str, domain: str) -> List[WriteOperation]:
        """Write the registrar's default records back to the domain."""
        logger.info(f"Restoring {domain} domain records...")
        plan = [
            WriteOperation(WriteMode.REPLACE_TYPE_NAME, record.type, [record], record.name)
            for record in DEFAULT_RECORDS
        ]
        return self.apply(customer_id, domain, plan)

    @staticmethod
    def summarize(plan: List[WriteOperation]) -> Dict:
        """Count planned writes and records per write mode."""
        summary = {mode: {"writes": 0, "records": 0} for mode in WriteMode}
        for operation in plan:
            summary[operation.mode]["writes"] += 1
            summary[operation.mode]["records"] += len(operation.records)
        summary["total_writes"] = len(plan)
        return summary

"""
DNS Manager - Orchestrates reconciliation runs against the registrar

This module resolves the domain, builds a write plan for the desired
records, shows it, and applies it unless running in dry-run mode.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ..exceptions import RegistrarError
from ..providers.base_provider import WriteMode
from ..providers.dns_client import DNSClient
from .record_manager import RecordManager, ReconcileStrategy, WriteOperation
from .resource import DomainRecordResource

console = Console()
logger = logging.getLogger(__name__)


class DNSManager:
    """Main DNS management class that orchestrates the entire process."""

    def __init__(self, config: Dict, dns_client: Optional[DNSClient] = None):
        """Initialize the DNS manager with configuration."""
        self.config = config
        self.dns_client = dns_client or DNSClient(config)
        self.record_manager = RecordManager(self.dns_client)

    def process_records(
        self,
        resource: DomainRecordResource,
        strategy: ReconcileStrategy = ReconcileStrategy.UPDATE,
        dry_run: bool = False,
        output_file: Optional[str] = None,
    ) -> bool:
        """Reconcile the registrar's records with a desired resource."""
        try:
            domain = self._lookup_domain(resource)
            console.print(
                f"[green]Managing {domain.name} (id {domain.id}, {domain.status or 'unknown'})[/green]"
            )
            if not domain.is_active:
                logger.warning(
                    f"Domain {domain.name} is {domain.status or 'of unknown status'}; "
                    "the registrar may reject record changes"
                )
                console.print(
                    f"[yellow]Warning: {domain.name} is not active ({domain.status or 'unknown'})[/yellow]"
                )

            desired = resource.converge()
            console.print(
                f"[blue]Desired state holds {len(desired)} records ({strategy.value} strategy)[/blue]"
            )

            plan = self.record_manager.plan(
                resource.customer, resource.domain, desired, strategy
            )
            self._display_plan_summary(plan)

            if dry_run:
                console.print(
                    "[yellow]DRY RUN MODE - No changes will be applied[/yellow]"
                )
                if output_file:
                    self._save_dry_run_output(resource.domain, plan, output_file)
                    console.print(f"[green]Dry run output saved to: {output_file}[/green]")
                return True

            if not plan:
                console.print(
                    "[green]No changes required - DNS records are up to date[/green]"
                )
                return True

            applied = self._apply_plan(resource, plan)
            console.print(
                f"[green]Applied {len(applied)}/{len(plan)} writes to {resource.domain}[/green]"
            )
            return True

        except RegistrarError as e:
            logger.error(f"Error reconciling {resource.domain}: {e}")
            console.print(f"[red]Error: {e}[/red]")
            return False

    def show_state(self, resource: DomainRecordResource) -> bool:
        """Display the current remote records of a domain."""
        try:
            state = self.record_manager.read_state(
                resource.customer, resource.domain, resource.replace_nameservers
            )
        except RegistrarError as e:
            logger.error(f"Error reading {resource.domain}: {e}")
            console.print(f"[red]Error: {e}[/red]")
            return False

        table = Table(title=f"{resource.domain} records")
        table.add_column("Type", style="cyan")
        table.add_column("Name", style="magenta")
        table.add_column("Data", style="white")
        table.add_column("TTL", style="white")

        for address in state.addresses:
            table.add_row("A", "@", address, "default")
        for nameserver in state.nameservers:
            table.add_row("NS", "@", nameserver, "default")
        for record in state.records:
            table.add_row(record.type.value, record.name, record.data, str(record.ttl))

        console.print(table)
        return True

    def restore(self, resource: DomainRecordResource) -> bool:
        """Restore the registrar's default records on a domain."""
        try:
            self._lookup_domain(resource)
            applied = self.record_manager.restore_defaults(resource.customer, resource.domain)
        except RegistrarError as e:
            logger.error(f"Error restoring {resource.domain}: {e}")
            console.print(f"[red]Error: {e}[/red]")
            return False

        console.print(
            f"[green]Restored {len(applied)} default records on {resource.domain}[/green]"
        )
        return True

    def list_domains(self, customer_id: str = "") -> bool:
        """Display the domains of the account."""
        try:
            domains = self.dns_client.list_domains(customer_id)
        except RegistrarError as e:
            logger.error(f"Error listing domains: {e}")
            console.print(f"[red]Error: {e}[/red]")
            return False

        table = Table(title="Domains")
        table.add_column("ID", style="cyan")
        table.add_column("Domain", style="magenta")
        table.add_column("Status", style="white")
        for domain in domains:
            table.add_row(str(domain.id), domain.name, domain.status)

        console.print(table)
        return True

    def _lookup_domain(self, resource: DomainRecordResource):
        logger.info(f"Fetching {resource.domain} info...")
        try:
            return self.dns_client.get_domain(resource.customer, resource.domain)
        except RegistrarError as e:
            raise e.with_step(f"couldn't find domain ({resource.domain})")

    def _display_plan_summary(self, plan: List[WriteOperation]):
        """Display a summary of planned writes."""
        table = Table(title="DNS Changes Summary")
        table.add_column("Operation", style="cyan")
        table.add_column("Type", style="magenta")
        table.add_column("Name", style="white")
        table.add_column("Records", style="white")

        for operation in plan:
            table.add_row(
                operation.mode.value,
                operation.record_type.value,
                operation.name or "*",
                ", ".join(record.data for record in operation.records),
            )

        console.print(table)
        summary = RecordManager.summarize(plan)
        console.print(f"\n[bold]Total writes: {summary['total_writes']}[/bold]")

    def _apply_plan(
        self, resource: DomainRecordResource, plan: List[WriteOperation]
    ) -> List[WriteOperation]:
        """Apply planned writes one at a time, showing progress."""
        applied = []
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Applying DNS changes...", total=len(plan))
            for operation in plan:
                applied.extend(
                    self.record_manager.apply(resource.customer, resource.domain, [operation])
                )
                progress.update(task, advance=1)
        return applied

    def _save_dry_run_output(self, domain: str, plan: List[WriteOperation], output_file: str):
        """Save dry run output to a file."""
        summary = RecordManager.summarize(plan)
        with open(output_file, "w") as f:
            f.write("=" * 60 + "\n")
            f.write("GODADDY DNS RECORDS MANAGER - DRY RUN SUMMARY\n")
            f.write("=" * 60 + "\n\n")

            f.write(f"Domain: {domain}\n")
            f.write(f"Total Writes: {summary['total_writes']}\n")
            f.write(f"Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")

            for mode in WriteMode:
                operations = [op for op in plan if op.mode == mode]
                if not operations:
                    continue
                f.write(f"{mode.value.upper()} WRITES:\n")
                f.write("-" * 20 + "\n")
                for operation in operations:
                    target = f"{operation.record_type.value} {operation.name or '*'}"
                    f.write(f"  ~ {target:<30}\n")
                    for record in operation.records:
                        f.write(f"      {record.name:<20} -> {record.data}\n")
                f.write("\n")

            f.write("=" * 60 + "\n")
            f.write("END OF DRY RUN SUMMARY\n")
            f.write("=" * 60 + "\n")

        logger.info(f"Dry run output saved to: {output_file}")

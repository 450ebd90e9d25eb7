#!/usr/bin/env python3
"""
GoDaddy DNS Records Manager - Command Line Interface

Main entry point for the GoDaddy DNS Records Manager CLI.
"""

import argparse
import logging
import sys
from pathlib import Path

from ..config import config_logger, load_config
from ..core.dns_manager import DNSManager
from ..core.record_manager import ReconcileStrategy
from ..core.resource import DomainRecordResource
from ..exceptions import RegistrarError
from ..parsers.csv import CSVParser

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="GoDaddy DNS Records Manager - Reconcile domain records with GoDaddy"
    )

    parser.add_argument(
        "action",
        choices=["apply", "show", "restore", "domains"],
        help="apply desired records, show remote records, restore defaults or list domains",
    )

    parser.add_argument(
        "--config",
        "-c",
        default="configs/config.yaml",
        help="Configuration file path (default: configs/config.yaml)",
    )

    parser.add_argument("--domain", "-d", help="Domain to manage")

    parser.add_argument(
        "--customer", default="", help="End-customer (shopper) ID to act for"
    )

    parser.add_argument("--csv", "-f", help="CSV file containing DNS records")

    parser.add_argument(
        "--address",
        action="append",
        default=[],
        help="Apex A record address (repeatable)",
    )

    parser.add_argument(
        "--nameserver",
        action="append",
        default=[],
        help="Apex NS record host (repeatable)",
    )

    parser.add_argument(
        "--strategy",
        choices=[s.value for s in ReconcileStrategy],
        default=ReconcileStrategy.UPDATE.value,
        help="update: correct changed records, create: add records, replace: overwrite declared types",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be changed without making changes",
    )

    parser.add_argument(
        "--output-file",
        "-o",
        help="File to save dry run output (only used with --dry-run)",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.output_file and not args.dry_run:
        print("Error: --output-file can only be used with --dry-run")
        sys.exit(1)

    if args.action != "domains" and not args.domain:
        print(f"Error: --domain is required for '{args.action}'")
        sys.exit(1)

    if args.csv and not Path(args.csv).exists():
        print(f"Error: CSV file '{args.csv}' not found")
        sys.exit(1)

    try:
        config = load_config(args.config)
        config_logger(config, verbose=args.verbose)

        dns_manager = DNSManager(config)
        if args.action == "domains":
            success = dns_manager.list_domains(args.customer)
        else:
            resource = build_resource(config, args)
            success = run_action(dns_manager, args, resource)

    except (RegistrarError, ValueError, OSError) as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    if success:
        print("DNS record management completed successfully")
        sys.exit(0)
    else:
        print("DNS record management failed")
        sys.exit(1)


def build_resource(config, args) -> DomainRecordResource:
    """
    Build the desired state of ``args.domain``.

    The matching entry of the config's ``resources`` list, if any, is the
    base; CSV records and --address/--nameserver values are added to it.
    """
    description = next(
        (
            entry
            for entry in config.get("resources") or []
            if entry.get("domain") == args.domain
        ),
        {},
    )
    declared = DomainRecordResource.from_config({**description, "domain": args.domain})
    if description:
        logger.info(
            f"Loaded {len(declared.records)} declared records for {args.domain} from config"
        )

    return DomainRecordResource(
        domain=args.domain,
        customer=args.customer or declared.customer,
        records=declared.records + (CSVParser(args.csv).parse() if args.csv else []),
        addresses=declared.addresses + args.address,
        nameservers=declared.nameservers + args.nameserver,
    )


def run_action(dns_manager: DNSManager, args, resource: DomainRecordResource) -> bool:
    if args.action == "show":
        return dns_manager.show_state(resource)
    if args.action == "restore":
        return dns_manager.restore(resource)

    return dns_manager.process_records(
        resource,
        ReconcileStrategy(args.strategy),
        dry_run=args.dry_run,
        output_file=args.output_file if args.dry_run else None,
    )


if __name__ == "__main__":
    main()

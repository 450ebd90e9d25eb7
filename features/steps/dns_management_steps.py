"""
Step definitions for GoDaddy DNS Records Manager integration tests.
"""

import csv
import threading

from behave import given, then, when

from godaddy_dns.core.dns_manager import DNSManager
from godaddy_dns.core.record_manager import ReconcileStrategy
from godaddy_dns.core.records import new_domain_record, records_of_type
from godaddy_dns.core.resource import DomainRecordResource
from godaddy_dns.exceptions import RegistrarError
from godaddy_dns.parsers.csv import CSVParser
from godaddy_dns.providers.base_provider import WriteMode


def remote_records(context):
    return context.registrar.records[context.test_domain]


def remote_rows(context, record_type):
    return sorted(
        (record.name, record.data) for record in records_of_type(record_type, remote_records(context))
    )


@given("the DNS Records Manager is configured with the mock registrar")
def step_impl(context):
    """Configure the DNS Records Manager with the in-memory registrar."""
    context.dns_manager = DNSManager(context.test_config)
    context.registrar = context.dns_manager.dns_client.provider
    assert context.dns_manager.record_manager is not None


@given("the domain has the following records")
def step_impl(context):
    """Seed the registrar with remote records."""
    context.registrar.records[context.test_domain] = [
        new_domain_record(row["name"], row["type"], row["data"], int(row.get("ttl") or 3600))
        for row in context.table
    ]


@given("I want the following records")
def step_impl(context):
    """Declare desired records."""
    context.desired_records = [
        new_domain_record(row["name"], row["type"], row["data"]) for row in context.table
    ]


@given('I want the apex address "{address}"')
def step_impl(context, address):
    context.addresses.append(address)


@given('I want the nameserver "{host}"')
def step_impl(context, host):
    context.nameservers.append(host)


@given("I have a CSV file with the following rows")
def step_impl(context):
    """Write a CSV file from the scenario table."""
    context.csv_file = context.test_data_dir / f"{context.scenario_name.replace(' ', '_')}.csv"
    with open(context.csv_file, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=context.table.headings)
        writer.writeheader()
        for row in context.table:
            writer.writerow(dict(zip(context.table.headings, row.cells)))


def build_resource(context, domain=None):
    return DomainRecordResource(
        domain=domain or context.test_domain,
        records=list(context.desired_records),
        addresses=list(context.addresses),
        nameservers=list(context.nameservers),
    )


@when('I reconcile with the "{strategy}" strategy')
def step_impl(context, strategy):
    context.calls_before = len(context.registrar.calls)
    context.result = context.dns_manager.process_records(
        build_resource(context), ReconcileStrategy(strategy)
    )


@when('I reconcile with the "{strategy}" strategy in dry run mode')
def step_impl(context, strategy):
    context.snapshot = list(remote_records(context))
    context.output_file = context.test_data_dir / "dry_run_output.txt"
    context.result = context.dns_manager.process_records(
        build_resource(context),
        ReconcileStrategy(strategy),
        dry_run=True,
        output_file=str(context.output_file),
    )


@when('I reconcile the unknown domain "{domain}"')
def step_impl(context, domain):
    context.result = context.dns_manager.process_records(build_resource(context, domain))


@when('I process the CSV file with the "{strategy}" strategy')
def step_impl(context, strategy):
    try:
        context.desired_records = CSVParser(str(context.csv_file)).parse()
    except (RegistrarError, ValueError) as e:
        context.error = str(e)
        context.result = False
        return

    context.result = context.dns_manager.process_records(
        build_resource(context), ReconcileStrategy(strategy)
    )


@when("I restore the default records")
def step_impl(context):
    context.result = context.dns_manager.restore(build_resource(context))


@when("I reconcile from {count:d} threads at once")
def step_impl(context, count):
    """Run several reconciliations of the same desired state concurrently."""
    results = []
    lock = threading.Lock()

    def reconcile():
        applied = context.dns_manager.record_manager.reconcile(
            "", context.test_domain, build_resource(context).converge(), ReconcileStrategy.CREATE
        )
        with lock:
            results.append(len(applied) == 1)

    threads = [threading.Thread(target=reconcile) for _ in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    context.result = all(results) and len(results) == count


@then("the operation should succeed")
def step_impl(context):
    assert context.result is True, f"Operation failed: {context.error}"


@then("the operation should fail")
def step_impl(context):
    assert context.result is False


@then('the error should mention "{text}"')
def step_impl(context, text):
    assert context.error and text in context.error, f"Unexpected error: {context.error}"


@then('the remote "{record_type}" records should be')
def step_impl(context, record_type):
    expected = sorted((row["name"], row["data"]) for row in context.table)
    actual = remote_rows(context, record_type)
    assert actual == expected, f"Expected {expected}, got {actual}"


@then('the remote should have no "{record_type}" records')
def step_impl(context, record_type):
    assert remote_rows(context, record_type) == []


@then("the remote records should be unchanged")
def step_impl(context):
    assert remote_records(context) == context.snapshot


@then("no writes should have been sent")
def step_impl(context):
    assert context.registrar.calls == [], f"Unexpected writes: {context.registrar.calls}"


@then("{count:d} writes should have been sent")
def step_impl(context, count):
    sent = len(context.registrar.calls) - context.calls_before
    assert sent == count, f"Expected {count} writes, got {sent}"


@then('no empty "{record_type}" write should have been sent')
def step_impl(context, record_type):
    for _, sent_type, _, records in context.registrar.calls:
        assert not (sent_type.value == record_type and not records)


@then('the writes should only replace records named "{names}"')
def step_impl(context, names):
    expected = set(names.split(","))
    for mode, _, name, _ in context.registrar.calls[context.calls_before:]:
        assert mode == WriteMode.REPLACE_TYPE_NAME, f"Unexpected write mode {mode}"
        assert name in expected, f"Unexpected write for '{name}'"


@then('the dry run output should contain "{text}"')
def step_impl(context, text):
    with open(context.output_file) as f:
        assert text in f.read()

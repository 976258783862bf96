"""
Step definitions for IPAM DNS Sync scenarios.
"""

from behave import given, then, when

from ipam_dns_sync.core.exceptions import PlanExecutionError
from ipam_dns_sync.core.models import RecordAction
from ipam_dns_sync.core.sync_manager import SyncManager
from ipam_dns_sync.providers.mock_provider import MockDNSProvider
from ipam_dns_sync.utils.config import AppConfig, SyncSettings


def _manager(context):
    """Build the manager on first use, once the scenario's settings are known."""
    if getattr(context, "manager", None) is None:
        config = AppConfig(
            sync=SyncSettings(
                domain=context.domain,
                skip_forward_record=context.skip_forward,
                skip_reverse_record=context.skip_reverse,
            ),
            default_provider="mock",
        )
        context.provider = MockDNSProvider({"fail_on": context.fail_on})
        context.manager = SyncManager(config, provider_factory=lambda: context.provider)
    return context.manager


def _payload(event, address, name, old_address=None, old_name=None):
    prechange = None
    if old_address:
        prechange = {"address": old_address, "dns_name": old_name}
    return {
        "event": event,
        "model": "ipaddress",
        "data": {"address": address, "dns_name": name},
        "snapshots": {"prechange": prechange},
    }


def _send(context, payload):
    try:
        context.plan = _manager(context).handle_payload(payload)
    except PlanExecutionError as e:
        context.error = e


@given('IPAM DNS Sync is configured for the domain "{domain}"')
def step_impl(context, domain):
    """Configure the domain for the scenario."""
    context.domain = domain
    context.manager = None


@given("forward records are skipped")
def step_impl(context):
    context.skip_forward = True


@given('the DNS server rejects "{failure}" changes')
def step_impl(context, failure):
    context.fail_on = [failure]


@given('IPAM reported that "{address}" was created with name "{name}"')
def step_impl(context, address, name):
    """Seed the mock DNS server through a created event."""
    _send(context, _payload("created", address, name))
    assert context.error is None, context.error


@when('IPAM reports that "{address}" was created with name "{name}"')
def step_impl(context, address, name):
    _send(context, _payload("created", address, name))


@when('IPAM reports that "{old_address}" named "{old_name}" was updated to "{address}" named "{name}"')
def step_impl(context, old_address, old_name, address, name):
    _send(context, _payload("updated", address, name, old_address, old_name))


@when('IPAM reports that "{address}" named "{name}" was deleted')
def step_impl(context, address, name):
    _send(context, _payload("deleted", address, name))


@then('the {record_type} record "{name}" in zone "{zone}" points to "{value}"')
def step_impl(context, record_type, name, zone, value):
    """Verify a record set holds the expected value."""
    record = context.provider.get_record(zone, name, record_type)
    assert record is not None, f"No {record_type} record {name} in {zone}"
    assert record["values"] == [value], f"Unexpected values {record['values']}"
    assert record["ttl"] == 86400


@then('there is no {record_type} record "{name}" in zone "{zone}"')
def step_impl(context, record_type, name, zone):
    assert context.provider.get_record(zone, name, record_type) is None


@then("the mock DNS server holds no records")
def step_impl(context):
    assert context.provider.records == {}, context.provider.records


@then("the plan deleted stale records before writing new ones")
def step_impl(context):
    actions = [operation.action for operation in context.plan]
    first_upsert = actions.index(RecordAction.UPSERT)
    assert all(action == RecordAction.DELETE for action in actions[:first_upsert])
    assert RecordAction.DELETE not in actions[first_upsert:]


@then("processing fails at step {step:d}")
def step_impl(context, step):
    assert context.error is not None, "Processing succeeded"
    assert context.error.step + 1 == step, f"Failed at step {context.error.step + 1}"

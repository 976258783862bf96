"""
Record Planner - Core logic for translating IPAM changes into DNS operations

This module turns a ChangeEvent into an ordered ReconciliationPlan. Stale
records derived from the prechange snapshot are always deleted before the
new records are written, so a host is never briefly published with two
different targets. Planning performs no I/O.
"""

import logging
from typing import List, Optional

from .exceptions import InvalidAddressError
from .models import (
    DEFAULT_TTL,
    AddressFamily,
    AddressPrefix,
    ChangeEvent,
    EventKind,
    ReconciliationPlan,
    RecordOperation,
    RecordType,
)
from .reverse_zone import IPV6_ZONE_NIBBLES, resolve_reverse
from ..utils.config import SyncSettings
from ..utils.validators import classify_address, is_in_domain, normalize_name

logger = logging.getLogger(__name__)


class RecordPlanner:
    """Builds reconciliation plans for a single configured domain."""

    def __init__(self, settings: SyncSettings):
        """Initialize the planner with read-only sync settings."""
        self.settings = settings
        self.domain = normalize_name(settings.domain)

    def plan(self, event: ChangeEvent) -> ReconciliationPlan:
        """
        Build the ordered list of operations for a change event.

        Args:
            event: The decoded IPAM change

        Returns:
            ReconciliationPlan with deletes before upserts

        Raises:
            InvalidAddressError: The event carries no usable address
            UnsupportedFamilyError: The address is neither IPv4 nor IPv6
        """
        operations: List[RecordOperation] = []

        if event.kind == EventKind.DELETED:
            if event.new_address is None:
                raise InvalidAddressError("Deleted event carries no address")
            operations.extend(self._delete_operations(event.new_address, event.new_name))
            return self._finish(event, operations)

        # Stale records are deleted before the new ones are written
        if event.old_address is not None and event.old_name:
            operations.extend(self._delete_operations(event.old_address, event.old_name))

        operations.extend(self._upsert_operations(event.new_address, event.new_name))
        return self._finish(event, operations)

    def _delete_operations(self, address: AddressPrefix, name: str) -> List[RecordOperation]:
        """Return the deletes for an address/name pair, honouring skip flags."""
        target = resolve_reverse(address, self.settings.ipv6_zone_nibbles)
        dns_name = normalize_name(name)
        operations = []

        if not self.settings.skip_reverse_record:
            operations.append(RecordOperation.delete(target.zone, target.record, RecordType.PTR))

        if not self.settings.skip_forward_record and is_in_domain(dns_name, self.domain):
            operations.append(
                RecordOperation.delete(self.domain, dns_name, _forward_type(address))
            )

        return operations

    def _upsert_operations(self, address: Optional[AddressPrefix], name: str) -> List[RecordOperation]:
        """Return the upserts for the new address/name pair."""
        if address is None:
            raise InvalidAddressError("Event carries no new address")

        target = resolve_reverse(address, self.settings.ipv6_zone_nibbles)
        dns_name = normalize_name(name)
        if not dns_name:
            logger.info(f"No DNS name assigned to {address}, skipping record creation")
            return []

        operations = []

        if not self.settings.skip_reverse_record:
            operations.append(
                RecordOperation.upsert(
                    target.zone, target.record, RecordType.PTR, [dns_name], DEFAULT_TTL
                )
            )

        if not self.settings.skip_forward_record:
            if is_in_domain(dns_name, self.domain):
                operations.append(
                    RecordOperation.upsert(
                        self.domain, dns_name, _forward_type(address), [address.ip], DEFAULT_TTL
                    )
                )
            else:
                logger.info(f"{dns_name} is outside {self.domain}, skipping forward record")

        return operations

    def _finish(self, event: ChangeEvent, operations: List[RecordOperation]) -> ReconciliationPlan:
        plan = ReconciliationPlan(tuple(operations))
        logger.debug(
            f"Planned {len(plan.deletes())} deletes and {len(plan.upserts())} upserts "
            f"for {event.kind.value} event"
        )
        return plan


def _forward_type(address: AddressPrefix) -> RecordType:
    if classify_address(address) == AddressFamily.IPV4:
        return RecordType.A
    return RecordType.AAAA


def plan_changes(
    event: ChangeEvent,
    domain: str,
    skip_forward: bool = False,
    skip_reverse: bool = False,
    ipv6_zone_nibbles: int = IPV6_ZONE_NIBBLES,
) -> ReconciliationPlan:
    """Plan an event without building a RecordPlanner by hand."""
    settings = SyncSettings(
        domain=normalize_name(domain),
        skip_forward_record=skip_forward,
        skip_reverse_record=skip_reverse,
        ipv6_zone_nibbles=ipv6_zone_nibbles,
    )
    return RecordPlanner(settings).plan(event)

"""
Sync Manager - Per-event pipeline for IPAM to DNS synchronization

Each event is handled independently and synchronously: the payload is
decoded, a plan is built, and the plan is applied against a DNS provider
created for this event alone. Only the read-only configuration is shared
between events.
"""

import logging
import threading
from datetime import datetime
from typing import Callable, Dict, Optional, Union

from rich.console import Console
from rich.table import Table

from .exceptions import DNSSyncError
from .executor import ReconciliationExecutor
from .models import ChangeEvent, RecordAction, ReconciliationPlan
from .record_planner import RecordPlanner
from ..parsers.webhook import WebhookParser
from ..providers.base_provider import DNSProvider
from ..providers.dns_client import DNSClient
from ..utils.config import AppConfig

console = Console()
logger = logging.getLogger(__name__)


class RequestLogAdapter(logging.LoggerAdapter):
    """Prefixes messages with the IPAM request id so one event can be followed."""

    def process(self, msg, kwargs):
        request_id = self.extra.get("request_id")
        if request_id:
            return f"{request_id} {msg}", kwargs
        return msg, kwargs


class SyncManager:
    """Main synchronization class that orchestrates planning and execution."""

    def __init__(
        self,
        config: AppConfig,
        provider_factory: Optional[Callable[[], DNSProvider]] = None,
    ):
        """Initialize the manager with configuration and a provider factory."""
        self.config = config
        self.planner = RecordPlanner(config.sync)
        if provider_factory is None:
            provider_factory = DNSClient(config).new_provider
        self.provider_factory = provider_factory

    def handle_payload(self, payload: Union[bytes, str, Dict], dry_run: bool = False) -> ReconciliationPlan:
        """Decode a webhook payload and process the resulting event."""
        event = WebhookParser(payload).parse()
        return self.process_event(event, dry_run=dry_run)

    def process_event(
        self,
        event: ChangeEvent,
        dry_run: bool = False,
        cancel_event: Optional[threading.Event] = None,
    ) -> ReconciliationPlan:
        """
        Plan and apply the DNS changes for one event.

        Args:
            event: The decoded change event
            dry_run: Build the plan without calling the DNS API
            cancel_event: Set by the caller to abandon the remaining steps

        Returns:
            The plan that was (or, in a dry run, would have been) applied

        Raises:
            DNSSyncError: Planning failed, before any API call was made
            PlanExecutionError: An API call failed partway through the plan
        """
        log = RequestLogAdapter(logger, {"request_id": event.request_id})
        log.info(
            f"Received {event.kind.value} event for {event.new_address} "
            f"({event.new_name or 'no name'})"
        )

        try:
            plan = self.planner.plan(event)
        except DNSSyncError as e:
            log.error(f"Could not plan DNS changes: {e}")
            raise

        if plan.is_empty():
            log.info("No DNS changes required")
            return plan

        if dry_run:
            log.info(f"Dry run: {len(plan)} DNS changes planned, none applied")
            return plan

        provider = self.provider_factory()
        try:
            ReconciliationExecutor(provider, log).execute(plan, cancel_event)
        finally:
            provider.close()

        log.info(f"Applied {len(plan)} DNS changes")
        return plan

    def display_plan(self, plan: ReconciliationPlan, event: Optional[ChangeEvent] = None):
        """Display a table of planned operations."""
        title = "DNS Changes"
        if event is not None:
            title += f" for {event.kind.value} {event.new_address}"

        table = Table(title=title)
        table.add_column("#", style="cyan")
        table.add_column("Action", style="magenta")
        table.add_column("Type")
        table.add_column("Zone")
        table.add_column("Name")
        table.add_column("Values", style="white")

        for step, operation in enumerate(plan, start=1):
            style = "red" if operation.action == RecordAction.DELETE else "green"
            table.add_row(
                str(step),
                f"[{style}]{operation.action.value}[/{style}]",
                operation.record_type.value,
                operation.zone,
                operation.name,
                ", ".join(operation.values),
            )

        console.print(table)
        console.print(f"\n[bold]Total changes: {len(plan)}[/bold]")

    def save_plan_output(self, plan: ReconciliationPlan, output_file: str):
        """Save a dry run plan summary to a file."""
        with open(output_file, "w") as f:
            f.write("=" * 60 + "\n")
            f.write("IPAM DNS SYNC - DRY RUN SUMMARY\n")
            f.write("=" * 60 + "\n\n")

            f.write(f"Total Changes: {len(plan)}\n")
            f.write(f"Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")

            for operation in plan:
                marker = "-" if operation.action == RecordAction.DELETE else "+"
                f.write(f"  {marker} {operation.record_type.value:<5} {operation.name:<40}")
                if operation.values:
                    f.write(f" -> {', '.join(operation.values)}")
                f.write("\n")

            f.write("\n" + "=" * 60 + "\n")

        logger.info(f"Dry run output saved to: {output_file}")

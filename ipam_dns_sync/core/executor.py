"""
Reconciliation executor.

Applies a plan against a DNS provider one operation at a time, in plan
order. The first failure stops execution; operations already applied are
not rolled back, so a failed event can leave stale records behind until the
next event for the same address.
"""

import logging
import threading
from typing import List, Optional

from .exceptions import ApiError, PlanExecutionError
from .models import RecordAction, RecordOperation, ReconciliationPlan
from ..providers.base_provider import DNSProvider

logger = logging.getLogger(__name__)


class ReconciliationExecutor:
    """Runs ReconciliationPlans strictly sequentially."""

    def __init__(self, provider: DNSProvider, log: Optional[logging.LoggerAdapter] = None):
        self.provider = provider
        self.log = log or logger

    def execute(
        self, plan: ReconciliationPlan, cancel_event: Optional[threading.Event] = None
    ) -> List[RecordOperation]:
        """
        Apply every operation of a plan.

        Args:
            plan: The plan to apply
            cancel_event: Once set, no further step is started

        Returns:
            The applied operations, in order

        Raises:
            PlanExecutionError: An operation failed or the plan was cancelled;
                later steps were skipped
        """
        applied: List[RecordOperation] = []

        for step, operation in enumerate(plan):
            if cancel_event is not None and cancel_event.is_set():
                self.log.error(
                    f"Processing cancelled, abandoning step {step + 1}/{len(plan)}: {operation.describe()}"
                )
                self._warn_partial(applied)
                raise PlanExecutionError(
                    step, operation, applied, ApiError("Processing cancelled before this step")
                )

            try:
                self._apply(operation)
            except (ApiError, OSError) as e:
                cause = e if isinstance(e, ApiError) else ApiError(str(e))
                self.log.error(
                    f"Step {step + 1}/{len(plan)} failed: {operation.describe()}: {e}"
                )
                self._warn_partial(applied)
                raise PlanExecutionError(step, operation, applied, cause) from e

            applied.append(operation)
            self.log.info(f"Applied step {step + 1}/{len(plan)}: {operation.describe()}")

        return applied

    def _warn_partial(self, applied: List[RecordOperation]) -> None:
        if applied:
            self.log.warning(
                f"{len(applied)} operation(s) were applied before the failure "
                f"and have not been rolled back"
            )

    def _apply(self, operation: RecordOperation) -> None:
        if operation.action == RecordAction.UPSERT:
            self.provider.upsert(
                operation.zone,
                operation.name,
                operation.record_type.value,
                operation.ttl,
                list(operation.values),
            )
        else:
            self.provider.delete(operation.zone, operation.name, operation.record_type.value)

"""
Core synchronization functionality.

This package contains the record translation, planning and execution logic.
"""

from .models import (
    AddressFamily,
    AddressPrefix,
    ChangeEvent,
    EventKind,
    ReconciliationPlan,
    RecordAction,
    RecordOperation,
    RecordType,
    ReverseTarget,
)
from .reverse_zone import resolve_reverse
from .record_planner import RecordPlanner, plan_changes
from .executor import ReconciliationExecutor
from .sync_manager import SyncManager

__all__ = [
    "AddressFamily",
    "AddressPrefix",
    "ChangeEvent",
    "EventKind",
    "ReconciliationPlan",
    "RecordAction",
    "RecordOperation",
    "RecordType",
    "ReverseTarget",
    "resolve_reverse",
    "RecordPlanner",
    "plan_changes",
    "ReconciliationExecutor",
    "SyncManager",
]

"""
IPAM DNS Sync - Webhook-driven DNS record synchronization

Receives IP address change notifications from an IPAM system and keeps
the matching forward (A/AAAA) and reverse (PTR) records up to date
through a DNS server's management API.
"""

__version__ = "1.0.0"
__author__ = "IPAM DNS Sync Team"
__description__ = "Reflect IPAM address assignments into forward and reverse DNS records"

from .core.record_planner import RecordPlanner, plan_changes
from .core.sync_manager import SyncManager
from .providers.dns_client import DNSClient

__all__ = [
    "RecordPlanner",
    "SyncManager",
    "DNSClient",
    "plan_changes",
]

"""
Mock DNS provider for testing and demonstration.

This module provides a mock DNS provider that stores record sets in memory
for safe dry runs, demos and tests.
"""

import logging
import threading
from typing import Dict, List, Optional, Sequence, Tuple

from .base_provider import DNSProvider
from ..core.exceptions import ApiError

logger = logging.getLogger(__name__)


class MockDNSProvider(DNSProvider):
    """Mock DNS provider for testing and demonstration purposes."""

    def __init__(self, config: Optional[Dict] = None):
        """Initialize mock provider.

        ``fail_on`` entries such as ``"upsert:A"`` make matching calls raise
        ApiError, to exercise partial-failure handling.
        """
        config = config or {}
        self.records: Dict[Tuple[str, str, str], Dict] = {}
        self.history: List[Tuple[str, str, str, str]] = []
        self.fail_on = {entry.lower() for entry in config.get("fail_on", [])}
        self._lock = threading.Lock()
        logger.info("Mock DNS provider initialized")

    @staticmethod
    def _key(zone: str, name: str, record_type: str) -> Tuple[str, str, str]:
        return (zone.lower(), name.lower(), record_type.upper())

    def _check_failure(self, action: str, record_type: str, name: str) -> None:
        if f"{action}:{record_type}".lower() in self.fail_on:
            raise ApiError(f"Mock: simulated failure to {action} {record_type} {name}", status_code=500)

    def upsert(self, zone: str, name: str, record_type: str, ttl: int, values: Sequence[str]) -> None:
        """Create or replace a record set."""
        self._check_failure("upsert", record_type, name)
        with self._lock:
            self.records[self._key(zone, name, record_type)] = {"ttl": ttl, "values": list(values)}
            self.history.append(("upsert", zone, name, record_type))
        logger.info(f"Mock: Upserted {record_type} {name} -> {', '.join(values)}")

    def delete(self, zone: str, name: str, record_type: str) -> None:
        """Delete a record set; deleting an absent one is not an error."""
        self._check_failure("delete", record_type, name)
        with self._lock:
            self.records.pop(self._key(zone, name, record_type), None)
            self.history.append(("delete", zone, name, record_type))
        logger.info(f"Mock: Deleted {record_type} {name}")

    def get_record(self, zone: str, name: str, record_type: str) -> Optional[Dict]:
        """Return the stored record set, or None."""
        with self._lock:
            record = self.records.get(self._key(zone, name, record_type))
            return dict(record) if record else None

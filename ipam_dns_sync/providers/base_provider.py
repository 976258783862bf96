"""
Base DNS provider interface.

This module defines the abstract base class that all DNS providers must implement.
Both operations must be idempotent: repeating a call with the same arguments
leaves the zone in the same state. Failures are raised as ApiError.
"""

from abc import ABC, abstractmethod
from typing import Sequence


class DNSProvider(ABC):
    """Abstract base class for DNS providers."""

    @abstractmethod
    def upsert(self, zone: str, name: str, record_type: str, ttl: int, values: Sequence[str]) -> None:
        """Create or replace the record set at name/type in zone."""
        pass

    @abstractmethod
    def delete(self, zone: str, name: str, record_type: str) -> None:
        """Delete the record set at name/type in zone."""
        pass

    def close(self) -> None:
        """Release any resources held by the provider."""

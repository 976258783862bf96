"""
DNS provider implementations.

This package contains implementations for the PowerDNS HTTP API, BIND
dynamic updates, and an in-memory mock provider.
"""

from .base_provider import DNSProvider
from .bind_provider import BINDProvider
from .mock_provider import MockDNSProvider
from .powerdns_provider import PowerDNSProvider
from .dns_client import DNSClient

__all__ = ["DNSClient", "DNSProvider", "BINDProvider", "MockDNSProvider", "PowerDNSProvider"]

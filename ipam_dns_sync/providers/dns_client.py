"""
DNS Client - Provider selection for the DNS management API

This module builds DNS providers from configuration. A fresh provider is
created for every event so that worker threads never share an API client
handle. The mock provider is the exception: its in-memory store is shared.
"""

import logging
from typing import Dict, Optional

from .base_provider import DNSProvider
from .bind_provider import BINDProvider
from .mock_provider import MockDNSProvider
from .powerdns_provider import PowerDNSProvider
from ..core.exceptions import ConfigurationError
from ..utils.config import AppConfig

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("powerdns", "bind", "mock")


class DNSClient:
    """Factory for the configured DNS provider."""

    def __init__(self, config: AppConfig):
        """Initialize DNS client with configuration."""
        self.config = config
        self.provider_name = config.default_provider
        if self.provider_name not in SUPPORTED_PROVIDERS:
            raise ConfigurationError(
                f"Unknown DNS provider '{self.provider_name}', "
                f"expected one of {', '.join(SUPPORTED_PROVIDERS)}"
            )
        self._mock: Optional[MockDNSProvider] = None
        if self.provider_name == "mock":
            self._mock = MockDNSProvider(config.provider_config("mock"))

    def new_provider(self) -> DNSProvider:
        """Get a DNS provider instance for one event."""
        provider_config: Dict = self.config.provider_config(self.provider_name)

        if self.provider_name == "powerdns":
            return PowerDNSProvider(provider_config)
        if self.provider_name == "bind":
            return BINDProvider(provider_config)

        return self._mock

"""
BIND DNS provider implementation.

This module provides BIND DNS server integration through RFC 2136 dynamic
updates, using the dnspython library.
"""

import logging
import re
from typing import Dict, Optional, Sequence

import dns.exception
import dns.message
import dns.query
import dns.rcode
import dns.tsigkeyring
import dns.update

from .base_provider import DNSProvider
from ..core.exceptions import ApiError

logger = logging.getLogger(__name__)


class BINDProvider(DNSProvider):
    """BIND DNS provider implementation using dnspython library."""

    def __init__(self, config: Dict):
        """Initialize BIND provider."""
        self.config = config
        self.nameserver = config.get("nameserver", "127.0.0.1")
        self.port = int(config.get("port", 53))
        self.timeout = float(config.get("timeout", 30))
        self.key_file = config.get("key_file", "")
        self.key_name = config.get("key_name", "")
        self.key_algorithm = config.get("key_algorithm")

        self.keyring = None
        if self.key_file and self.key_name:
            try:
                with open(self.key_file, "r") as f:
                    key_content = f.read().strip()
            except OSError as e:
                logger.warning(f"Failed to load TSIG key: {e}")
                logger.debug("TSIG authentication will not be available")
            else:
                secret = self._parse_bind_key_file(key_content, self.key_name)
                if secret:
                    self.keyring = dns.tsigkeyring.from_text({self.key_name: secret})
                    logger.info(f"TSIG key loaded from {self.key_file}")
                else:
                    logger.warning(
                        f"Could not extract secret for key '{self.key_name}' from {self.key_file}"
                    )

        logger.debug(
            f"BIND provider initialized for nameserver {self.nameserver}:{self.port}"
        )

    def _parse_bind_key_file(self, key_content: str, key_name: str) -> Optional[str]:
        """Parse BIND key file format to extract the secret for a specific key."""
        # Look for the key block that matches the key_name
        key_pattern = rf'key\s+"{re.escape(key_name)}"\s*{{(.*?)}}'
        match = re.search(key_pattern, key_content, re.DOTALL)
        if match:
            secret_match = re.search(r'secret\s+"([^"]+)"', match.group(1))
            if secret_match:
                return secret_match.group(1)
        return None

    def upsert(self, zone: str, name: str, record_type: str, ttl: int, values: Sequence[str]) -> None:
        """Replace the RRset at name/type using a dynamic update."""
        update = self._create_update_message(zone)
        update.replace(name, ttl, record_type, *values)
        self._send(update, f"upsert {record_type} {name}")

    def delete(self, zone: str, name: str, record_type: str) -> None:
        """Delete the RRset at name/type using a dynamic update."""
        update = self._create_update_message(zone)
        update.delete(name, record_type)
        self._send(update, f"delete {record_type} {name}")

    def _create_update_message(self, zone: str) -> dns.update.Update:
        """Create a DNS update message."""
        kwargs = {"keyring": self.keyring}
        if self.keyring is not None and self.key_algorithm:
            kwargs["keyalgorithm"] = self.key_algorithm
        return dns.update.Update(zone, **kwargs)

    def _send(self, update: dns.update.Update, operation: str) -> None:
        """Send an update over TCP and raise ApiError on any failure."""
        try:
            response = dns.query.tcp(
                update, self.nameserver, port=self.port, timeout=self.timeout
            )
        except (dns.exception.DNSException, OSError) as e:
            logger.error(f"DNS {operation} query failed: {e}")
            raise ApiError(f"Failed to {operation}: {e}") from e

        if response.rcode() != dns.rcode.NOERROR:
            self._handle_dns_error(response, operation)
        logger.debug(f"BIND accepted {operation}")

    def _handle_dns_error(self, response: dns.message.Message, operation: str) -> None:
        """Handle DNS error responses by logging and raising ApiError."""
        error_message = (
            f"DNS update failed with response code: {dns.rcode.to_text(response.rcode())}"
        )
        if response.answer:
            error_message += f", server response: {response.answer}"
        logger.error(error_message)
        raise ApiError(f"Failed to {operation}: {error_message}")

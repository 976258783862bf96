"""
PowerDNS provider implementation.

This module talks to the PowerDNS Authoritative HTTP API using requests.
Each upsert or delete is a single PATCH of one RRset, which PowerDNS applies
atomically and idempotently.
"""

import logging
from typing import Dict, Optional, Sequence
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .base_provider import DNSProvider
from ..core.exceptions import ApiError, ConfigurationError

logger = logging.getLogger(__name__)


class PowerDNSProvider(DNSProvider):
    """PowerDNS provider backed by the /api/v1 HTTP API."""

    def __init__(self, config: Dict, session: Optional[requests.Session] = None):
        """Initialize PowerDNS provider."""
        self.api_host = (config.get("api_host") or "").rstrip("/")
        self.api_key = config.get("api_key") or ""
        self.server_id = config.get("server_id", "localhost")
        self.timeout = float(config.get("timeout", 10))
        self.verify = config.get("verify_tls", True)

        if not self.api_host or not self.api_key:
            raise ConfigurationError("PowerDNS provider requires api_host and api_key")

        self.session = session or self._initialize_session(int(config.get("max_retries", 0)))
        self.session.headers.update({"X-API-Key": self.api_key, "Accept": "application/json"})

        logger.debug(f"PowerDNS provider initialized for {self.api_host} (server {self.server_id})")

    def _initialize_session(self, max_retries: int) -> requests.Session:
        """Create an HTTP session, retrying transient gateway errors if configured."""
        session = requests.Session()
        if max_retries > 0:
            retry = Retry(
                total=max_retries,
                backoff_factor=0.5,
                status_forcelist=(502, 503, 504),
                allowed_methods=frozenset({"PATCH"}),
            )
            adapter = HTTPAdapter(max_retries=retry)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        return session

    def _zone_url(self, zone: str) -> str:
        return (
            f"{self.api_host}/api/v1/servers/{quote(self.server_id, safe='')}"
            f"/zones/{quote(zone, safe='')}"
        )

    def upsert(self, zone: str, name: str, record_type: str, ttl: int, values: Sequence[str]) -> None:
        """Replace the RRset at name/type with the given values."""
        rrset = {
            "name": name,
            "type": record_type,
            "ttl": ttl,
            "changetype": "REPLACE",
            "records": [{"content": value, "disabled": False} for value in values],
        }
        self._patch(zone, rrset, action=f"Upsert {record_type} {name}")

    def delete(self, zone: str, name: str, record_type: str) -> None:
        """Delete the RRset at name/type. Deleting an absent RRset succeeds."""
        rrset = {"name": name, "type": record_type, "changetype": "DELETE"}
        self._patch(zone, rrset, action=f"Delete {record_type} {name}")

    def _patch(self, zone: str, rrset: Dict, action: str) -> None:
        """Send one RRset change and raise ApiError unless PowerDNS accepts it."""
        url = self._zone_url(zone)
        try:
            response = self.session.patch(
                url, json={"rrsets": [rrset]}, timeout=self.timeout, verify=self.verify
            )
        except requests.RequestException as e:
            logger.error(f"{action} in {zone} failed: {e}")
            raise ApiError(f"{action} in {zone} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            message = self._error_message(response)
            logger.error(f"{action} in {zone} failed (HTTP {response.status_code}): {message}")
            raise ApiError(
                f"{action} in {zone} failed (HTTP {response.status_code}): {message}",
                status_code=response.status_code,
                body=response.text,
            )

        logger.debug(f"{action} in {zone} succeeded")

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Extract the error text PowerDNS puts in its JSON body."""
        try:
            payload = response.json()
        except ValueError:
            return response.text
        if isinstance(payload, dict):
            return payload.get("error") or str(payload)
        return str(payload)

    def close(self) -> None:
        self.session.close()

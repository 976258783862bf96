"""
Configuration loading for IPAM DNS Sync.

Settings come from a YAML file, then environment variables override them.
The result is an immutable AppConfig that is built once at startup and
passed explicitly to every component.
"""

import copy
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

import yaml

from ..core.exceptions import ConfigurationError
from ..core.reverse_zone import IPV6_NIBBLES, IPV6_ZONE_NIBBLES
from .validators import normalize_name, validate_domain_name

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "configs/config.yaml"

_FALSE_VALUES = {"0", "false", "no", "n", "off"}


@dataclass(frozen=True)
class SyncSettings:
    """Read-only settings consumed by the record planner."""

    domain: str
    skip_forward_record: bool = False
    skip_reverse_record: bool = False
    ipv6_zone_nibbles: int = IPV6_ZONE_NIBBLES


@dataclass(frozen=True)
class AppConfig:
    """Application-wide configuration values."""

    sync: SyncSettings
    listen_address: str = ":8080"
    secret: str = ""
    event_timeout: float = 30.0
    default_provider: str = "powerdns"
    dns_providers: Dict[str, Dict] = field(default_factory=dict)
    logging: Dict = field(default_factory=dict)

    def provider_config(self, name: Optional[str] = None) -> Dict:
        """Return a copy of the configuration block for a provider."""
        return dict(self.dns_providers.get(name or self.default_provider) or {})


def get_default_config() -> Dict:
    """Return default configuration."""
    return {
        "listen_address": ":8080",
        "secret": "",
        "event_timeout": 30,
        "sync": {
            "domain": "",
            "skip_forward_records": False,
            "skip_reverse_records": False,
            "ipv6_zone_nibbles": IPV6_ZONE_NIBBLES,
        },
        "default_provider": "powerdns",
        "dns_providers": {
            "powerdns": {"api_host": "", "api_key": "", "server_id": "localhost", "timeout": 10},
        },
        "logging": {"level": "INFO"},
    }


def _env_flag(value: Optional[str]) -> bool:
    """Any non-empty value enables a flag, except the usual spellings of false."""
    if value is None:
        return False
    value = value.strip().lower()
    return bool(value) and value not in _FALSE_VALUES


def _merge(base: Dict, override: Mapping) -> Dict:
    """Recursively merge override into base, returning base."""
    for key, value in override.items():
        if value is None:
            continue
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def _read_yaml(config_path: str) -> Dict:
    """Load configuration from YAML file."""
    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
        logger.info(f"Configuration loaded from {config_path}")
    except FileNotFoundError:
        logger.warning(f"Config file {config_path} not found, using defaults")
        return {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")
    return data


def _apply_environment(raw: Dict, environ: Mapping[str, str]) -> None:
    """Apply the environment variables understood by the webhook service."""
    if environ.get("LISTEN_ADDRESS"):
        raw["listen_address"] = environ["LISTEN_ADDRESS"]
    if environ.get("SECRET"):
        raw["secret"] = environ["SECRET"]
    if environ.get("DOMAIN"):
        raw["sync"]["domain"] = environ["DOMAIN"]
    if "SKIP_FORWARD_RECORDS" in environ:
        raw["sync"]["skip_forward_records"] = _env_flag(environ["SKIP_FORWARD_RECORDS"])
    if "SKIP_REVERSE_RECORDS" in environ:
        raw["sync"]["skip_reverse_records"] = _env_flag(environ["SKIP_REVERSE_RECORDS"])
    if environ.get("DNS_PROVIDER"):
        raw["default_provider"] = environ["DNS_PROVIDER"]
    if environ.get("LOG_LEVEL"):
        raw["logging"]["level"] = environ["LOG_LEVEL"]

    powerdns = raw["dns_providers"].setdefault("powerdns", {})
    if environ.get("PDNS_API_HOST"):
        powerdns["api_host"] = environ["PDNS_API_HOST"]
    if environ.get("PDNS_API_KEY"):
        powerdns["api_key"] = environ["PDNS_API_KEY"]


def build_config(raw: Dict) -> AppConfig:
    """Validate a raw configuration mapping and freeze it into an AppConfig."""
    sync = raw.get("sync") or {}
    domain = (sync.get("domain") or "").strip()
    if not domain:
        raise ConfigurationError("DOMAIN is required (sync.domain in the config file)")
    if not validate_domain_name(domain):
        raise ConfigurationError(f"Invalid domain: {domain}")

    try:
        nibbles = int(sync.get("ipv6_zone_nibbles", IPV6_ZONE_NIBBLES))
        event_timeout = float(raw.get("event_timeout", 30))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid numeric setting: {e}") from e
    if not 1 <= nibbles <= IPV6_NIBBLES:
        raise ConfigurationError(
            f"sync.ipv6_zone_nibbles must be between 1 and {IPV6_NIBBLES}"
        )

    default_provider = raw.get("default_provider", "powerdns")
    providers = raw.get("dns_providers") or {}
    if default_provider == "powerdns":
        powerdns = providers.get("powerdns") or {}
        if not powerdns.get("api_host") or not powerdns.get("api_key"):
            raise ConfigurationError("PDNS_API_HOST and PDNS_API_KEY are required")

    return AppConfig(
        sync=SyncSettings(
            domain=normalize_name(domain),
            skip_forward_record=bool(sync.get("skip_forward_records", False)),
            skip_reverse_record=bool(sync.get("skip_reverse_records", False)),
            ipv6_zone_nibbles=nibbles,
        ),
        listen_address=str(raw.get("listen_address") or ":8080"),
        secret=str(raw.get("secret") or ""),
        event_timeout=event_timeout,
        default_provider=default_provider,
        dns_providers=providers,
        logging=raw.get("logging") or {},
    )


def load_config(
    config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
) -> AppConfig:
    """
    Load configuration from a YAML file and the environment.

    Args:
        config_path: Optional YAML file; a missing file falls back to defaults
        environ: Environment mapping, defaults to os.environ

    Returns:
        The validated, immutable AppConfig

    Raises:
        ConfigurationError: The file is malformed or a required value is missing
    """
    raw = get_default_config()
    if config_path:
        _merge(raw, _read_yaml(config_path))

    _apply_environment(raw, os.environ if environ is None else environ)
    return build_config(copy.deepcopy(raw))

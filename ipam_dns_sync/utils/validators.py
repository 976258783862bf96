"""
Validators - Address classification and DNS name handling

This module provides the small pure helpers the record planner relies on:
address family classification, trailing-dot normalization and domain
membership checks.
"""

import logging
import re
from typing import Optional, Union

from ..core.exceptions import InvalidAddressError
from ..core.models import AddressFamily, AddressPrefix

logger = logging.getLogger(__name__)

_LABEL_RE = re.compile(r"^[a-zA-Z0-9_]([a-zA-Z0-9-]*[a-zA-Z0-9])?$")


def classify_address(prefix: Optional[Union[AddressPrefix, str]]) -> AddressFamily:
    """
    Determine the address family of a prefix.

    Args:
        prefix: An AddressPrefix or a CIDR string

    Returns:
        AddressFamily.IPV4 or AddressFamily.IPV6

    Raises:
        InvalidAddressError: The prefix is absent or does not parse
    """
    if prefix is None:
        raise InvalidAddressError("No address supplied")

    if isinstance(prefix, str):
        prefix = AddressPrefix.parse(prefix)

    return prefix.family


def normalize_name(name: Optional[str]) -> str:
    """
    Return a DNS name in canonical form, with a trailing dot.

    Empty names are passed through unchanged; callers treat them as
    "no name".

    Args:
        name: The DNS name to normalize

    Returns:
        The normalized name
    """
    if not name:
        return ""
    return name if name.endswith(".") else name + "."


def is_in_domain(name: Optional[str], domain: str) -> bool:
    """
    Check whether a DNS name lies under a domain.

    The comparison uses the domain with a leading dot, so
    ``routerexample.com.`` is not under ``example.com.``. The apex itself
    is not considered a member.

    Args:
        name: The DNS name to check
        domain: The domain suffix

    Returns:
        True if the name is under the domain, False otherwise
    """
    name = normalize_name(name).lower()
    domain = normalize_name(domain).lower()
    if not name or not domain:
        return False
    return name.endswith("." + domain)


def validate_domain_name(domain: str) -> bool:
    """Validate a zone/domain name, with or without trailing dot."""
    if not domain or not isinstance(domain, str):
        return False

    stripped = domain[:-1] if domain.endswith(".") else domain

    if not stripped or len(stripped) > 253:
        logger.warning(f"Invalid domain length: {domain}")
        return False

    for label in stripped.split("."):
        if len(label) == 0 or len(label) > 63 or not _LABEL_RE.match(label):
            logger.warning(f"Invalid label '{label}' in domain: {domain}")
            return False

    return True

"""
Reverse zone resolution for IPv4 and IPv6 addresses.

IPv4 reverse zones are always /24 sized, whatever prefix length the IPAM
system supplied. IPv6 reverse zones cut at a fixed nibble boundary
(8 nibbles, a /32, by default). Neither boundary is derived from the
prefix length.
"""

from .exceptions import InvalidAddressError, UnsupportedFamilyError
from .models import AddressFamily, AddressPrefix, ReverseTarget

IPV4_ZONE_SUFFIX = "in-addr.arpa."
IPV6_ZONE_SUFFIX = "ip6.arpa."

# Number of leading nibbles that make up an IPv6 reverse zone.
IPV6_ZONE_NIBBLES = 8
IPV6_NIBBLES = 32


def resolve_reverse(prefix: AddressPrefix, ipv6_zone_nibbles: int = IPV6_ZONE_NIBBLES) -> ReverseTarget:
    """
    Compute the reverse zone and PTR record name for an address.

    Args:
        prefix: The address to resolve
        ipv6_zone_nibbles: Leading nibbles forming the IPv6 reverse zone

    Returns:
        ReverseTarget with trailing-dot zone and record names

    Raises:
        InvalidAddressError: No address was supplied
        UnsupportedFamilyError: The address is neither IPv4 nor IPv6
    """
    if prefix is None:
        raise InvalidAddressError("No address supplied")

    family = prefix.family
    if family == AddressFamily.IPV4:
        octets = str(prefix.address).split(".")
        zone = ".".join(reversed(octets[:3])) + "." + IPV4_ZONE_SUFFIX
        record = ".".join(reversed(octets)) + "." + IPV4_ZONE_SUFFIX
        return ReverseTarget(zone=zone, record=record)

    if family == AddressFamily.IPV6:
        if not 1 <= ipv6_zone_nibbles <= IPV6_NIBBLES:
            raise ValueError(
                f"IPv6 zone nibble count must be between 1 and {IPV6_NIBBLES}, "
                f"got {ipv6_zone_nibbles}"
            )
        nibbles = prefix.address.exploded.replace(":", "")
        zone = ".".join(reversed(nibbles[:ipv6_zone_nibbles])) + "." + IPV6_ZONE_SUFFIX
        record = ".".join(reversed(nibbles)) + "." + IPV6_ZONE_SUFFIX
        return ReverseTarget(zone=zone, record=record)

    raise UnsupportedFamilyError(f"Prefix {prefix} is neither IPv4 nor IPv6")

"""Core data models used by IPAM DNS Sync."""

import ipaddress
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Tuple, Union

from .exceptions import InvalidAddressError, UnsupportedFamilyError

# Fixed TTL for every record written by the planner.
DEFAULT_TTL = 86400


class AddressFamily(Enum):
    IPV4 = 4
    IPV6 = 6


class EventKind(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class RecordType(str, Enum):
    A = "A"
    AAAA = "AAAA"
    PTR = "PTR"


class RecordAction(str, Enum):
    UPSERT = "upsert"
    DELETE = "delete"


@dataclass(frozen=True)
class AddressPrefix:
    """An IP address together with the prefix length it was assigned with."""

    address: Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
    prefixlen: int

    @classmethod
    def parse(cls, value) -> "AddressPrefix":
        """
        Parse a CIDR string such as ``203.0.113.5/24``.

        Host bits are kept, since IPAM interface addresses carry them.

        Args:
            value: The prefix string

        Returns:
            The parsed AddressPrefix

        Raises:
            InvalidAddressError: The value is absent, has no prefix length,
                or is not a valid IPv4/IPv6 prefix
        """
        if not value or not isinstance(value, str):
            raise InvalidAddressError(f"Invalid prefix: {value!r}")

        text = value.strip()
        if "/" not in text or "%" in text:
            raise InvalidAddressError(f"Invalid prefix: {value!r}")

        try:
            interface = ipaddress.ip_interface(text)
        except ValueError as e:
            raise InvalidAddressError(f"Invalid prefix {value!r}: {e}") from e

        return cls(address=interface.ip, prefixlen=interface.network.prefixlen)

    @property
    def family(self) -> AddressFamily:
        if isinstance(self.address, ipaddress.IPv4Address):
            return AddressFamily.IPV4
        if isinstance(self.address, ipaddress.IPv6Address):
            return AddressFamily.IPV6
        raise UnsupportedFamilyError(
            f"Address {self.address!r} is neither IPv4 nor IPv6"
        )

    @property
    def ip(self) -> str:
        """Return the bare address text, without prefix length."""
        return str(self.address)

    def __str__(self) -> str:
        return f"{self.address}/{self.prefixlen}"


@dataclass(frozen=True)
class ChangeEvent:
    """A decoded IPAM change notification.

    ``old_address`` is None when the IPAM system sent no prior state.
    """

    kind: EventKind
    new_address: Optional[AddressPrefix]
    new_name: str = ""
    old_address: Optional[AddressPrefix] = None
    old_name: str = ""
    request_id: Optional[str] = None
    model: Optional[str] = None


@dataclass(frozen=True)
class ReverseTarget:
    zone: str
    record: str


@dataclass(frozen=True)
class RecordOperation:
    """A single change to apply against the DNS management API."""

    action: RecordAction
    zone: str
    name: str
    record_type: RecordType
    ttl: Optional[int] = None
    values: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.action == RecordAction.UPSERT:
            if self.ttl is None or not self.values:
                raise ValueError("Upsert operations require a ttl and values")
        elif self.ttl is not None or self.values:
            raise ValueError("Delete operations carry no ttl or values")

    @classmethod
    def upsert(cls, zone: str, name: str, record_type: RecordType, values, ttl: int = DEFAULT_TTL):
        return cls(RecordAction.UPSERT, zone, name, record_type, ttl, tuple(values))

    @classmethod
    def delete(cls, zone: str, name: str, record_type: RecordType):
        return cls(RecordAction.DELETE, zone, name, record_type)

    def describe(self) -> str:
        """Return a one-line human readable summary."""
        text = f"{self.action.value} {self.record_type.value} {self.name} in {self.zone}"
        if self.values:
            text += f" -> {', '.join(self.values)}"
        return text


@dataclass(frozen=True)
class ReconciliationPlan:
    """Ordered operations for one event. Deletes of stale data come first."""

    operations: Tuple[RecordOperation, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[RecordOperation]:
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)

    def __getitem__(self, index: int) -> RecordOperation:
        return self.operations[index]

    def deletes(self) -> Tuple[RecordOperation, ...]:
        return tuple(op for op in self.operations if op.action == RecordAction.DELETE)

    def upserts(self) -> Tuple[RecordOperation, ...]:
        return tuple(op for op in self.operations if op.action == RecordAction.UPSERT)

    def is_empty(self) -> bool:
        return not self.operations

"""Reverse-lookup zone table.

Maps each address family to the ordered name suffixes the responder
recognizes. The table is built once at startup and never mutated.
"""

from dataclasses import dataclass
from enum import IntEnum


class AddressFamily(IntEnum):
    """IP address family, valued by protocol version."""

    IPV4 = 4
    IPV6 = 6


@dataclass(frozen=True)
class ReverseZone:
    """A recognized reverse-lookup suffix.

    Attributes:
        suffix: Zone suffix without leading or trailing dot.
        family: Address family encoded by names under this suffix.
        reversed: True for PTR-style zones (reversed octets or nibbles),
            False when the labels in front are the address literal itself.
    """

    suffix: str
    family: AddressFamily
    reversed: bool

    def subject_of(self, name: str) -> str | None:
        """Strip this suffix (and its separating dot) from a name.

        Args:
            name: Lower-cased question name without trailing dot.

        Returns:
            str | None: The labels in front of the suffix, or None if the
            name is not under this zone.
        """
        tail = "." + self.suffix
        if not name.endswith(tail) or len(name) == len(tail):
            return None
        return name[: -len(tail)]


@dataclass(frozen=True)
class ReverseZoneTable:
    """Immutable, ordered collection of reverse zones."""

    zones: tuple[ReverseZone, ...]

    def for_family(self, family: AddressFamily) -> tuple[ReverseZone, ...]:
        """Zones of one family, in table order."""
        return tuple(zone for zone in self.zones if zone.family == family)

    @property
    def families(self) -> tuple[AddressFamily, ...]:
        return tuple(sorted({zone.family for zone in self.zones}))


DEFAULT_REVERSE_ZONES = ReverseZoneTable(
    zones=(
        ReverseZone("in-addr.arpa", AddressFamily.IPV4, reversed=True),
        ReverseZone("dns.findabuse.email", AddressFamily.IPV4, reversed=False),
        ReverseZone("ip6.arpa", AddressFamily.IPV6, reversed=True),
        ReverseZone("dns6.findabuse.email", AddressFamily.IPV6, reversed=False),
    )
)

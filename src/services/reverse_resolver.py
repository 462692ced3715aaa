"""Reverse-lookup name resolver.

Recovers a canonical IP address from a question name written under one of
the configured reverse zones. Two naming modes are supported:

- literal zones (dns.findabuse.email, dns6.findabuse.email): the labels in
  front of the suffix are the address literal itself, e.g.
  ``1.2.3.4.dns.findabuse.email``;
- PTR-style zones (in-addr.arpa, ip6.arpa): the labels are reversed octets
  or nibbles, e.g. ``4.3.2.1.in-addr.arpa``.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.models.reverse_zone import (
    DEFAULT_REVERSE_ZONES,
    AddressFamily,
    ReverseZone,
    ReverseZoneTable,
)
from src.utils.ip_utils import canonical_address, is_valid_ip, ptr_to_ipv4, ptr_to_ipv6


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReverseLookup:
    """A question name that decoded to an address.

    Attributes:
        name: Question name as received, echoed as the answer owner.
        address: Canonical IPv4 or IPv6 literal.
        zone: The reverse zone the name matched.
    """

    name: str
    address: str
    zone: ReverseZone

    @property
    def family(self) -> AddressFamily:
        return self.zone.family


class ReverseNameResolver:
    """Decodes reverse-lookup names using an immutable zone table."""

    def __init__(self, zones: ReverseZoneTable = DEFAULT_REVERSE_ZONES):
        """Initialize resolver.

        Args:
            zones: Reverse zones to recognize, built once at startup.
        """
        self.zones = zones

    def match_zone(self, name: str) -> Optional[tuple[ReverseZone, str]]:
        """Find the first zone a name falls under.

        Families are tried in ascending order (4 then 6) and zones in table
        order within a family.

        Args:
            name: Question name, any case, optional trailing dot.

        Returns:
            Optional[tuple[ReverseZone, str]]: The matched zone and the
            subject labels in front of it, or None.
        """
        normalized = name.lower().rstrip(".")
        for family in self.zones.families:
            for zone in self.zones.for_family(family):
                subject = zone.subject_of(normalized)
                if subject is not None:
                    return zone, subject
        return None

    @staticmethod
    def decode_subject(zone: ReverseZone, subject: str) -> Optional[str]:
        """Turn the labels in front of a zone suffix into an address.

        Args:
            zone: Matched reverse zone.
            subject: Labels in front of the suffix.

        Returns:
            Optional[str]: Canonical address, or None if the subject does not
            encode an address of the zone's family.
        """
        if not zone.reversed:
            return canonical_address(subject, zone.family)
        if zone.family == AddressFamily.IPV4:
            return ptr_to_ipv4(subject)
        return ptr_to_ipv6(subject)

    def resolve(self, name: str) -> Optional[ReverseLookup]:
        """Resolve a question name to a canonical address.

        Args:
            name: Question name.

        Returns:
            Optional[ReverseLookup]: The decoded address, or None when the
            name is not a reverse lookup.

        Examples:
            >>> ReverseNameResolver().resolve("4.3.2.1.in-addr.arpa").address
            '1.2.3.4'
            >>> ReverseNameResolver().resolve("1.2.3.4.dns.findabuse.email").address
            '1.2.3.4'
            >>> ReverseNameResolver().resolve("www.example.com") is None
            True
        """
        match = self.match_zone(name)
        if match is None:
            return None

        zone, subject = match
        address = self.decode_subject(zone, subject)
        if address is None or not is_valid_ip(address):
            logger.debug(f"Name {name} is under {zone.suffix} but does not decode")
            return None

        return ReverseLookup(name=name, address=address, zone=zone)

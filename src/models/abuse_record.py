"""Abuse-contact lookup result models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class LookupStatus(Enum):
    """Upstream lookup result classification."""

    FOUND = "FOUND"  # At least one abuse contact returned
    NO_DATA = "NO_DATA"  # Entry missing, success false, or no contacts
    UPSTREAM_ERROR = "UPSTREAM_ERROR"  # Transport failure, non-2xx, or bad body


@dataclass
class AbuseRecord:
    """Upstream record for one address.

    Attributes:
        success: Whether the directory found data for the address.
        abuse: Abuse-contact addresses, in upstream order.
    """

    success: bool
    abuse: list[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any, address: str) -> "AbuseRecord | None":
        """Validate the upstream JSON body for one address.

        The body is a mapping from address string to
        ``{"success": bool, "contacts": {"abuse": [str, ...]}}``.

        Args:
            payload: Decoded JSON body.
            address: Canonical address that was queried.

        Returns:
            AbuseRecord | None: The parsed record, or None if the body has
            no entry for the address.

        Raises:
            ValueError: If the body or the entry is not shaped as above.
        """
        if not isinstance(payload, dict):
            raise ValueError("Upstream body is not a JSON object")

        entry = payload.get(address)
        if entry is None:
            return None
        if not isinstance(entry, dict):
            raise ValueError(f"Upstream entry for {address} is not an object")

        success = entry.get("success", False)
        if not isinstance(success, bool):
            raise ValueError(f"Upstream 'success' for {address} is not a boolean")

        contacts = entry.get("contacts") or {}
        if not isinstance(contacts, dict):
            raise ValueError(f"Upstream 'contacts' for {address} is not an object")

        abuse = contacts.get("abuse") or []
        if not isinstance(abuse, list) or not all(
            isinstance(addr, str) for addr in abuse
        ):
            raise ValueError(
                f"Upstream 'contacts.abuse' for {address} is not a list of strings"
            )

        return cls(success=success, abuse=list(abuse))

    def has_contacts(self) -> bool:
        return self.success and bool(self.abuse)


@dataclass
class ContactLookup:
    """Result of a single abuse-contact lookup.

    Attributes:
        address: Canonical address that was looked up.
        status: Classification of the lookup result.
        contacts: Abuse-contact addresses (empty unless FOUND).
        response_data: Short description of the failure, if any.
    """

    address: str
    status: LookupStatus
    contacts: list[str] = field(default_factory=list)
    response_data: str = ""

    def is_found(self) -> bool:
        """Check if the lookup produced contacts.

        Returns:
            bool: True if status is FOUND, False otherwise.
        """
        return self.status == LookupStatus.FOUND

    def is_error(self) -> bool:
        """Check if the lookup failed upstream.

        Returns:
            bool: True if status is UPSTREAM_ERROR, False otherwise.
        """
        return self.status == LookupStatus.UPSTREAM_ERROR

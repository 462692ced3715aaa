"""IP address utilities for reverse-lookup names."""

import ipaddress
import string


def is_valid_ipv4(ip: str) -> bool:
    """Validate if string is a valid IPv4 address.

    Args:
        ip: IP address string to validate.

    Returns:
        bool: True if valid IPv4, False otherwise.

    Examples:
        >>> is_valid_ipv4("203.0.113.45")
        True
        >>> is_valid_ipv4("256.0.0.1")
        False
        >>> is_valid_ipv4("::1")
        False
    """
    try:
        addr = ipaddress.ip_address(ip)
        return isinstance(addr, ipaddress.IPv4Address)
    except ValueError:
        return False


def is_valid_ipv6(ip: str) -> bool:
    """Validate if string is a valid IPv6 address (without a scope id).

    Examples:
        >>> is_valid_ipv6("2001:db8::1")
        True
        >>> is_valid_ipv6("203.0.113.45")
        False
    """
    try:
        addr = ipaddress.ip_address(ip)
    except ValueError:
        return False
    return isinstance(addr, ipaddress.IPv6Address) and not addr.scope_id


def is_valid_ip(ip: str) -> bool:
    """Validate if string is a valid IPv4 or IPv6 literal."""
    return is_valid_ipv4(ip) or is_valid_ipv6(ip)


def canonical_address(ip: str, family: int) -> str | None:
    """Normalize an IP literal of the given family.

    Args:
        ip: IP literal as written by the client.
        family: Address family, 4 or 6.

    Returns:
        str | None: Dotted-decimal or compressed colon-hex form, or None if
        the literal is invalid or belongs to the other family.

    Examples:
        >>> canonical_address("2001:0db8::0001", 6)
        '2001:db8::1'
        >>> canonical_address("1.2.3.4", 6) is None
        True
    """
    if family == 4 and is_valid_ipv4(ip):
        return str(ipaddress.IPv4Address(ip))
    if family == 6 and is_valid_ipv6(ip):
        return ipaddress.IPv6Address(ip).compressed
    return None


def ptr_to_ipv4(subject: str) -> str | None:
    """Rebuild an IPv4 address from the labels in front of in-addr.arpa.

    Args:
        subject: Reversed octets, e.g. "4.3.2.1".

    Returns:
        str | None: Dotted-decimal address, or None unless exactly four
        decimal octets are present.

    Examples:
        >>> ptr_to_ipv4("45.113.0.203")
        '203.0.113.45'
        >>> ptr_to_ipv4("113.0.203") is None
        True
    """
    octets = subject.split(".")
    if len(octets) != 4:
        return None
    for octet in octets:
        if not (octet.isascii() and octet.isdigit()) or int(octet) > 255:
            return None
    return canonical_address(".".join(reversed(octets)), 4)


def ptr_to_ipv6(subject: str) -> str | None:
    """Rebuild an IPv6 address from the nibbles in front of ip6.arpa.

    Args:
        subject: 32 reversed hex nibbles separated by dots.

    Returns:
        str | None: Compressed IPv6 address, or None if the nibble count or
        any nibble is wrong.

    Examples:
        >>> ptr_to_ipv6("1.0.0.0.0.0.0.0.0.0.0.0.0.0.0.0.0.0.0.0.0.0.0.0.8.b.d.0.1.0.0.2")
        '2001:db8::1'
    """
    nibbles = subject.split(".")
    if len(nibbles) != 32:
        return None
    for nibble in nibbles:
        if len(nibble) != 1 or nibble not in string.hexdigits:
            return None
    digits = "".join(reversed(nibbles))
    groups = [digits[i : i + 4] for i in range(0, 32, 4)]
    return canonical_address(":".join(groups), 6)

"""Classification of private, local and otherwise non-global hosts.

The range checks are written out as explicit octet/segment comparisons
instead of relying on ``ipaddress``'s ``is_private``/``is_global`` flags,
whose coverage differs between Python releases.

Alternate numeric notations (``0177.0.0.1``, ``0x7f000001``, ``2130706433``,
``127.000.000.001``) are not IP literals to ``ipaddress`` and therefore fall
through as ordinary hostnames. Callers that resolve hostnames must run
``is_private_or_local_host`` again on the resolved address.
"""

from __future__ import annotations

import ipaddress
import struct


def is_private_or_local_host(host: str) -> bool:
    """Check if a host is a private or local destination.

    Blocks:
    - ``localhost``, ``*.localhost`` and the ``.local`` TLD
    - IPv4 loopback (127.0.0.0/8)
    - IPv4 private ranges (10.0.0.0/8, 172.16.0.0/12, 192.168.0.0/16)
    - IPv4 link-local (169.254.0.0/16)
    - IPv4 unspecified (0.0.0.0) and broadcast (255.255.255.255)
    - IPv4 multicast (224.0.0.0/4) and reserved (240.0.0.0/4)
    - IPv4 shared address space (100.64.0.0/10, RFC 6598)
    - IPv4 IETF assignments (192.0.0.0/24)
    - IPv4 documentation (192.0.2.0/24, 198.51.100.0/24, 203.0.113.0/24)
    - IPv4 benchmarking (198.18.0.0/15)
    - IPv6 loopback, unspecified, multicast, unique-local, link-local
      and documentation (2001:db8::/32)
    - IPv4-mapped IPv6 addresses wrapping any blocked IPv4 address

    Args:
        host: Hostname or IP literal; a single pair of surrounding
            brackets is tolerated.

    Returns:
        True if the host must not be contacted.
    """
    bare = host
    if bare.startswith("[") and bare.endswith("]"):
        bare = bare[1:-1]

    bare_lower = bare.lower()
    if (
        bare_lower == "localhost"
        or bare_lower.endswith(".localhost")
        or bare_lower.rsplit(".", 1)[-1] == "local"
    ):
        return True

    try:
        addr = ipaddress.ip_address(bare)
    except ValueError:
        return False

    if isinstance(addr, ipaddress.IPv4Address):
        return is_non_global_v4(addr)
    return is_non_global_v6(addr)


def is_non_global_v4(addr: ipaddress.IPv4Address) -> bool:
    """Return True if the IPv4 address is not globally routable."""
    a, b, c, d = addr.packed
    return (
        a == 127  # Loopback 127.0.0.0/8
        or a == 10  # Private 10.0.0.0/8
        or (a == 172 and 16 <= b <= 31)  # Private 172.16.0.0/12
        or (a == 192 and b == 168)  # Private 192.168.0.0/16
        or (a == 169 and b == 254)  # Link-local 169.254.0.0/16
        or (a, b, c, d) == (0, 0, 0, 0)  # Unspecified
        or (a, b, c, d) == (255, 255, 255, 255)  # Broadcast
        or 224 <= a <= 239  # Multicast 224.0.0.0/4
        or (a == 100 and 64 <= b <= 127)  # Shared address space 100.64.0.0/10
        or a >= 240  # Reserved 240.0.0.0/4
        or (a == 192 and b == 0 and c in (0, 2))  # IETF 192.0.0.0/24, TEST-NET-1
        or (a == 198 and b == 51 and c == 100)  # TEST-NET-2
        or (a == 203 and b == 0 and c == 113)  # TEST-NET-3
        or (a == 198 and b in (18, 19))  # Benchmarking 198.18.0.0/15
    )


def is_non_global_v6(addr: ipaddress.IPv6Address) -> bool:
    """Return True if the IPv6 address is not globally routable."""
    segs = struct.unpack("!8H", addr.packed)
    if segs[:5] == (0, 0, 0, 0, 0) and segs[5] == 0xFFFF:
        # IPv4-mapped ::ffff:a.b.c.d
        return is_non_global_v4(ipaddress.IPv4Address(addr.packed[12:]))
    return (
        segs == (0, 0, 0, 0, 0, 0, 0, 1)  # Loopback ::1
        or segs == (0, 0, 0, 0, 0, 0, 0, 0)  # Unspecified ::
        or (segs[0] & 0xFF00) == 0xFF00  # Multicast ff00::/8
        or (segs[0] & 0xFE00) == 0xFC00  # Unique-local fc00::/7
        or (segs[0] & 0xFFC0) == 0xFE80  # Link-local fe80::/10
        or (segs[0] == 0x2001 and segs[1] == 0x0DB8)  # Documentation 2001:db8::/32
    )

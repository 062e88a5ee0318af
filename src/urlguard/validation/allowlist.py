"""Allowlist pattern matching."""

from __future__ import annotations

from typing import Iterable


def host_matches_allowlist(host: str, allowed_domains: Iterable[str]) -> bool:
    """Check if a host matches any pattern in the allowlist.

    Pattern types:
    - ``*`` matches every host (private hosts are still refused elsewhere)
    - ``*.example.com`` matches ``example.com`` and all its subdomains
    - ``example.com`` matches ``example.com`` and all its subdomains

    Patterns must already be normalized and the host already extracted;
    no case folding or port stripping happens here.

    Args:
        host: Lowercase host from ``extract_host``.
        allowed_domains: Normalized patterns from ``normalize_allowed_domains``.

    Returns:
        True if any pattern matches.
    """
    for pattern in allowed_domains:
        if pattern == "*":
            return True
        if pattern.startswith("*."):
            suffix = pattern[1:]  # .example.com
            if host.endswith(suffix) or host == pattern[2:]:
                return True
        elif host == pattern or host.endswith(f".{pattern}"):
            return True
    return False

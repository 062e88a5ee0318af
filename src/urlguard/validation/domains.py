"""Allowlist entry normalization."""

from __future__ import annotations

from typing import Iterable


def normalize_domain(raw: str) -> str | None:
    """Normalize a single allowlist entry into a comparable domain pattern.

    - Trims whitespace and converts to lowercase
    - Strips an ``https://`` or ``http://`` prefix
    - Drops any path component
    - Strips leading/trailing dots
    - Drops a port

    Wildcard entries (``*`` and ``*.example.com``) pass through unchanged
    apart from the steps above.

    Args:
        raw: Operator-supplied domain string.

    Returns:
        The normalized pattern, or None if the result is empty or
        contains whitespace.
    """
    domain = raw.strip().lower()

    if domain.startswith("https://"):
        domain = domain[len("https://"):]
    elif domain.startswith("http://"):
        domain = domain[len("http://"):]

    domain = domain.split("/", 1)[0]
    domain = domain.strip(".")
    # A dot left in front of the port (``example.com.:443``) is stripped too
    domain = domain.split(":", 1)[0].strip(".")

    if not domain or any(ch.isspace() for ch in domain):
        return None
    return domain


def normalize_allowed_domains(domains: Iterable[str]) -> list[str]:
    """Normalize, deduplicate and sort a list of domain patterns.

    Entries that normalize to nothing are dropped silently.
    """
    normalized = {d for d in (normalize_domain(raw) for raw in domains) if d is not None}
    return sorted(normalized)

"""Strict URL host extraction.

The extractor does not use ``urllib.parse``: it applies a small fixed grammar
and refuses anything outside it (userinfo, IPv6 literals, whitespace,
non-HTTP schemes) before a host is ever taken from the string.
"""

from __future__ import annotations

import re
from enum import Enum

from urlguard.errors import (
    EmptyURLError,
    InvalidSchemeError,
    IPv6NotSupportedError,
    MissingHostError,
    UserinfoNotAllowedError,
    WhitespaceInURLError,
)

_AUTHORITY_END = re.compile(r"[/?#]")


class SchemeConstraint(Enum):
    """Which URL schemes a calling tool accepts."""

    HTTPS_ONLY = "https_only"  # e.g. browser_open
    HTTP_OR_HTTPS = "http_or_https"  # e.g. web_fetch, http_request


def _strip_scheme(url: str, scheme_constraint: SchemeConstraint) -> str:
    if scheme_constraint is SchemeConstraint.HTTPS_ONLY:
        if url.startswith("https://"):
            return url[len("https://"):]
        raise InvalidSchemeError(https_only=True)

    for prefix in ("http://", "https://"):
        if url.startswith(prefix):
            return url[len(prefix):]
    raise InvalidSchemeError(https_only=False)


def extract_host(raw_url: str, scheme_constraint: SchemeConstraint) -> str:
    """Validate a URL and extract its lowercase host.

    Args:
        raw_url: The URL to validate.
        scheme_constraint: Whether only https:// or both http:// and
            https:// are accepted.

    Returns:
        The host, lowercased, without port or trailing dot.

    Raises:
        EmptyURLError: URL is empty after trimming.
        WhitespaceInURLError: URL contains whitespace.
        InvalidSchemeError: Scheme does not satisfy the constraint.
        MissingHostError: No authority, or an empty host before the port.
        UserinfoNotAllowedError: Authority contains ``@``.
        IPv6NotSupportedError: Authority is an IPv6 literal (``[...]``).
    """
    url = raw_url.strip()

    if not url:
        raise EmptyURLError()

    if any(ch.isspace() for ch in url):
        raise WhitespaceInURLError()

    rest = _strip_scheme(url, scheme_constraint)

    authority = _AUTHORITY_END.split(rest, maxsplit=1)[0]
    if not authority:
        raise MissingHostError()

    if "@" in authority:
        raise UserinfoNotAllowedError()

    if authority.startswith("["):
        raise IPv6NotSupportedError()

    host = authority.split(":", 1)[0].strip().rstrip(".").lower()
    if not host:
        raise MissingHostError("URL must include a valid host")

    return host

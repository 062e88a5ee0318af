"""Exceptions for urlguard with user-friendly messages."""

from __future__ import annotations

from enum import Enum


class ExtractionErrorKind(Enum):
    """Why a URL was refused before a host could be extracted."""

    EMPTY_URL = "empty_url"
    WHITESPACE_IN_URL = "whitespace_in_url"
    INVALID_SCHEME = "invalid_scheme"
    MISSING_HOST = "missing_host"
    USERINFO_NOT_ALLOWED = "userinfo_not_allowed"
    IPV6_NOT_SUPPORTED = "ipv6_not_supported"


class BlockReason(Enum):
    """Every reason the composed validator can refuse a URL."""

    EMPTY_URL = "empty_url"
    WHITESPACE_IN_URL = "whitespace_in_url"
    INVALID_SCHEME = "invalid_scheme"
    MISSING_HOST = "missing_host"
    USERINFO_NOT_ALLOWED = "userinfo_not_allowed"
    IPV6_NOT_SUPPORTED = "ipv6_not_supported"
    DOMAIN_BLOCKED = "domain_blocked"
    DOMAIN_NOT_ALLOWED = "domain_not_allowed"
    PRIVATE_HOST = "private_host"
    NOT_AN_IP_LITERAL = "not_an_ip_literal"

    @classmethod
    def from_extraction(cls, kind: ExtractionErrorKind) -> "BlockReason":
        """Map an extraction failure onto the matching block reason."""
        return cls(kind.value)


class URLGuardError(Exception):
    """Base exception for urlguard errors."""

    def __init__(self, message: str, user_hint: str | None = None):
        self.message = message
        self.user_hint = user_hint
        super().__init__(message)

    def __str__(self) -> str:
        if self.user_hint:
            return f"{self.message}\n  Hint: {self.user_hint}"
        return self.message


class HostExtractionError(URLGuardError, ValueError):
    """A URL failed the strict host-extraction grammar."""

    kind: ExtractionErrorKind

    def __init__(self, message: str, user_hint: str | None = None):
        super().__init__(message, user_hint=user_hint)


class EmptyURLError(HostExtractionError):
    """URL was empty after trimming."""

    kind = ExtractionErrorKind.EMPTY_URL

    def __init__(self):
        super().__init__("URL cannot be empty")


class WhitespaceInURLError(HostExtractionError):
    """URL contains a whitespace character."""

    kind = ExtractionErrorKind.WHITESPACE_IN_URL

    def __init__(self):
        super().__init__(
            "URL cannot contain whitespace",
            user_hint="Percent-encode spaces as %20",
        )


class InvalidSchemeError(HostExtractionError):
    """Scheme prefix is missing or not permitted."""

    kind = ExtractionErrorKind.INVALID_SCHEME

    def __init__(self, https_only: bool):
        if https_only:
            message = "Only https:// URLs are allowed"
        else:
            message = "Only http:// and https:// URLs are allowed"
        super().__init__(message)


class MissingHostError(HostExtractionError):
    """Authority or host segment is empty."""

    kind = ExtractionErrorKind.MISSING_HOST

    def __init__(self, message: str = "URL must include a host"):
        super().__init__(message)


class UserinfoNotAllowedError(HostExtractionError):
    """Authority carries a ``user@`` prefix."""

    kind = ExtractionErrorKind.USERINFO_NOT_ALLOWED

    def __init__(self):
        super().__init__("URL userinfo is not allowed")


class IPv6NotSupportedError(HostExtractionError):
    """Authority is a bracketed IPv6 literal."""

    kind = ExtractionErrorKind.IPV6_NOT_SUPPORTED

    def __init__(self):
        super().__init__(
            "IPv6 hosts are not supported",
            user_hint="Use a hostname instead of an IPv6 literal",
        )


class URLBlockedError(URLGuardError):
    """A URL was refused by the validation pipeline."""

    def __init__(
        self,
        url: str,
        reason: BlockReason,
        message: str,
        host: str | None = None,
    ):
        self.url = url
        self.host = host
        self.reason = reason
        super().__init__(message)


class SettingsValidationError(Exception):
    """Raised when settings validation fails."""

    pass

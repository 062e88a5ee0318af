"""URL validation pipeline and SSRF protection."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from urlguard.errors import BlockReason, HostExtractionError, URLBlockedError
from urlguard.logging import Loggers
from urlguard.validation.allowlist import host_matches_allowlist
from urlguard.validation.classifier import is_private_or_local_host
from urlguard.validation.domains import normalize_allowed_domains
from urlguard.validation.extractor import SchemeConstraint, extract_host

if TYPE_CHECKING:
    from urlguard.config import GuardSettings

logger = Loggers.validation()


@dataclass
class ValidationResult:
    """Result of URL validation."""

    valid: bool
    error: str | None = None
    host: str | None = None
    reason: BlockReason | None = None


class URLValidator:
    """Validates outbound URLs against the allowlist and SSRF rules.

    Checks, in order:
    - Strict host extraction (scheme, userinfo, IPv6 literal, whitespace)
    - Configurable domain blocklist
    - Domain allowlist (``*``, ``*.example.com`` and bare domains)
    - Private/local/non-global hosts

    Allowlisting a domain never exempts it from the private-host check.
    """

    def __init__(
        self,
        allowed_domains: Iterable[str],
        blocked_domains: Iterable[str] | None = None,
        scheme_constraint: SchemeConstraint | str = SchemeConstraint.HTTP_OR_HTTPS,
    ) -> None:
        """Initialize validator.

        Args:
            allowed_domains: Raw allowlist entries; normalized here once.
            blocked_domains: Raw denylist entries, same pattern syntax.
            scheme_constraint: Schemes accepted by the calling tool, as the
                enum or its value ("https_only", "http_or_https").
        """
        self.allowed_domains = normalize_allowed_domains(allowed_domains)
        self.blocked_domains = normalize_allowed_domains(blocked_domains or [])
        self.scheme_constraint = SchemeConstraint(scheme_constraint)

    @classmethod
    def from_settings(
        cls,
        settings: GuardSettings,
        scheme_constraint: SchemeConstraint = SchemeConstraint.HTTP_OR_HTTPS,
    ) -> "URLValidator":
        """Build a validator from the configured domain lists."""
        return cls(
            allowed_domains=settings.allowed_domains,
            blocked_domains=settings.blocked_domains,
            scheme_constraint=scheme_constraint,
        )

    def validate(self, url: str) -> ValidationResult:
        """Validate a URL for an outbound request.

        Args:
            url: The URL to validate.

        Returns:
            ValidationResult with valid=True and the host if OK, or
            valid=False with the error message and reason.
        """
        try:
            host = extract_host(url, self.scheme_constraint)
        except HostExtractionError as e:
            return self._blocked(BlockReason.from_extraction(e.kind), e.message)

        if self.blocked_domains and host_matches_allowlist(host, self.blocked_domains):
            return self._blocked(
                BlockReason.DOMAIN_BLOCKED,
                f"Domain '{host}' is blocked by policy",
                host,
            )

        if not host_matches_allowlist(host, self.allowed_domains):
            return self._blocked(
                BlockReason.DOMAIN_NOT_ALLOWED,
                f"Domain '{host}' is not in the allowed domains",
                host,
            )

        if is_private_or_local_host(host):
            return self._blocked(
                BlockReason.PRIVATE_HOST,
                f"Private/local host blocked: {host}",
                host,
            )

        logger.debug("url_allowed", host=host)
        return ValidationResult(valid=True, host=host)

    def check(self, url: str) -> str:
        """Validate a URL, raising instead of returning a result.

        Returns:
            The extracted host.

        Raises:
            URLBlockedError: If the URL is refused for any reason.
        """
        result = self.validate(url)
        if not result.valid:
            raise URLBlockedError(url, result.reason, result.error, host=result.host)
        return result.host

    def validate_resolved_ip(self, ip: str) -> ValidationResult:
        """Re-check an address the caller resolved the validated host to.

        Closes the DNS-rebinding gap for callers that resolve hostnames
        themselves. The input must be an IP literal; anything else fails
        closed.

        Args:
            ip: Resolved address, e.g. from ``socket.getaddrinfo``.

        Returns:
            ValidationResult for the address.
        """
        try:
            ipaddress.ip_address(ip)
        except ValueError:
            return self._blocked(
                BlockReason.NOT_AN_IP_LITERAL,
                f"Resolved address is not an IP literal: {ip}",
                ip,
            )

        if is_private_or_local_host(ip):
            return self._blocked(
                BlockReason.PRIVATE_HOST,
                f"Host resolved to private/local address: {ip}",
                ip,
            )
        return ValidationResult(valid=True, host=ip)

    def _blocked(
        self, reason: BlockReason, error: str, host: str | None = None
    ) -> ValidationResult:
        logger.info("url_blocked", reason=reason.value, host=host)
        return ValidationResult(valid=False, error=error, host=host, reason=reason)

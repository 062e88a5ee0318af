"""Outbound URL validation with SSRF protection.

Four independent, pure building blocks:
- normalize_domain / normalize_allowed_domains: canonical allowlist patterns
- extract_host: strict URL grammar, yields a lowercase host
- host_matches_allowlist: exact, subdomain and wildcard matching
- is_private_or_local_host: localhost/.local names and non-global IPs

Composed by URLValidator, configured per tool by URLPolicyConfig, and
installable on httpx clients via the hooks module.

Usage:
    from urlguard.validation import URLValidator, SchemeConstraint

    validator = URLValidator(["example.com"], scheme_constraint=SchemeConstraint.HTTPS_ONLY)
    result = validator.validate("https://api.example.com/v1")
    # result.valid is True, result.host == "api.example.com"

    result = validator.validate("https://127.0.0.1/admin")
    # result.valid is False, result.reason is BlockReason.DOMAIN_NOT_ALLOWED
"""

from urlguard.validation.domains import normalize_domain, normalize_allowed_domains
from urlguard.validation.extractor import SchemeConstraint, extract_host
from urlguard.validation.allowlist import host_matches_allowlist
from urlguard.validation.classifier import (
    is_private_or_local_host,
    is_non_global_v4,
    is_non_global_v6,
)
from urlguard.validation.validator import URLValidator, ValidationResult
from urlguard.validation.policy import TOOL_SCHEME_CONSTRAINTS, URLPolicyConfig
from urlguard.validation.hooks import (
    make_request_hook,
    make_async_request_hook,
    guarded_client,
    guarded_async_client,
)

__all__ = [
    # Core checks
    "normalize_domain",
    "normalize_allowed_domains",
    "SchemeConstraint",
    "extract_host",
    "host_matches_allowlist",
    "is_private_or_local_host",
    "is_non_global_v4",
    "is_non_global_v6",
    # Pipeline
    "URLValidator",
    "ValidationResult",
    # Policy
    "TOOL_SCHEME_CONSTRAINTS",
    "URLPolicyConfig",
    # httpx
    "make_request_hook",
    "make_async_request_hook",
    "guarded_client",
    "guarded_async_client",
]

"""urlguard - host validation for outbound HTTP tools.

Decides whether a tool-supplied URL may be contacted:

- The URL must pass a strict grammar (http/https only, no userinfo,
  no IPv6 literals, no whitespace)
- The host must match the operator's domain allowlist
- The host must not be a private, loopback, link-local or otherwise
  non-global destination

Nothing here resolves DNS or opens connections. Callers that resolve a
validated hostname must re-check the resolved address with
URLValidator.validate_resolved_ip (or is_private_or_local_host).
"""

from urlguard.config import (
    GuardSettings,
    SettingsContext,
    get_settings,
    set_settings,
    set_context_settings,
    get_context_settings,
    validate_settings,
    reload_settings,
)
from urlguard.errors import (
    BlockReason,
    EmptyURLError,
    ExtractionErrorKind,
    HostExtractionError,
    InvalidSchemeError,
    IPv6NotSupportedError,
    MissingHostError,
    SettingsValidationError,
    URLBlockedError,
    URLGuardError,
    UserinfoNotAllowedError,
    WhitespaceInURLError,
)
from urlguard.logging import configure_logging, log_context
from urlguard.validation import (
    TOOL_SCHEME_CONSTRAINTS,
    SchemeConstraint,
    URLPolicyConfig,
    URLValidator,
    ValidationResult,
    extract_host,
    guarded_async_client,
    guarded_client,
    host_matches_allowlist,
    is_private_or_local_host,
    normalize_allowed_domains,
    normalize_domain,
)

__all__ = [
    # Core checks
    "normalize_domain",
    "normalize_allowed_domains",
    "SchemeConstraint",
    "extract_host",
    "host_matches_allowlist",
    "is_private_or_local_host",
    # Pipeline and policy
    "URLValidator",
    "ValidationResult",
    "URLPolicyConfig",
    "TOOL_SCHEME_CONSTRAINTS",
    "guarded_client",
    "guarded_async_client",
    # Errors
    "URLGuardError",
    "HostExtractionError",
    "ExtractionErrorKind",
    "EmptyURLError",
    "WhitespaceInURLError",
    "InvalidSchemeError",
    "MissingHostError",
    "UserinfoNotAllowedError",
    "IPv6NotSupportedError",
    "URLBlockedError",
    "BlockReason",
    "SettingsValidationError",
    # Settings
    "GuardSettings",
    "SettingsContext",
    "get_settings",
    "set_settings",
    "set_context_settings",
    "get_context_settings",
    "validate_settings",
    "reload_settings",
    # Logging
    "configure_logging",
    "log_context",
]

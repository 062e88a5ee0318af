"""Per-tool URL policy configuration.

Maps each outbound tool to the scheme constraint it enforces and holds
the shared allow/deny domain lists. Policies can be loaded from YAML:

    allowed_domains:
      - example.com
      - "*.docs.rs"
    blocked_domains:
      - internal.example.com
    tool_schemes:
      browser_open: https_only
      web_fetch: http_or_https
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
import yaml

from urlguard.validation.extractor import SchemeConstraint
from urlguard.validation.hooks import guarded_async_client, guarded_client
from urlguard.validation.validator import URLValidator

if TYPE_CHECKING:
    from urlguard.config import GuardSettings


TOOL_SCHEME_CONSTRAINTS: dict[str, SchemeConstraint] = {
    "web_fetch": SchemeConstraint.HTTP_OR_HTTPS,
    "http_request": SchemeConstraint.HTTP_OR_HTTPS,
    "browser_open": SchemeConstraint.HTTPS_ONLY,
}


def _parse_tool_schemes(data: dict[str, Any]) -> dict[str, SchemeConstraint]:
    schemes = dict(TOOL_SCHEME_CONSTRAINTS)
    for tool, value in data.items():
        try:
            schemes[tool] = SchemeConstraint(value)
        except ValueError:
            raise ValueError(
                f"Unknown scheme constraint for tool '{tool}': {value!r} "
                "(expected 'https_only' or 'http_or_https')"
            ) from None
    return schemes


def _parse_domain_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(
            f"'{key}' must be a list of domain patterns, got {value!r} "
            f"(write '{key}: [example.com]' or one '- entry' per line)"
        )
    return list(value)


@dataclass
class URLPolicyConfig:
    """URL policy shared by all outbound tools.

    Attributes:
        allowed_domains: Raw allowlist entries.
        blocked_domains: Raw denylist entries.
        tool_schemes: Scheme constraint per tool name.
    """

    allowed_domains: list[str] = field(default_factory=list)
    blocked_domains: list[str] = field(default_factory=list)
    tool_schemes: dict[str, SchemeConstraint] = field(
        default_factory=lambda: dict(TOOL_SCHEME_CONSTRAINTS)
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "URLPolicyConfig":
        """Create config from dictionary.

        Raises:
            ValueError: If a domain section is not a list of strings, or a
                tool names an unknown scheme constraint.
        """
        return cls(
            allowed_domains=_parse_domain_list(data, "allowed_domains"),
            blocked_domains=_parse_domain_list(data, "blocked_domains"),
            tool_schemes=_parse_tool_schemes(data.get("tool_schemes") or {}),
        )

    @classmethod
    def from_yaml(cls, path: Path | str) -> "URLPolicyConfig":
        """Load config from YAML file; a missing file yields the defaults."""
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def load_default(cls) -> "URLPolicyConfig":
        """Load configuration from default location.

        Looks for config in:
        1. ~/.config/urlguard/url_policy.yaml
        2. ./url_policy.yaml (project local)
        """
        user_config = Path.home() / ".config" / "urlguard" / "url_policy.yaml"
        if user_config.exists():
            return cls.from_yaml(user_config)

        local_config = Path("url_policy.yaml")
        if local_config.exists():
            return cls.from_yaml(local_config)

        return cls()

    @classmethod
    def from_settings(cls, settings: GuardSettings) -> "URLPolicyConfig":
        """Build the policy from settings, merging in the policy file if set."""
        base = cls.from_yaml(settings.policy_file) if settings.policy_file else cls()
        return base.merge_with(
            cls(
                allowed_domains=list(settings.allowed_domains),
                blocked_domains=list(settings.blocked_domains),
                tool_schemes=dict(base.tool_schemes),
            )
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "allowed_domains": self.allowed_domains,
            "blocked_domains": self.blocked_domains,
            "tool_schemes": {
                tool: scheme.value for tool, scheme in self.tool_schemes.items()
            },
        }

    def merge_with(self, other: "URLPolicyConfig") -> "URLPolicyConfig":
        """Merge this config with another (other's tool schemes take precedence)."""
        return URLPolicyConfig(
            allowed_domains=sorted(set(self.allowed_domains) | set(other.allowed_domains)),
            blocked_domains=sorted(set(self.blocked_domains) | set(other.blocked_domains)),
            tool_schemes={**self.tool_schemes, **other.tool_schemes},
        )

    def scheme_for(self, tool: str) -> SchemeConstraint:
        """Scheme constraint for a tool; unknown tools get HTTPS_ONLY."""
        return self.tool_schemes.get(tool, SchemeConstraint.HTTPS_ONLY)

    def validator_for(self, tool: str) -> URLValidator:
        """Build the validator a tool should run on every request."""
        return URLValidator(
            allowed_domains=self.allowed_domains,
            blocked_domains=self.blocked_domains,
            scheme_constraint=self.scheme_for(tool),
        )

    def client_for(self, tool: str, **kwargs: Any) -> httpx.Client:
        """Build an ``httpx.Client`` guarded by the tool's validator."""
        return guarded_client(self.validator_for(tool), tool=tool, **kwargs)

    def async_client_for(self, tool: str, **kwargs: Any) -> httpx.AsyncClient:
        """Build an ``httpx.AsyncClient`` guarded by the tool's validator."""
        return guarded_async_client(self.validator_for(tool), tool=tool, **kwargs)

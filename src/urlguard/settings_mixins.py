"""Settings mixins for URL policy and logging configuration.

PolicySettingsMixin: Allowed/blocked domains and the optional YAML policy file.
LoggingSettingsMixin: Log level and output format.

These live outside config.py so the mixins can be composed into other
applications' settings classes without importing the settings singletons.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator

from urlguard.validation.domains import normalize_allowed_domains


class PolicySettingsMixin:
    """Settings for the outbound URL policy.

    Mixin class that provides:
    - Allowlist and denylist of domains (raw, as the operator wrote them)
    - Path to an optional per-tool YAML policy file
    - Normalized views of both domain lists

    Should be composed with BaseSettings via multiple inheritance.
    """

    allowed_domains: list[str] = Field(
        default_factory=list,
        title="Allowed Domains",
        description="Domains outbound tools may contact (supports * and *.example.com)",
    )
    blocked_domains: list[str] = Field(
        default_factory=list,
        title="Blocked Domains",
        description="Domains refused even when they match the allowlist",
    )
    policy_file: Path | None = Field(
        default=None,
        title="Policy File",
        description="YAML file with per-tool URL policy",
    )

    @field_validator("policy_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path | None) -> Path | None:
        """Expand ~ in the policy file path."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @property
    def normalized_allowed_domains(self) -> list[str]:
        """Allowlist after normalization and deduplication."""
        return normalize_allowed_domains(self.allowed_domains)

    @property
    def normalized_blocked_domains(self) -> list[str]:
        """Denylist after normalization and deduplication."""
        return normalize_allowed_domains(self.blocked_domains)


class LoggingSettingsMixin:
    """Settings for log output.

    Note: This is a mixin, not a BaseSettings subclass, to avoid
    MRO issues when composed with other settings classes.
    """

    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for dev, json for production)",
    )

"""Settings for urlguard.

Provides GuardSettings, plus global singleton and context-based access:

    1. Global singleton (simple cases):
        set_settings(my_settings)
        settings = get_settings()

    2. Context-based (isolated contexts, tests, multi-tenant):
        with SettingsContext(my_settings):
            settings = get_settings()  # Returns my_settings

Settings Loading Priority (highest to lowest):
    1. Constructor arguments
    2. Environment variables (URLGUARD_* prefix)
    3. Project config (./.urlguard/settings.json)
    4. User config (~/.urlguard/settings.json)
    5. .env file
    6. Default values
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from pathlib import Path
from typing import Generator, Tuple, Type

from pydantic_settings import (
    BaseSettings as PydanticBaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from urlguard.errors import SettingsValidationError
from urlguard.logging import Loggers
from urlguard.settings_mixins import LoggingSettingsMixin, PolicySettingsMixin
from urlguard.validation.domains import normalize_domain

__all__ = [
    "GuardSettings",
    "SettingsContext",
    "SettingsValidationError",
    "get_settings",
    "set_settings",
    "set_context_settings",
    "get_context_settings",
    "validate_settings",
    "reload_settings",
]

APP_NAME = "urlguard"

logger = Loggers.config()


def _get_json_config_source(
    settings_cls: Type[PydanticBaseSettings],
    json_file: Path,
) -> PydanticBaseSettingsSource | None:
    """Create a JSON config source if the file exists."""
    if not json_file.exists():
        return None
    return JsonConfigSettingsSource(settings_cls, json_file=json_file)


class GuardSettings(PolicySettingsMixin, LoggingSettingsMixin, PydanticBaseSettings):
    """Settings for outbound URL validation.

    Mixins provide organized settings:
    - PolicySettingsMixin: allowed/blocked domains, policy file
    - LoggingSettingsMixin: log level and format

    List fields read from the environment are JSON, e.g.
    ``URLGUARD_ALLOWED_DOMAINS='["example.com", "*.docs.rs"]'``.
    """

    model_config = SettingsConfigDict(
        env_prefix="URLGUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[PydanticBaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Layer JSON config files between the environment and .env.

        Note: JSON sources are only included if the files exist.
        """
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
        ]

        project_json = _get_json_config_source(
            settings_cls,
            Path.cwd() / f".{APP_NAME}" / "settings.json",
        )
        if project_json:
            sources.append(project_json)

        user_json = _get_json_config_source(
            settings_cls,
            Path.home() / f".{APP_NAME}" / "settings.json",
        )
        if user_json:
            sources.append(user_json)

        sources.append(dotenv_settings)

        return tuple(sources)


# Context variable for settings (takes precedence over global singleton)
_settings_context: ContextVar[GuardSettings | None] = ContextVar(
    "settings_context", default=None
)

_settings_instance: GuardSettings | None = None


def get_settings() -> GuardSettings:
    """Get the current settings instance.

    Settings resolution order:
    1. Context variable (set via SettingsContext or set_context_settings)
    2. Global singleton (set via set_settings)
    3. Fresh GuardSettings instance (created on first access)
    """
    context_settings = _settings_context.get()
    if context_settings is not None:
        return context_settings

    global _settings_instance
    if _settings_instance is None:
        _settings_instance = GuardSettings()
    return _settings_instance


def set_settings(settings: GuardSettings) -> None:
    """Set the global settings instance.

    Note: For isolated contexts (e.g., testing), prefer SettingsContext.
    """
    global _settings_instance
    _settings_instance = settings


def set_context_settings(settings: GuardSettings | None) -> Token:
    """Set settings for the current context.

    Args:
        settings: Settings to use in current context, or None to clear

    Returns:
        Token that can be used to reset the context variable.
    """
    return _settings_context.set(settings)


def get_context_settings() -> GuardSettings | None:
    """Get settings from current context (if any)."""
    return _settings_context.get()


@contextmanager
def SettingsContext(settings: GuardSettings) -> Generator[GuardSettings, None, None]:
    """Context manager for isolated settings.

    Example:
        with SettingsContext(test_settings) as s:
            validator = URLValidator.from_settings(get_settings())

    Args:
        settings: Settings to use within the context

    Yields:
        The settings instance
    """
    token = _settings_context.set(settings)
    try:
        yield settings
    finally:
        _settings_context.reset(token)


def reload_settings() -> GuardSettings:
    """Reload settings (clears global singleton and context cache)."""
    global _settings_instance
    _settings_instance = None
    _settings_context.set(None)
    return get_settings()


def validate_settings(settings: GuardSettings) -> None:
    """Validate settings for runtime use.

    Entries dropped by normalization are only logged; an allowlist that
    normalizes to nothing is an error because every request would be refused.

    Args:
        settings: Settings to validate

    Raises:
        SettingsValidationError: If validation fails
    """
    errors = []

    dropped = [d for d in settings.allowed_domains if normalize_domain(d) is None]
    if dropped:
        logger.warning("allowed_domains_dropped", entries=dropped)

    if not settings.normalized_allowed_domains:
        errors.append(
            "No allowed domains configured. Set URLGUARD_ALLOWED_DOMAINS "
            "or add allowed_domains to .urlguard/settings.json."
        )

    if settings.policy_file is not None and not settings.policy_file.exists():
        errors.append(f"Policy file not found: {settings.policy_file}")

    if errors:
        raise SettingsValidationError("\n".join(errors))

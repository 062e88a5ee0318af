"""Shared test fixtures and utilities for urlguard tests.

Provides:
- MockContext for isolating tests from global settings state
- Validator fixtures with typical allowlists
"""

import os
import tempfile
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest

from urlguard.config import (
    GuardSettings,
    reload_settings,
    set_context_settings,
    set_settings,
)
from urlguard.validation import SchemeConstraint, URLValidator


class MockContext:
    """Context manager for isolating tests from global state.

    Handles:
    - Clearing URLGUARD_* environment variables
    - Pointing HOME and the working directory at a temporary directory,
      so no real settings.json or url_policy.yaml is picked up
    - Resetting the global settings singleton on exit

    Usage:
        with MockContext(allowed_domains=["example.com"]) as ctx:
            settings = ctx.settings
    """

    def __init__(self, **settings_kwargs):
        self._settings_kwargs = settings_kwargs
        self._temp_dir: tempfile.TemporaryDirectory | None = None
        self._settings: GuardSettings | None = None
        self._env_patch = None
        self._original_cwd: str | None = None

    def __enter__(self) -> "MockContext":
        """Enter the mock context."""
        self._temp_dir = tempfile.TemporaryDirectory()
        home = Path(self._temp_dir.name)

        env = {k: v for k, v in os.environ.items() if not k.startswith("URLGUARD_")}
        env["HOME"] = str(home)
        self._env_patch = patch.dict(os.environ, env, clear=True)
        self._env_patch.start()

        self._original_cwd = os.getcwd()
        os.chdir(home)

        self._settings = GuardSettings(**self._settings_kwargs)
        set_settings(self._settings)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the mock context and clean up."""
        set_context_settings(None)
        if self._original_cwd is not None:
            os.chdir(self._original_cwd)
        if self._env_patch is not None:
            self._env_patch.stop()
        reload_settings()
        if self._temp_dir:
            self._temp_dir.cleanup()

    @property
    def settings(self) -> GuardSettings:
        """Get the test settings instance."""
        if self._settings is None:
            raise RuntimeError("MockContext not entered")
        return self._settings

    @property
    def home_dir(self) -> Path:
        """Get the temporary home/working directory."""
        if self._temp_dir is None:
            raise RuntimeError("MockContext not entered")
        return Path(self._temp_dir.name)


@pytest.fixture
def mock_context() -> Generator[MockContext, None, None]:
    """Fixture providing an isolated settings context."""
    with MockContext() as ctx:
        yield ctx


@pytest.fixture
def validator() -> URLValidator:
    """Validator allowing example.com and its subdomains over http/https."""
    return URLValidator(allowed_domains=["example.com"])


@pytest.fixture
def https_validator() -> URLValidator:
    """Validator for HTTPS-only tools such as browser_open."""
    return URLValidator(
        allowed_domains=["example.com"],
        scheme_constraint=SchemeConstraint.HTTPS_ONLY,
    )


@pytest.fixture
def open_validator() -> URLValidator:
    """Validator with a match-all allowlist; only SSRF rules apply."""
    return URLValidator(allowed_domains=["*"])

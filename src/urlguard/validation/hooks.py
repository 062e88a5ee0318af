"""httpx integration.

Installs a URLValidator as a request event hook. httpx runs request hooks
for every request it sends, including each hop of a followed redirect,
so a redirect to a host the validator refuses never leaves the client.

The hook checks the URL as written and does not resolve hostnames, so
a host that resolves to an internal address is not refused here. That
includes DNS rebinding and alternate IPv4 notations such as
``2130706433`` or ``0x7f000001``: they are not IP literals to the
classifier, but the OS resolver turns them into 127.0.0.1. With a ``*``
allowlist such URLs are sent. Callers that resolve hosts themselves can
re-check the address with ``URLValidator.validate_resolved_ip``.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

import httpx

from urlguard.errors import URLBlockedError
from urlguard.logging import Loggers, log_context
from urlguard.validation.validator import URLValidator

logger = Loggers.http()


def _check_request(
    validator: URLValidator, request: httpx.Request, tool: str | None
) -> None:
    url = str(request.url)
    with log_context(tool=tool, method=request.method):
        result = validator.validate(url)
        if not result.valid:
            logger.warning(
                "request_refused",
                host=result.host,
                reason=result.reason.value,
            )
            raise URLBlockedError(url, result.reason, result.error, host=result.host)


def make_request_hook(
    validator: URLValidator, tool: str | None = None
) -> Callable[[httpx.Request], None]:
    """Create a request hook for ``httpx.Client``.

    Args:
        validator: Validator to run on each request URL.
        tool: Name of the calling tool, attached to the hook's log events.

    Raises:
        URLBlockedError: From the hook, when the request URL is refused.
    """

    def hook(request: httpx.Request) -> None:
        _check_request(validator, request, tool)

    return hook


def make_async_request_hook(
    validator: URLValidator, tool: str | None = None
) -> Callable[[httpx.Request], Awaitable[None]]:
    """Create a request hook for ``httpx.AsyncClient``."""

    async def hook(request: httpx.Request) -> None:
        _check_request(validator, request, tool)

    return hook


def _with_hook(kwargs: dict[str, Any], hook: Callable) -> dict[str, Any]:
    event_hooks = dict(kwargs.pop("event_hooks", None) or {})
    event_hooks["request"] = [hook, *event_hooks.get("request", [])]
    kwargs["event_hooks"] = event_hooks
    return kwargs


def guarded_client(
    validator: URLValidator, tool: str | None = None, **kwargs: Any
) -> httpx.Client:
    """Create an ``httpx.Client`` that validates every outgoing request.

    Args:
        validator: Validator to run on each request URL.
        tool: Name of the calling tool, attached to the hook's log events.
        **kwargs: Passed to ``httpx.Client``; any request hooks given
            run after the guard.
    """
    return httpx.Client(**_with_hook(kwargs, make_request_hook(validator, tool)))


def guarded_async_client(
    validator: URLValidator, tool: str | None = None, **kwargs: Any
) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` that validates every outgoing request."""
    return httpx.AsyncClient(
        **_with_hook(kwargs, make_async_request_hook(validator, tool))
    )

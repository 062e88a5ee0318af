#!/usr/bin/env python
"""Standalone demo for outbound URL validation.

Walks through each layer:
1. Allowlist normalization
2. Strict host extraction
3. Allowlist matching
4. Private/local host classification
5. Per-tool policies
6. A guarded httpx client (mock transport, no network)

Usage:
    python examples/url_guard_demo.py

    # With extra URLs to check against the demo allowlist:
    python examples/url_guard_demo.py https://api.example.com http://10.0.0.1
"""

import sys

import httpx

from urlguard import (
    GuardSettings,
    SchemeConstraint,
    URLBlockedError,
    URLPolicyConfig,
    configure_logging,
    extract_host,
    host_matches_allowlist,
    is_private_or_local_host,
    normalize_allowed_domains,
)
from urlguard.errors import HostExtractionError


# =============================================================================
# Demo sections
# =============================================================================


def print_section(title: str) -> None:
    print()
    print("=" * 60)
    print(title)
    print("=" * 60)


def demo_normalization(raw: list[str]) -> list[str]:
    print_section("1. Allowlist normalization")
    patterns = normalize_allowed_domains(raw)
    print(f"  raw:        {raw}")
    print(f"  normalized: {patterns}")
    return patterns


def demo_extraction() -> None:
    print_section("2. Host extraction")
    urls = [
        "https://EXAMPLE.com:8080/x",
        "http://example.com",
        "https://user@example.com",
        "https://[::1]:8080/p",
        "https://example.com/hello world",
    ]
    for url in urls:
        try:
            host = extract_host(url, SchemeConstraint.HTTPS_ONLY)
            print(f"  OK    {url!r} -> {host!r}")
        except HostExtractionError as e:
            print(f"  FAIL  {url!r} ({e.kind.value}: {e.message})")


def demo_matching(patterns: list[str]) -> None:
    print_section("3. Allowlist matching")
    for host in ["example.com", "api.example.com", "evilexample.com", "docs.rs"]:
        print(f"  {host:<20} {host_matches_allowlist(host, patterns)}")


def demo_classification() -> None:
    print_section("4. Private/local classification")
    hosts = [
        "localhost",
        "printer.local",
        "127.0.0.1",
        "169.254.169.254",
        "100.64.0.1",
        "::ffff:10.0.0.1",
        "2001:db8::1",
        "8.8.8.8",
        "0177.0.0.1",  # not an IP literal; resolved address must be re-checked
    ]
    for host in hosts:
        print(f"  {host:<20} {'BLOCK' if is_private_or_local_host(host) else 'pass'}")


def demo_policy(extra_urls: list[str]) -> None:
    print_section("5. Tool policies")
    settings = GuardSettings(
        allowed_domains=["*"],
        blocked_domains=["ads.example.com"],
    )
    policy = URLPolicyConfig.from_settings(settings)

    urls = [
        "http://example.com/",
        "https://ads.example.com/",
        "http://169.254.169.254/latest/meta-data/",
        *extra_urls,
    ]
    for tool in ("web_fetch", "browser_open"):
        validator = policy.validator_for(tool)
        print(f"  [{tool}] scheme={validator.scheme_constraint.value}")
        for url in urls:
            result = validator.validate(url)
            status = "allow" if result.valid else f"deny ({result.reason.value})"
            print(f"    {url:<45} {status}")


def demo_client() -> None:
    print_section("6. Guarded httpx client")

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/go":
            return httpx.Response(302, headers={"location": "http://127.0.0.1/admin"})
        return httpx.Response(200, text="hello")

    policy = URLPolicyConfig(allowed_domains=["example.com"])
    with policy.client_for(
        "web_fetch", transport=httpx.MockTransport(handler), follow_redirects=True
    ) as client:
        print(f"  GET https://example.com/      -> {client.get('https://example.com/').status_code}")
        try:
            client.get("https://example.com/go")
        except URLBlockedError as e:
            print(f"  GET https://example.com/go    -> refused on redirect ({e.reason.value})")


def main() -> None:
    configure_logging(GuardSettings(log_level="warning"))

    patterns = demo_normalization(
        ["  HTTPS://Example.com/docs ", "*.docs.rs", "example.com:443", "bad entry"]
    )
    demo_extraction()
    demo_matching(patterns)
    demo_classification()
    demo_policy(sys.argv[1:])
    demo_client()


if __name__ == "__main__":
    main()

"""Precomputed CORS response headers."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from corsguard.cors.config import CORSConfig

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"
ALLOW_PRIVATE_NETWORK = "Access-Control-Allow-Private-Network"
EXPOSE_HEADERS = "Access-Control-Expose-Headers"
MAX_AGE = "Access-Control-Max-Age"
VARY = "Vary"

HeaderSet = Mapping[str, str]


def normalize(values: Iterable[str] | None) -> list[str] | None:
    """Trim, lowercase and de-duplicate, keeping first-seen order."""
    if values is None:
        return None

    seen: set[str] = set()
    normalized = []
    for value in values:
        value = value.strip().lower()
        if value not in seen:
            seen.add(value)
            normalized.append(value)
    return normalized


def convert(values: Iterable[str], fn: Callable[[str], str]) -> list[str]:
    return [fn(value) for value in values]


def canonical_header_key(key: str) -> str:
    """`x-csrf-token` -> `X-Csrf-Token`"""
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


def _origin_headers(config: CORSConfig, headers: dict[str, str]) -> None:
    # allow-all이면 `*`를 미리 넣고, 아니면 요청마다 출처가 달라지므로 Vary를 건다
    if config.allows_all_origins():
        headers[ALLOW_ORIGIN] = "*"
    else:
        headers[VARY] = "Origin"


def generate_normal_headers(config: CORSConfig) -> HeaderSet:
    headers: dict[str, str] = {}
    if config.allow_credentials:
        headers[ALLOW_CREDENTIALS] = "true"
    if config.exposed_headers:
        exposed = convert(normalize(config.exposed_headers), canonical_header_key)
        headers[EXPOSE_HEADERS] = ",".join(exposed)
    _origin_headers(config, headers)
    return MappingProxyType(headers)


def generate_preflight_headers(config: CORSConfig) -> HeaderSet:
    headers: dict[str, str] = {}
    if config.allow_credentials:
        headers[ALLOW_CREDENTIALS] = "true"
    if config.allowed_methods:
        methods = convert(normalize(config.allowed_methods), str.upper)
        headers[ALLOW_METHODS] = ",".join(methods)
    if config.allowed_headers:
        allowed = convert(normalize(config.allowed_headers), canonical_header_key)
        headers[ALLOW_HEADERS] = ",".join(allowed)

    max_age = int(config.max_age.total_seconds())
    if max_age > 0:
        headers[MAX_AGE] = str(max_age)
    if config.allow_private_network:
        headers[ALLOW_PRIVATE_NETWORK] = "true"
    _origin_headers(config, headers)
    return MappingProxyType(headers)

"""Origin matching.

출처 목록은 서버 시작 시 한 번만 컴파일되고, 이후 요청마다 읽기 전용으로 재사용된다.
허용 전략은 다음 순서로 평가한다 (먼저 결정된 쪽이 결과):

1. allow-all
2. 요청 컨텍스트를 받는 함수 (allow_origin_with_context_func)
3. 출처만 받는 함수 (allow_origin_func)
4. 정확히 일치하는 출처
5. 와일드카드 규칙 (prefix, suffix)
6. 정규식 출처 (/pattern/flags)
7. 활성화된 특수 스킴 (브라우저 확장, 웹소켓, 파일, 커스텀)
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from corsguard.core.exceptions import ConfigError

if TYPE_CHECKING:
    from corsguard.cors.config import CORSConfig

DEFAULT_SCHEMES = ("http://", "https://")
EXTENSION_SCHEMES = (
    "chrome-extension://",
    "safari-extension://",
    "moz-extension://",
    "ms-browser-extension://",
)
WEBSOCKET_SCHEMES = ("ws://", "wss://")
FILE_SCHEMES = ("file://",)

WILDCARD = "*"
REGEX_DELIMITER = "/"

_REGEX_ORIGIN = re.compile(r"^/(?P<pattern>.+)/(?P<flags>[a-z]*)$", re.DOTALL)
_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}

WildcardRule = tuple[str, str]


def scheme_prefix(scheme: str) -> str:
    """`tauri`, `tauri:`, `tauri://` 모두 `tauri://`로 맞춘다."""
    return scheme.strip().lower().rstrip(":/") + "://"


def scheme_of(origin: str) -> str | None:
    """Return the `scheme://` prefix of an origin, or None for bare hosts."""
    scheme, sep, _ = origin.partition("://")
    if not sep or not scheme:
        return None
    return scheme.lower() + "://"


def is_regex_origin(origin: str) -> bool:
    return _REGEX_ORIGIN.match(origin) is not None


def compile_regex_origin(origin: str) -> re.Pattern[str]:
    """Compile a `/pattern/flags` origin entry."""
    match = _REGEX_ORIGIN.match(origin)
    if match is None:
        raise ConfigError(f"bad origin pattern {origin!r}: expected /pattern/flags")

    flags = 0
    for flag in match.group("flags"):
        if flag not in _REGEX_FLAGS:
            raise ConfigError(f"bad origin pattern {origin!r}: unknown flag {flag!r}")
        flags |= _REGEX_FLAGS[flag]

    try:
        return re.compile(match.group("pattern"), flags)
    except re.error as exc:
        raise ConfigError(f"bad origin pattern {origin!r}: {exc}") from exc


def split_wildcard(origin: str) -> WildcardRule:
    """Split a wildcard origin into its (prefix, suffix) pair."""
    if origin.startswith(REGEX_DELIMITER):
        raise ConfigError(f"bad origin {origin!r}: wildcard origins cannot start with '/'")
    if origin.count(WILDCARD) > 1:
        raise ConfigError(f"bad origin {origin!r}: only one '*' is allowed per origin")
    prefix, _, suffix = origin.partition(WILDCARD)
    return prefix, suffix


def parse_wildcard_rules(config: CORSConfig) -> list[WildcardRule]:
    if not config.allow_wildcard:
        return []

    rules = []
    for origin in config.allowed_origins:
        if origin == WILDCARD or WILDCARD not in origin or is_regex_origin(origin):
            continue
        rules.append(split_wildcard(origin))
    return rules


def match_wildcard(origin: str, rules: Iterable[WildcardRule]) -> bool:
    for prefix, suffix in rules:
        if (
            len(origin) >= len(prefix) + len(suffix)
            and origin.startswith(prefix)
            and origin.endswith(suffix)
        ):
            return True
    return False


class OriginMatcher:
    """Answers whether an origin is allowed by a validated configuration.

    Built once per handler. Every table is immutable after ``__init__`` so a
    single matcher can serve concurrent requests without locking.
    """

    __slots__ = (
        "_allow_all",
        "_context_func",
        "_func",
        "_literals",
        "_wildcards",
        "_patterns",
        "_scheme_tables",
    )

    def __init__(self, config: CORSConfig):
        self._allow_all = config.allows_all_origins()
        self._context_func = config.allow_origin_with_context_func
        self._func = config.allow_origin_func

        enabled = {scheme for scheme in config.allowed_schemes() if scheme not in DEFAULT_SCHEMES}
        literals: set[str] = set()
        wildcards: list[WildcardRule] = []
        patterns: list[re.Pattern[str]] = []
        scheme_literals: dict[str, set[str]] = {scheme: set() for scheme in enabled}
        scheme_wildcards: dict[str, list[WildcardRule]] = {scheme: [] for scheme in enabled}

        for entry in config.allowed_origins:
            if entry == WILDCARD:
                continue
            if is_regex_origin(entry):
                patterns.append(compile_regex_origin(entry))
                continue

            # 스킴과 호스트는 대소문자를 구분하지 않으므로 설정값만 소문자로 맞춘다
            origin = entry.strip().lower()
            scheme = scheme_of(origin)
            special = scheme is not None and scheme not in DEFAULT_SCHEMES

            if WILDCARD in origin:
                if not config.allow_wildcard:
                    continue
                rule = split_wildcard(origin)
                if special:
                    if scheme in enabled:
                        scheme_wildcards[scheme].append(rule)
                else:
                    wildcards.append(rule)
            elif special:
                if scheme in enabled:
                    scheme_literals[scheme].add(origin)
            else:
                literals.add(origin)

        self._literals = frozenset(literals)
        self._wildcards = tuple(wildcards)
        self._patterns = tuple(patterns)
        self._scheme_tables = {
            scheme: (frozenset(scheme_literals[scheme]), tuple(scheme_wildcards[scheme]))
            for scheme in enabled
            if scheme_literals[scheme] or scheme_wildcards[scheme]
        }

    @property
    def allow_all(self) -> bool:
        return self._allow_all

    def allowed(self, origin: str, context: Any = None) -> bool:
        if self._allow_all:
            return True
        if self._context_func is not None:
            return bool(self._context_func(context, origin))
        if self._func is not None:
            return bool(self._func(origin))

        if origin in self._literals:
            return True
        if self._wildcards and match_wildcard(origin, self._wildcards):
            return True
        for pattern in self._patterns:
            if pattern.fullmatch(origin):
                return True

        scheme = scheme_of(origin)
        table = self._scheme_tables.get(scheme) if scheme else None
        if table is not None:
            scheme_literals, scheme_rules = table
            return origin in scheme_literals or match_wildcard(origin, scheme_rules)
        return False

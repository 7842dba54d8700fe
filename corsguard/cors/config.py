"""CORS policy configuration."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from corsguard.core.exceptions import ConfigError
from corsguard.cors.matcher import (
    DEFAULT_SCHEMES,
    EXTENSION_SCHEMES,
    FILE_SCHEMES,
    REGEX_DELIMITER,
    WEBSOCKET_SCHEMES,
    WILDCARD,
    compile_regex_origin,
    is_regex_origin,
    scheme_of,
    scheme_prefix,
    split_wildcard,
)

OriginPredicate = Callable[[str], bool]
ContextOriginPredicate = Callable[[Any, str], bool]


@dataclass
class CORSConfig:
    """Every CORS policy knob.

    Build a handler with ``corsguard.build(config)``; the handler keeps its own
    normalized copies, so changing the config afterwards has no effect on it.

    Attributes:
        allow_all_origins: 모든 출처 허용. 출처 목록이나 함수와 함께 쓸 수 없다.
        allowed_origins: 허용할 출처 목록. 리터럴(`https://foo.com`), 단독 `*`,
            와일드카드(`https://*.foo.com`), 정규식(`/^https://.+\\.foo\\.com$/i`).
        allow_origin_func: 출처 문자열을 받아 허용 여부를 반환하는 함수.
        allow_origin_with_context_func: (request, origin)을 받는 함수.
            allow_origin_func보다 우선한다. request는 읽기만 해야 한다.
        allowed_methods: preflight에서 허용할 메소드.
        allowed_headers: preflight에서 허용할 요청 헤더. `*`이면 모든 헤더.
        exposed_headers: 브라우저 스크립트에 노출할 응답 헤더.
        allow_credentials: 쿠키/인증 정보 전송 허용.
        allow_private_network: Access-Control-Allow-Private-Network 응답.
        max_age: preflight 결과 캐시 시간.
        allow_wildcard: 출처 목록의 `*` 패턴 허용.
        allow_browser_extensions: chrome-extension:// 등 확장 스킴 허용.
        allow_websockets: ws://, wss:// 허용.
        allow_files: file:// 허용.
        custom_schemes: 추가로 허용할 스킴 (예: `tauri`).
        options_response_status_code: 승인된 preflight 응답 코드.
    """

    allow_all_origins: bool = False
    allowed_origins: list[str] = field(default_factory=list)
    allow_origin_func: OriginPredicate | None = None
    allow_origin_with_context_func: ContextOriginPredicate | None = None
    allowed_methods: list[str] = field(default_factory=list)
    allowed_headers: list[str] = field(default_factory=list)
    exposed_headers: list[str] = field(default_factory=list)
    allow_credentials: bool = False
    allow_private_network: bool = False
    max_age: timedelta = field(default_factory=timedelta)
    allow_wildcard: bool = False
    allow_browser_extensions: bool = False
    allow_websockets: bool = False
    allow_files: bool = False
    custom_schemes: list[str] = field(default_factory=list)
    options_response_status_code: int = 204

    def add_allowed_methods(self, *methods: str) -> None:
        self.allowed_methods.extend(methods)

    def add_allowed_headers(self, *headers: str) -> None:
        self.allowed_headers.extend(headers)

    def add_exposed_headers(self, *headers: str) -> None:
        self.exposed_headers.extend(headers)

    def has_origin_predicate(self) -> bool:
        return self.allow_origin_func is not None or self.allow_origin_with_context_func is not None

    def allows_all_origins(self) -> bool:
        """A lone `*` in allowed_origins is the same as allow_all_origins."""
        return self.allow_all_origins or self.allowed_origins == [WILDCARD]

    def allowed_schemes(self) -> list[str]:
        schemes = list(DEFAULT_SCHEMES)
        if self.allow_browser_extensions:
            schemes.extend(EXTENSION_SCHEMES)
        if self.allow_websockets:
            schemes.extend(WEBSOCKET_SCHEMES)
        if self.allow_files:
            schemes.extend(FILE_SCHEMES)
        for scheme in self.custom_schemes:
            prefix = scheme_prefix(scheme)
            if prefix not in schemes:
                schemes.append(prefix)
        return schemes

    def validate(self) -> None:
        """Raise ConfigError if the policy is contradictory or malformed.

        검증 순서:
        1. 허용 전략 충돌 (allow-all / 함수 / 출처 목록 중 정확히 하나)
        2. 출처마다 허용된 스킴으로 시작하는지
        3. 와일드카드, 정규식 형식
        4. max_age
        """
        has_predicate = self.has_origin_predicate()

        if self.allow_all_origins and (has_predicate or self.allowed_origins):
            raise ConfigError(
                "conflict settings: all origins are allowed. "
                "allow_origin_func or allowed_origins is not needed"
            )
        if not self.allow_all_origins and not has_predicate and not self.allowed_origins:
            raise ConfigError("conflict settings: all origins disabled")
        if has_predicate and self.allowed_origins:
            raise ConfigError(
                "conflict settings: if an allow origin func is provided, "
                "allowed_origins is not needed"
            )
        if WILDCARD in self.allowed_origins and len(self.allowed_origins) > 1:
            raise ConfigError("conflict settings: '*' must be the only entry in allowed_origins")

        schemes = self.allowed_schemes()
        for origin in self.allowed_origins:
            if origin == WILDCARD:
                continue
            if origin.startswith(REGEX_DELIMITER):
                if WILDCARD in origin and not is_regex_origin(origin):
                    split_wildcard(origin)
                compile_regex_origin(origin)
                continue
            self._validate_origin(origin, schemes)

        if self.max_age < timedelta(0):
            raise ConfigError("bad max_age: must not be negative")

    def _validate_origin(self, origin: str, schemes: list[str]) -> None:
        lowered = origin.strip().lower()

        if WILDCARD in origin:
            if not self.allow_wildcard:
                raise ConfigError(
                    f"bad origin {origin!r}: wildcard origins require allow_wildcard=True"
                )
            split_wildcard(origin)
            # `*.example.com` 처럼 와일드카드로 시작하면 스킴 제한이 없다
            if lowered.startswith(WILDCARD):
                return

        if any(lowered.startswith(scheme) for scheme in schemes):
            return

        scheme = scheme_of(lowered)
        if scheme is None:
            raise ConfigError(
                f"bad origin {origin!r}: origins must contain '*' or include "
                + ",".join(schemes)
            )
        raise ConfigError(
            f"bad origin {origin!r}: scheme {scheme!r} is not enabled, "
            "add it to custom_schemes or turn on the matching allow_* option"
        )


def default_config() -> CORSConfig:
    """모든 출처를 허용하는 기본 설정."""
    return CORSConfig(
        allow_all_origins=True,
        allowed_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"],
        allowed_headers=["Origin", "Content-Length", "Content-Type"],
        allow_credentials=False,
        max_age=timedelta(hours=12),
    )

"""CORS request handling.

요청 하나에 대해 상태를 정하고 (NOT_CORS / SIMPLE / PREFLIGHT), 응답에 붙일 헤더와
요청을 계속 진행할지 여부를 돌려준다. I/O가 없는 순수 함수라서 어떤 웹 프레임워크에도
붙일 수 있다.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from starlette import status
from starlette.datastructures import Headers

from corsguard.core.exceptions import CORSForbiddenError
from corsguard.cors.config import CORSConfig
from corsguard.cors.headers import (
    ALLOW_ORIGIN,
    HeaderSet,
    generate_normal_headers,
    generate_preflight_headers,
    normalize,
)
from corsguard.cors.matcher import OriginMatcher

logger = logging.getLogger(__name__)


class CORSState(str, enum.Enum):
    NOT_CORS = "not_cors"
    SIMPLE = "simple"
    PREFLIGHT = "preflight"


@dataclass(frozen=True)
class CORSResult:
    """Outcome of one request.

    status_code가 None이 아니면 해당 상태 코드로 바로 응답하고 라우트 핸들러는 호출하지
    않는다.
    """

    state: CORSState
    allowed: bool = True
    headers: Mapping[str, str] = field(default_factory=dict)
    status_code: int | None = None
    error: CORSForbiddenError | None = None

    @property
    def short_circuit(self) -> bool:
        return self.status_code is not None


NOT_CORS = CORSResult(state=CORSState.NOT_CORS)


class CORSHandler:
    def __init__(self, config: CORSConfig):
        config.validate()

        self.matcher = OriginMatcher(config)
        self.normal_headers: HeaderSet = generate_normal_headers(config)
        self.preflight_headers: HeaderSet = generate_preflight_headers(config)
        self._allowed_methods = frozenset(normalize(config.allowed_methods))
        self._allowed_headers = frozenset(normalize(config.allowed_headers))
        self._options_status_code = config.options_response_status_code

    def handle(
        self,
        method: str,
        headers: Mapping[str, str],
        context: Any = None,
    ) -> CORSResult:
        """Decide what to do with a request.

        Args:
            method: HTTP 메소드.
            headers: 요청 헤더. 대소문자 구분 없이 조회한다.
            context: 컨텍스트 함수에 그대로 넘길 요청 객체.
        """
        if not isinstance(headers, Headers):
            headers = Headers(headers=dict(headers))

        origin = headers.get("origin")
        if not origin:
            return NOT_CORS

        # 같은 호스트에서 온 요청은 Origin 헤더가 있어도 CORS 요청이 아니다
        host = headers.get("host")
        if host and origin in (f"http://{host}", f"https://{host}"):
            return NOT_CORS

        state = CORSState.PREFLIGHT if method.upper() == "OPTIONS" else CORSState.SIMPLE

        if not self.matcher.allowed(origin, context):
            return self._reject(state, origin, "origin")

        if state is CORSState.PREFLIGHT:
            if not self.validate_method(headers.get("access-control-request-method")):
                return self._reject(state, origin, "method")
            if not self.validate_headers(headers.get("access-control-request-headers")):
                return self._reject(state, origin, "headers")
            base = self.preflight_headers
            status_code = self._options_status_code
        else:
            base = self.normal_headers
            status_code = None

        allow_origin = "*" if self.matcher.allow_all else origin
        return CORSResult(
            state=state,
            headers={**base, ALLOW_ORIGIN: allow_origin},
            status_code=status_code,
        )

    def validate_method(self, method: str | None) -> bool:
        if not method:
            return True
        return method.strip().lower() in self._allowed_methods

    def validate_headers(self, requested: str | None) -> bool:
        if not requested:
            return True
        if "*" in self._allowed_headers:
            return True
        for header in requested.split(","):
            header = header.strip().lower()
            if header and header not in self._allowed_headers:
                return False
        return True

    def _reject(self, state: CORSState, origin: str, reason: str) -> CORSResult:
        error = CORSForbiddenError(origin, reason)
        logger.debug(error.message)
        return CORSResult(
            state=state,
            allowed=False,
            status_code=status.HTTP_403_FORBIDDEN,
            error=error,
        )


def build(config: CORSConfig) -> CORSHandler:
    """Validate the config and compile a handler. Raises ConfigError."""
    handler = CORSHandler(config)
    if handler.matcher.allow_all:
        strategy = "allow-all"
    elif config.has_origin_predicate():
        strategy = "origin function"
    else:
        strategy = f"{len(config.allowed_origins)} allowed origin(s)"
    logger.info(f"CORS handler ready: {strategy}")
    return handler

"""ASGI middleware that applies a CORS handler to every HTTP request."""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping

from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from corsguard.cors.config import CORSConfig, default_config
from corsguard.cors.handler import CORSHandler, CORSState, build
from corsguard.cors.headers import VARY

logger = logging.getLogger(__name__)


class CORSMiddleware:
    """CORS middleware for Starlette / FastAPI.

    사용 예시:
        app.add_middleware(CORSMiddleware, config=CORSConfig(allowed_origins=["https://foo.com"]))

    Starlette는 첫 요청 때 미들웨어를 생성하므로, 설정 오류를 서버 시작 시점에 잡으려면
    ``build(config)``로 만든 handler를 넘기면 된다 (``setup_cors`` 참고).
    """

    def __init__(
        self,
        app: ASGIApp,
        config: CORSConfig | None = None,
        handler: CORSHandler | None = None,
    ) -> None:
        if handler is None:
            handler = build(config if config is not None else default_config())
        self.app = app
        self.handler = handler

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        result = self.handler.handle(request.method, request.headers, context=request)

        if result.state is CORSState.NOT_CORS:
            await self.app(scope, receive, send)
            return

        if result.short_circuit:
            if result.error is not None:
                logger.info(f"{request.method} {request.url.path}: {result.error.message}")
            response = Response(status_code=result.status_code, headers=dict(result.headers))
            await response(scope, receive, send)
            return

        send = functools.partial(self.send, send=send, cors_headers=result.headers)
        await self.app(scope, receive, send)

    @staticmethod
    async def send(message: Message, send: Send, cors_headers: Mapping[str, str]) -> None:
        if message["type"] != "http.response.start":
            await send(message)
            return

        headers = MutableHeaders(scope=message)
        for key, value in cors_headers.items():
            # 라우트에서 이미 설정한 Vary 값은 유지
            if key == VARY:
                headers.add_vary_header(value)
            else:
                headers[key] = value
        await send(message)

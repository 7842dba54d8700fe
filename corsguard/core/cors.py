"""CORS configuration."""

from fastapi import FastAPI

from corsguard.core.config import settings
from corsguard.cors.config import CORSConfig
from corsguard.cors.handler import build
from corsguard.middleware import CORSMiddleware


def setup_cors(app: FastAPI, config: CORSConfig | None = None) -> None:
    """Configure CORS middleware.

    CORS(Cross-Origin Resource Sharing) 설정:
    - config가 없으면 환경 변수(CORS_*)로부터 설정을 만든다
    - 설정은 여기서 바로 검증되며, 잘못된 경우 ConfigError로 앱 생성이 중단된다

    주의:
    - allow-all과 allow_credentials를 함께 켜면 브라우저가 `*` 응답을 거부한다
    """
    if config is None:
        config = settings.to_cors_config()

    handler = build(config)
    app.add_middleware(CORSMiddleware, handler=handler)

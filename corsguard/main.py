"""FastAPI application entry point."""

from fastapi import FastAPI

from corsguard.core.config import settings
from corsguard.core.cors import setup_cors
from corsguard.core.exceptions import (
    AppError,
    app_exception_handler,
    general_exception_handler,
)
from corsguard.core.logging import setup_logging
from corsguard.cors.config import CORSConfig

# 로깅 설정
setup_logging()

VERSION = "0.1.0"


def create_app(cors_config: CORSConfig | None = None) -> FastAPI:
    app = FastAPI(
        title="corsguard",
        description="CORS 정책 검증 미들웨어",
        version=VERSION,
        debug=settings.debug,
    )

    # CORS 설정
    setup_cors(app, cors_config)

    # 예외 핸들러 등록
    app.add_exception_handler(AppError, app_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    @app.get("/health", tags=["health"])
    async def health_check():
        """헬스 체크 엔드포인트"""
        return {
            "status": "healthy",
            "version": VERSION,
            "debug": settings.debug,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "corsguard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )

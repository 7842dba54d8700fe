"""Application configuration management."""

from datetime import timedelta

from pydantic_settings import BaseSettings, SettingsConfigDict

from corsguard.cors.config import CORSConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS
    # 리스트 값은 JSON 형식으로 지정 (예: CORS_ALLOWED_ORIGINS='["https://foo.com"]')
    cors_allow_all_origins: bool = False
    cors_allowed_origins: list[str] = ["http://localhost:5173"]
    cors_allowed_methods: list[str] = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]
    cors_allowed_headers: list[str] = ["Origin", "Content-Length", "Content-Type"]
    cors_exposed_headers: list[str] = []
    cors_allow_credentials: bool = False
    cors_allow_private_network: bool = False
    cors_max_age: int = 12 * 60 * 60  # seconds
    cors_allow_wildcard: bool = False
    cors_allow_browser_extensions: bool = False
    cors_allow_websockets: bool = False
    cors_allow_files: bool = False
    cors_custom_schemes: list[str] = []
    cors_options_response_status_code: int = 204

    def to_cors_config(self) -> CORSConfig:
        """환경 변수 설정으로부터 CORSConfig를 생성합니다.

        allow-all이 켜져 있으면 출처 목록은 무시합니다. 둘을 함께 넘기면 검증 단계에서
        충돌 오류가 나기 때문입니다.
        """
        return CORSConfig(
            allow_all_origins=self.cors_allow_all_origins,
            allowed_origins=[] if self.cors_allow_all_origins else list(self.cors_allowed_origins),
            allowed_methods=list(self.cors_allowed_methods),
            allowed_headers=list(self.cors_allowed_headers),
            exposed_headers=list(self.cors_exposed_headers),
            allow_credentials=self.cors_allow_credentials,
            allow_private_network=self.cors_allow_private_network,
            max_age=timedelta(seconds=self.cors_max_age),
            allow_wildcard=self.cors_allow_wildcard,
            allow_browser_extensions=self.cors_allow_browser_extensions,
            allow_websockets=self.cors_allow_websockets,
            allow_files=self.cors_allow_files,
            custom_schemes=list(self.cors_custom_schemes),
            options_response_status_code=self.cors_options_response_status_code,
        )


# Global settings instance
settings = Settings()

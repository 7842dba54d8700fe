"""메인 애플리케이션 테스트."""

from fastapi.testclient import TestClient

from corsguard.main import app, create_app
from corsguard.cors.config import CORSConfig


def test_health_check():
    """헬스 체크 엔드포인트 테스트"""
    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


def test_health_check_from_default_origin():
    """기본 설정(http://localhost:5173)에서 온 요청은 허용된다"""
    client = TestClient(app)
    response = client.get("/health", headers={"Origin": "http://localhost:5173"})
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_health_check_from_unknown_origin():
    client = TestClient(app)
    response = client.get("/health", headers={"Origin": "https://evil.example"})
    assert response.status_code == 403
    assert "access-control-allow-origin" not in response.headers


def test_create_app_with_config():
    client = TestClient(create_app(CORSConfig(allow_all_origins=True)))
    response = client.get("/health", headers={"Origin": "https://anything.example"})
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"

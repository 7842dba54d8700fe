"""Pytest configuration and fixtures."""

import pytest
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from fastapi.testclient import TestClient

from corsguard.core.cors import setup_cors


def create_test_app(config) -> FastAPI:
    app = FastAPI()
    setup_cors(app, config)

    @app.get("/", response_class=PlainTextResponse)
    async def get_root():
        return "get"

    @app.post("/", response_class=PlainTextResponse)
    async def post_root():
        return "post"

    @app.patch("/", response_class=PlainTextResponse)
    async def patch_root():
        return "patch"

    return app


def create_multi_group_app(config) -> FastAPI:
    app = FastAPI()
    setup_cors(app, config)

    for name in ("app1", "app2", "app3"):
        app.add_api_route(
            f"/{name}", _group_endpoint(name), methods=["GET"], response_class=PlainTextResponse
        )

    return app


def _group_endpoint(name: str):
    async def endpoint():
        return name

    return endpoint


@pytest.fixture
def make_client():
    """CORS 설정별 테스트 클라이언트 생성

    사용 예시:
        def test_cors(make_client):
            client = make_client(CORSConfig(allowed_origins=["http://google.com"]))
            response = client.get("/", headers={"Origin": "http://google.com"})
    """

    def _make(config) -> TestClient:
        return TestClient(create_test_app(config))

    return _make


@pytest.fixture
def make_multi_group_client():
    def _make(config) -> TestClient:
        return TestClient(create_multi_group_app(config))

    return _make

"""CORS 응답 헤더 생성 테스트."""

from datetime import timedelta

import pytest

from corsguard import CORSConfig
from corsguard.cors.headers import (
    canonical_header_key,
    convert,
    generate_normal_headers,
    generate_preflight_headers,
    normalize,
)


def test_normalize():
    values = normalize(["http-Access ", "Post", "POST", " poSt  ", "HTTP-Access", ""])
    assert values == ["http-access", "post", ""]

    assert normalize(None) is None
    assert normalize([]) == []


def test_normalize_is_idempotent():
    values = ["X-User", " x-user", "Content-Type", "B", "a", "A"]
    once = normalize(values)
    assert normalize(once) == once
    assert once == ["x-user", "content-type", "b", "a"]


def test_convert():
    methods = ["Get", "GET", "get"]
    headers = ["X-CSRF-TOKEN", "X-CSRF-Token", "x-csrf-token"]

    assert convert(methods, str.upper) == ["GET", "GET", "GET"]
    assert convert(headers, canonical_header_key) == ["X-Csrf-Token"] * 3


def test_normal_headers_allow_all_origins():
    headers = generate_normal_headers(CORSConfig(allow_all_origins=False))
    assert dict(headers) == {"Vary": "Origin"}

    headers = generate_normal_headers(CORSConfig(allow_all_origins=True))
    assert dict(headers) == {"Access-Control-Allow-Origin": "*"}


def test_normal_headers_allow_credentials():
    headers = generate_normal_headers(CORSConfig(allow_credentials=True))
    assert headers["Access-Control-Allow-Credentials"] == "true"
    assert headers["Vary"] == "Origin"
    assert len(headers) == 2


def test_normal_headers_exposed_headers():
    headers = generate_normal_headers(CORSConfig(exposed_headers=["X-user", "xPassword", "x-USER"]))
    assert headers["Access-Control-Expose-Headers"] == "X-User,Xpassword"
    assert headers["Vary"] == "Origin"
    assert len(headers) == 2


def test_normal_headers_are_read_only():
    headers = generate_normal_headers(CORSConfig())
    with pytest.raises(TypeError):
        headers["Vary"] = "Accept"


def test_preflight_headers_allow_all_origins():
    headers = generate_preflight_headers(CORSConfig(allow_all_origins=False))
    assert dict(headers) == {"Vary": "Origin"}

    headers = generate_preflight_headers(CORSConfig(allow_all_origins=True))
    assert dict(headers) == {"Access-Control-Allow-Origin": "*"}


def test_preflight_headers_allow_credentials():
    headers = generate_preflight_headers(CORSConfig(allow_credentials=True))
    assert headers["Access-Control-Allow-Credentials"] == "true"
    assert len(headers) == 2


def test_preflight_headers_allow_private_network():
    headers = generate_preflight_headers(CORSConfig(allow_private_network=True))
    assert headers["Access-Control-Allow-Private-Network"] == "true"
    assert headers["Vary"] == "Origin"
    assert len(headers) == 2


def test_preflight_headers_allow_methods():
    headers = generate_preflight_headers(CORSConfig(allowed_methods=["GET ", "post", "PUT", " put  "]))
    assert headers["Access-Control-Allow-Methods"] == "GET,POST,PUT"
    assert len(headers) == 2


def test_preflight_headers_allow_headers():
    headers = generate_preflight_headers(CORSConfig(allowed_headers=["X-user", "Content-Type"]))
    assert headers["Access-Control-Allow-Headers"] == "X-User,Content-Type"
    assert len(headers) == 2


@pytest.mark.parametrize(
    "max_age, expected",
    [
        (timedelta(hours=12), "43200"),
        (timedelta(seconds=90.7), "90"),
        (timedelta(0), None),
    ],
)
def test_preflight_headers_max_age(max_age, expected):
    headers = generate_preflight_headers(CORSConfig(max_age=max_age))
    assert headers.get("Access-Control-Max-Age") == expected


def test_preflight_headers_do_not_expose():
    headers = generate_preflight_headers(CORSConfig(exposed_headers=["X-User"]))
    assert "Access-Control-Expose-Headers" not in headers

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from gqlrest.api.app import create_app
from gqlrest.config.load_config import AppConfig, LoggingConfig, ServerConfig, TranslatorConfig
from gqlrest.translate import FALLBACK_MESSAGE, ResponseTranslator


def _config(default_mode: str = "rest") -> AppConfig:
    return AppConfig(
        server=ServerConfig(host="127.0.0.1", port=8000),
        translator=TranslatorConfig(default_mode=default_mode, diagnostics="none"),
        logging=LoggingConfig(level="INFO"),
    )


@pytest.fixture()
def client() -> TestClient:
    return TestClient(create_app(_config()))


def test_healthz(client: TestClient) -> None:
    resp = client.get("/api/v1/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_version_reports_default_mode(client: TestClient) -> None:
    body = client.get("/api/v1/version").json()
    assert body["service"] == "gqlrest"
    assert body["default_mode"] == "rest"
    assert "fastapi" in body["deps"]


def test_rest_translation_unwraps_data(client: TestClient) -> None:
    resp = client.post("/api/v1/translate", json={"data": {"user": {"id": "u1"}}})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/json")
    assert resp.json() == {"code": 0, "data": {"id": "u1"}}


def test_rest_translation_resolves_error_code(client: TestClient) -> None:
    resp = client.post(
        "/api/v1/translate",
        json={
            "data": {"user": None},
            "errors": [
                {"message": "user not found", "path": ["user"], "extensions": {"code": "404"}},
            ],
        },
    )
    assert resp.status_code == 200
    assert resp.json() == {"code": 404, "message": "user not found user", "data": None}


def test_explicit_graphql_mode_uses_protocol_status(client: TestClient) -> None:
    payload = {
        "errors": [
            {
                "message": "Cannot query field \"nope\"",
                "locations": [{"line": 1, "column": 3}],
                "extensions": {"code": "GRAPHQL_VALIDATION_FAILED"},
            }
        ]
    }
    resp = client.post("/api/v1/translate", params={"mode": "graphql"}, json=payload)
    assert resp.status_code == 422
    assert resp.json() == {**payload, "data": None}


def test_graphql_mode_user_errors_are_200(client: TestClient) -> None:
    resp = client.post(
        "/api/v1/translate",
        params={"mode": "graphql"},
        json={"data": {"a": 1}, "errors": [{"message": "partial", "path": ["a"]}]},
    )
    assert resp.status_code == 200
    assert resp.json()["data"] == {"a": 1}


def test_default_mode_comes_from_config() -> None:
    client = TestClient(create_app(_config(default_mode="graphql")))
    resp = client.post("/api/v1/translate", json={"data": {"a": 1, "b": 2}})
    assert resp.json() == {"data": {"a": 1, "b": 2}}


def test_malformed_data_is_contained_in_rest_mode(client: TestClient) -> None:
    resp = client.post("/api/v1/translate", json={"data": [1, 2, 3]})
    assert resp.status_code == 200
    assert resp.json() == {"code": 500, "message": FALLBACK_MESSAGE, "data": None}


def test_empty_result_is_rejected(client: TestClient) -> None:
    resp = client.post("/api/v1/translate", json={})
    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == 400
    assert body["message"] == "execution result has neither data nor errors"


def test_empty_result_is_rejected_in_graphql_shape() -> None:
    client = TestClient(create_app(_config(default_mode="graphql")))
    resp = client.post("/api/v1/translate", json={})
    assert resp.status_code == 400
    err = resp.json()["errors"][0]
    assert err["extensions"] == {"code": 400, "reason": "invalid_argument"}


def test_invalid_body_is_translated_error(client: TestClient) -> None:
    resp = client.post("/api/v1/translate", json={"errors": [{"path": ["a"]}]})
    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == 400
    assert body["message"].startswith("request validation failed:")
    assert "message" in body["message"]


def test_invalid_mode_is_translated_error(client: TestClient) -> None:
    resp = client.post("/api/v1/translate", params={"mode": "xml"}, json={"data": {"a": 1}})
    assert resp.status_code == 400
    assert resp.json()["code"] == 400


def test_graphql_fault_becomes_internal_error() -> None:
    client = TestClient(create_app(_config()), raise_server_exceptions=False)
    resp = client.post(
        "/api/v1/translate",
        params={"mode": "graphql"},
        content=b'{"data": {"v": NaN}}',
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 500
    assert resp.json() == {"code": 500, "message": "internal server error", "data": None}


@pytest.mark.parametrize(
    "mode, expected",
    [
        ("rest", b'{"code":0,"data":{"amount":0.10000000000000000001,"big":1e400}}'),
        ("graphql", b'{"data":{"order":{"amount":0.10000000000000000001,"big":1e400}}}'),
    ],
)
def test_data_number_literals_survive_http(client: TestClient, mode: str, expected: bytes) -> None:
    resp = client.post(
        "/api/v1/translate",
        params={"mode": mode},
        content=b'{"data": {"order": {"amount": 0.10000000000000000001, "big": 1e400}}}',
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 200
    assert resp.content == expected


def test_translator_is_cached_per_app(client: TestClient) -> None:
    client.post("/api/v1/translate", json={"data": {"a": 1}})
    first = client.app.state.translator
    client.post("/api/v1/translate", json={"data": {"a": 2}})
    assert isinstance(first, ResponseTranslator)
    assert client.app.state.translator is first

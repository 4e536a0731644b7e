# ruff: noqa

from __future__ import annotations

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field
from starlette.requests import Request

from validation_playbooks.core import error_handling
from validation_playbooks.core.error_handling import (
    REQUEST_ID_HEADER,
    _error_payload,
    _get_request_id,
    _http_exception_exception_handler,
    _request_validation_exception_handler,
    _response_validation_exception_handler,
    install_error_handling,
)


def _app() -> FastAPI:
    app = FastAPI()
    install_error_handling(app)
    return app


def test_request_validation_error_lists_issues_under_error_key():
    app = _app()

    @app.get("/playbooks-page")
    def page(limit: int) -> dict[str, int]:
        return {"limit": limit}

    resp = TestClient(app).get("/playbooks-page?limit=abc")

    assert resp.status_code == 422
    body = resp.json()
    assert isinstance(body.get("error"), list)
    assert isinstance(body.get("request_id"), str) and body["request_id"]
    assert resp.headers.get(REQUEST_ID_HEADER) == body["request_id"]


def test_request_validation_error_handles_bytes_input_without_500():
    class Draft(BaseModel):
        title: str

    app = _app()

    @app.put("/drafts")
    def save_draft(payload: Draft) -> dict[str, str]:
        return {"title": payload.title}

    client = TestClient(app, raise_server_exceptions=False)
    resp = client.put(
        "/drafts",
        content=b"plain-text-body",
        headers={"content-type": "text/plain"},
    )

    assert resp.status_code == 422
    assert isinstance(resp.json().get("error"), list)


def test_http_exception_detail_becomes_error_message():
    app = _app()

    @app.get("/missing")
    def missing() -> None:
        raise HTTPException(status_code=404, detail="Playbook not found")

    resp = TestClient(app).get("/missing")

    assert resp.status_code == 404
    body = resp.json()
    assert body["error"] == "Playbook not found"
    assert resp.headers.get(REQUEST_ID_HEADER) == body["request_id"]


def test_unhandled_exception_returns_500_with_request_id():
    app = _app()

    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("storage exploded")

    client = TestClient(app, raise_server_exceptions=False)
    resp = client.get("/boom")

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Internal Server Error"
    assert isinstance(body.get("request_id"), str) and body["request_id"]


def test_response_validation_error_returns_500():
    class Out(BaseModel):
        title: str = Field(min_length=1)

    app = _app()

    @app.get("/bad", response_model=Out)
    def bad() -> dict[str, str]:
        return {"title": ""}

    client = TestClient(app, raise_server_exceptions=False)
    resp = client.get("/bad")

    assert resp.status_code == 500
    assert resp.json()["error"] == "Internal Server Error"


def test_client_provided_request_id_is_preserved():
    app = _app()

    @app.get("/playbooks-page")
    def page(limit: int) -> dict[str, int]:
        return {"limit": limit}

    resp = TestClient(app).get(
        "/playbooks-page?limit=abc",
        headers={REQUEST_ID_HEADER: "  req-123  "},
    )

    assert resp.json()["request_id"] == "req-123"
    assert resp.headers.get(REQUEST_ID_HEADER) == "req-123"


def test_slow_request_emits_slow_log(monkeypatch: pytest.MonkeyPatch) -> None:
    warnings: list[tuple[str, dict[str, object]]] = []

    def _fake_warning(message: str, *args: object, **kwargs: object) -> None:
        _ = args
        extra = kwargs.get("extra")
        warnings.append((message, extra if isinstance(extra, dict) else {}))

    perf_ticks = iter((100.0, 100.2))

    monkeypatch.setattr(error_handling.settings, "request_log_slow_ms", 1)
    monkeypatch.setattr(error_handling, "perf_counter", lambda: next(perf_ticks))
    monkeypatch.setattr(error_handling.logger, "warning", _fake_warning)

    app = _app()

    @app.get("/slow")
    def slow() -> dict[str, str]:
        return {"ok": "1"}

    resp = TestClient(app).get("/slow")

    assert resp.status_code == 200
    assert any(
        message == "http.request.slow" and extra.get("slow_threshold_ms") == 1
        for message, extra in warnings
    )


def test_health_route_skips_request_logs_when_disabled(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    infos: list[str] = []
    monkeypatch.setattr(error_handling.settings, "request_log_include_health", False)
    monkeypatch.setattr(error_handling.logger, "info", lambda message, *a, **k: infos.append(message))

    app = _app()

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    resp = TestClient(app).get("/healthz")

    assert resp.status_code == 200
    assert isinstance(resp.headers.get(REQUEST_ID_HEADER), str)
    assert "http.request.complete" not in infos


def test_get_request_id_returns_none_for_missing_or_invalid_state() -> None:
    req = Request({"type": "http", "headers": [], "state": {}})
    assert _get_request_id(req) is None

    req = Request({"type": "http", "headers": [], "state": {"request_id": 123}})
    assert _get_request_id(req) is None

    req = Request({"type": "http", "headers": [], "state": {"request_id": ""}})
    assert _get_request_id(req) is None


def test_error_payload_omits_request_id_when_none() -> None:
    assert _error_payload(detail="x", request_id=None) == {"error": "x"}


@pytest.mark.asyncio
async def test_request_validation_exception_wrapper_rejects_wrong_exception() -> None:
    req = Request({"type": "http", "headers": [], "state": {}})
    with pytest.raises(TypeError, match="Expected RequestValidationError"):
        await _request_validation_exception_handler(req, Exception("x"))


@pytest.mark.asyncio
async def test_response_validation_exception_wrapper_rejects_wrong_exception() -> None:
    req = Request({"type": "http", "headers": [], "state": {}})
    with pytest.raises(TypeError, match="Expected ResponseValidationError"):
        await _response_validation_exception_handler(req, Exception("x"))


@pytest.mark.asyncio
async def test_http_exception_wrapper_rejects_wrong_exception() -> None:
    req = Request({"type": "http", "headers": [], "state": {}})
    with pytest.raises(TypeError, match="Expected StarletteHTTPException"):
        await _http_exception_exception_handler(req, Exception("x"))


def test_json_safe_covers_bytes_containers_and_fallback_str() -> None:
    assert error_handling._json_safe(b"\xff") == "\ufffd"
    assert error_handling._json_safe(bytearray(b"\xff")) == "\ufffd"
    assert error_handling._json_safe({"input": [b"ok"]}) == {"input": ["ok"]}

    class Weird:
        def __str__(self) -> str:
            return "weird"

    assert error_handling._json_safe(Weird()) == "weird"

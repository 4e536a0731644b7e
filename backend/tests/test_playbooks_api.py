# ruff: noqa: INP001
"""HTTP contract for the playbook and template endpoints."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient

from validation_playbooks.api.deps import get_gateway
from validation_playbooks.main import app
from validation_playbooks.storage import MemoryBlobStore, PlaybookGateway

DRAFT = {
    "title": "Press releases",
    "description": "Checks for AI drafted press releases",
    "escalationPaths": [
        {"id": "1", "name": "Internal", "action": "verify", "conditions": ["A", "B"]},
        {"id": "2", "name": "Experts", "action": "consult", "conditions": ["B", "C"]},
        {"id": "3", "name": "Avoid", "action": "avoid", "conditions": ["C"]},
    ],
}


@asynccontextmanager
async def _api_client() -> AsyncIterator[AsyncClient]:
    gateway = PlaybookGateway(MemoryBlobStore())
    app.dependency_overrides[get_gateway] = lambda: gateway
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_gateway, None)


@pytest.mark.asyncio
async def test_create_then_fetch_and_list() -> None:
    async with _api_client() as client:
        created = await client.post("/api/playbooks", json={**DRAFT, "id": "press"})

        assert created.status_code == 201
        body = created.json()
        assert body["id"] == "press"
        assert body["createdAt"] == body["updatedAt"]

        fetched = await client.get("/api/playbooks/press")
        assert fetched.status_code == 200
        assert fetched.json()["escalationPaths"][2]["conditions"] == ["C"]

        listed = await client.get("/api/playbooks")
        assert [item["id"] for item in listed.json()] == ["press"]


@pytest.mark.asyncio
async def test_create_assigns_id_when_missing() -> None:
    async with _api_client() as client:
        response = await client.post("/api/playbooks", json=DRAFT)

        assert response.status_code == 201
        assert response.json()["id"]


@pytest.mark.asyncio
async def test_list_is_empty_array_without_playbooks() -> None:
    async with _api_client() as client:
        response = await client.get("/api/playbooks")

        assert response.status_code == 200
        assert response.json() == []


@pytest.mark.asyncio
async def test_missing_playbook_returns_error_body() -> None:
    async with _api_client() as client:
        response = await client.get("/api/playbooks/nope")

        assert response.status_code == 404
        assert response.json()["error"] == "Playbook not found"


@pytest.mark.asyncio
async def test_update_merges_and_keeps_identity() -> None:
    async with _api_client() as client:
        created = (await client.post("/api/playbooks", json={**DRAFT, "id": "press"})).json()

        response = await client.put(
            "/api/playbooks/press",
            json={"title": "Press releases v2", "id": "other", "createdAt": "2001-01-01T00:00:00Z"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "press"
        assert body["title"] == "Press releases v2"
        assert body["description"] == DRAFT["description"]
        assert body["createdAt"] == created["createdAt"]
        assert body["updatedAt"] != created["updatedAt"]


@pytest.mark.asyncio
async def test_update_missing_playbook_is_404() -> None:
    async with _api_client() as client:
        response = await client.put("/api/playbooks/nope", json={"title": "x"})

        assert response.status_code == 404
        assert response.json()["error"] == "Playbook not found"


@pytest.mark.asyncio
async def test_delete_is_idempotent() -> None:
    async with _api_client() as client:
        await client.post("/api/playbooks", json={**DRAFT, "id": "press"})

        first = await client.delete("/api/playbooks/press")
        second = await client.delete("/api/playbooks/press")

        assert first.status_code == 204
        assert first.content == b""
        assert second.status_code == 204
        assert (await client.get("/api/playbooks/press")).status_code == 404


@pytest.mark.asyncio
async def test_invalid_json_body_is_422() -> None:
    async with _api_client() as client:
        response = await client.post(
            "/api/playbooks",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 422
        assert isinstance(response.json()["error"], list)


@pytest.mark.asyncio
async def test_preflight_returns_204_with_cors_headers() -> None:
    async with _api_client() as client:
        response = await client.options(
            "/api/playbooks",
            headers={"Origin": "https://app.example.com"},
        )

        assert response.status_code == 204
        assert response.headers["access-control-allow-origin"] == "https://app.example.com"
        assert "DELETE" in response.headers["access-control-allow-methods"]
        assert response.headers["access-control-allow-headers"] == "Content-Type"


@pytest.mark.asyncio
async def test_api_responses_carry_cors_headers() -> None:
    async with _api_client() as client:
        response = await client.get("/api/playbooks")

        assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_unknown_api_route_is_plain_404() -> None:
    async with _api_client() as client:
        response = await client.get("/api/unknown/thing")

        assert response.status_code == 404
        assert response.text == "API endpoint not found"


@pytest.mark.asyncio
async def test_evaluate_stored_playbook() -> None:
    async with _api_client() as client:
        await client.post("/api/playbooks", json={**DRAFT, "id": "press"})

        response = await client.post(
            "/api/playbooks/press/evaluate",
            json={
                "answers": [
                    {"condition": "A", "affirmed": False},
                    {"condition": "B", "affirmed": False},
                    {"condition": "C", "affirmed": True},
                ],
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "matched"
        assert body["path"]["action"] == "avoid"
        assert body["shortCircuited"] is True
        assert body["askedCount"] == 3


@pytest.mark.asyncio
async def test_evaluate_pending_reports_next_question() -> None:
    async with _api_client() as client:
        await client.post("/api/playbooks", json={**DRAFT, "id": "press"})

        response = await client.post("/api/playbooks/press/evaluate", json={"answers": []})

        assert response.json()["status"] == "pending"
        assert response.json()["nextQuestion"] == "A"


@pytest.mark.asyncio
async def test_evaluate_playbook_without_paths_is_422() -> None:
    async with _api_client() as client:
        await client.post("/api/playbooks", json={"id": "empty", "title": "Empty"})

        response = await client.post("/api/playbooks/empty/evaluate", json={"answers": []})

        assert response.status_code == 422
        assert response.json()["error"] == "Playbook has no escalation paths"


@pytest.mark.asyncio
async def test_templates_are_listed_and_evaluated() -> None:
    async with _api_client() as client:
        listed = await client.get("/api/templates")
        template = await client.get("/api/templates/default")
        evaluated = await client.post(
            "/api/templates/default/evaluate",
            json={
                "answers": [
                    {
                        "condition": "Sensitive business information or proprietary data",
                        "affirmed": True,
                    },
                ],
            },
        )

        assert "default" in [item["id"] for item in listed.json()]
        assert template.json()["category"] == "Built-in Template"
        assert evaluated.json()["path"]["name"] == "Internal Verification"


@pytest.mark.asyncio
async def test_unknown_template_is_404() -> None:
    async with _api_client() as client:
        response = await client.get("/api/templates/nope")

        assert response.status_code == 404
        assert response.json()["error"] == "Template not found"


@pytest.mark.asyncio
async def test_health_endpoints() -> None:
    async with _api_client() as client:
        for path in ("/health", "/healthz", "/readyz"):
            response = await client.get(path)
            assert response.status_code == 200
            assert response.json() == {"ok": True}


@pytest.mark.asyncio
async def test_frontend_paths_report_missing_bundle() -> None:
    async with _api_client() as client:
        response = await client.get("/playbooks/press")

        assert response.status_code == 404
        assert "frontend is built" in response.text


@pytest.mark.asyncio
async def test_update_ignores_malformed_identity_fields() -> None:
    async with _api_client() as client:
        created = (await client.post("/api/playbooks", json={**DRAFT, "id": "press"})).json()

        renamed = await client.put("/api/playbooks/press", json={"id": 5, "title": "Renamed"})
        restamped = await client.put(
            "/api/playbooks/press",
            json={"createdAt": "not-a-date", "updatedAt": ["x"], "title": "Renamed again"},
        )

        assert renamed.status_code == 200
        assert renamed.json()["id"] == "press"
        assert restamped.status_code == 200
        body = restamped.json()
        assert body["id"] == "press"
        assert body["title"] == "Renamed again"
        assert body["createdAt"] == created["createdAt"]
        assert datetime.fromisoformat(body["updatedAt"]) > datetime.fromisoformat(
            renamed.json()["updatedAt"],
        )

"""Tests for the /api/parse endpoints."""

from __future__ import annotations

import inspect
from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from workbench.api.parse import parse
from workbench.deps import get_options
from workbench.main import app
from workbench.settings import WorkbenchOptions


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[httpx.AsyncClient, None]:
    app.dependency_overrides[get_options] = lambda: WorkbenchOptions(max_output_chars=200)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_parse_ad_output(client: httpx.AsyncClient) -> None:
    resp = await client.post("/api/parse", json={"output": "abc##Router1", "mode": "ad"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["hasErrors"] is False
    assert data["hasWarnings"] is False
    result = data["result"]
    assert result["type"] == "ad"
    assert result["instances"][0]["id"] == "abc"
    assert result["instances"][0]["lineNumber"] == 1
    assert result["unparsedLines"] == []
    assert result["summary"] == {"total": 1, "valid": 1, "errors": 0, "warnings": 0}


@pytest.mark.asyncio
async def test_parse_topology_edge_uses_from_key(client: httpx.AsyncClient) -> None:
    resp = await client.post(
        "/api/parse",
        json={
            "output": '{"edges":[{"to":"b"}]}',
            "mode": "collection",
            "module_type": "topologysource",
            "script_type": "collection",
        },
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["hasErrors"] is True
    edge = data["result"]["edges"][0]
    assert edge["from"] == ""
    assert edge["to"] == "b"


@pytest.mark.asyncio
async def test_parse_accepts_camel_case_options(client: httpx.AsyncClient) -> None:
    resp = await client.post(
        "/api/parse",
        json={
            "output": '{"events": {}}',
            "mode": "collection",
            "moduleType": "eventsource",
            "scriptType": "collection",
        },
    )
    assert resp.status_code == 200
    data = resp.json()
    assert set(data) == {"result", "hasErrors", "hasWarnings"}
    assert data["result"]["type"] == "event"
    assert data["result"]["unparsedLines"][0]["reason"] == "Expected an array of events"


@pytest.mark.asyncio
async def test_parse_script_error(client: httpx.AsyncClient) -> None:
    resp = await client.post(
        "/api/parse",
        json={"output": "Error when executing the script - boom", "mode": "batchcollection"},
    )
    result = resp.json()["result"]
    assert result["type"] == "script_error"
    assert result["errorMessage"] == "boom"


@pytest.mark.asyncio
async def test_freeform_returns_null_result(client: httpx.AsyncClient) -> None:
    resp = await client.post("/api/parse", json={"output": "{bad", "mode": "freeform"})
    assert resp.status_code == 200
    assert resp.json() == {"result": None, "hasErrors": False, "hasWarnings": False}


@pytest.mark.asyncio
async def test_unknown_mode_rejected(client: httpx.AsyncClient) -> None:
    resp = await client.post("/api/parse", json={"output": "a=1", "mode": "interactive"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_oversized_output_rejected(client: httpx.AsyncClient) -> None:
    resp = await client.post("/api/parse", json={"output": "a=1\n" * 100, "mode": "collection"})
    assert resp.status_code == 413


@pytest.mark.asyncio
async def test_list_modes(client: httpx.AsyncClient) -> None:
    resp = await client.get("/api/parse/modes")
    assert resp.status_code == 200
    data = resp.json()
    assert data["modes"] == ["freeform", "ad", "collection", "batchcollection"]
    assert "topologysource" in data["moduleTypes"]
    assert data["scriptTypes"] == ["ad", "collection"]


def test_parse_handler_is_sync() -> None:
    assert not inspect.iscoroutinefunction(parse)

"""
Tests for TasteApiClient against an httpx.MockTransport: routes, auth header,
request bodies, and error mapping to TasteApiError.
"""

from __future__ import annotations

import json

import httpx
import pytest

from subtaste_trainer.config.settings import TrainerSettings
from subtaste_trainer.core.exceptions import TasteApiError
from subtaste_trainer.genome_client.ports import GenomePort
from subtaste_trainer.genome_client.taste_api import TasteApiClient


class Recorder:
    """MockTransport handler that records requests and answers from a route table."""

    def __init__(self, routes=None):
        self.requests: list[httpx.Request] = []
        self.routes = routes or {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key in self.routes:
            status, body = self.routes[key]
            return httpx.Response(status, json=body)
        return httpx.Response(200, json={"success": True})


def _client(recorder: Recorder, token: str | None = "secret") -> TasteApiClient:
    return TasteApiClient("http://taste.test/", token=token, transport=httpx.MockTransport(recorder))


def test_client_satisfies_port():
    assert isinstance(_client(Recorder()), GenomePort)


def test_constructor_validates_arguments():
    with pytest.raises(ValueError):
        TasteApiClient("   ")
    with pytest.raises(ValueError):
        TasteApiClient("http://taste.test", timeout_sec=0)


@pytest.mark.asyncio
async def test_get_genome_sends_profile_and_bearer():
    rec = Recorder({("GET", "/api/genome"): (200, {"hasGenome": False})})
    async with _client(rec) as client:
        data = await client.get_genome("p-1")
    assert data == {"hasGenome": False}
    (req,) = rec.requests
    assert req.url.params["profileId"] == "p-1"
    assert req.headers["Authorization"] == "Bearer secret"
    assert req.headers["Accept"] == "application/json"


@pytest.mark.asyncio
async def test_account_genome_omits_profile_param_and_auth():
    rec = Recorder()
    async with _client(rec, token=None) as client:
        await client.get_genome(None)
    (req,) = rec.requests
    assert "profileId" not in req.url.params
    assert "Authorization" not in req.headers


@pytest.mark.asyncio
async def test_submit_signal_body():
    rec = Recorder({("POST", "/api/genome/signal"): (200, {"success": True, "id": "sig-1"})})
    payload = {"score": 5, "polarity": "best", "setId": "card-1", "weightOverride": 1.6, "folioId": "f"}
    async with _client(rec) as client:
        ack = await client.submit_signal("likert", "opening-blade", payload, "p-1")
    assert ack["id"] == "sig-1"
    (req,) = rec.requests
    assert json.loads(req.content) == {
        "type": "likert",
        "value": "opening-blade",
        "metadata": payload,
        "profileId": "p-1",
    }


@pytest.mark.asyncio
async def test_pass_signal_without_profile():
    rec = Recorder()
    async with _client(rec) as client:
        await client.submit_signal("pass", None, {"neutral": True}, None)
    body = json.loads(rec.requests[0].content)
    assert body["value"] is None
    assert "profileId" not in body


@pytest.mark.asyncio
async def test_read_routes():
    rec = Recorder(
        {
            ("GET", "/api/genome/signals"): (200, {"signals": []}),
            ("GET", "/api/genome/archetypes"): (200, {"archetypes": {}}),
            ("GET", "/api/genome/gamification"): (200, {"xp": 0}),
            ("POST", "/api/genome/recompute"): (200, {"success": True}),
        }
    )
    async with _client(rec) as client:
        assert await client.get_signals("p-1", 50) == {"signals": []}
        assert await client.get_archetype_catalog() == {"archetypes": {}}
        assert await client.get_gamification("p-1") == {"xp": 0}
        assert await client.recompute_genome("p-1") == {"success": True}
    signals_req, _, gamification_req, recompute_req = rec.requests
    assert signals_req.url.params["limit"] == "50"
    assert signals_req.url.params["profileId"] == "p-1"
    assert gamification_req.url.params["profileId"] == "p-1"
    assert json.loads(recompute_req.content) == {"profileId": "p-1"}


@pytest.mark.asyncio
async def test_error_status_raises_with_detail():
    rec = Recorder({("POST", "/api/genome/signal"): (400, {"error": "Missing type or value"})})
    async with _client(rec) as client:
        with pytest.raises(TasteApiError) as exc_info:
            await client.submit_signal("likert", "x", {}, None)
    assert exc_info.value.status_code == 400
    assert exc_info.value.path == "/api/genome/signal"
    assert "Missing type or value" in str(exc_info.value)


@pytest.mark.asyncio
async def test_non_object_body_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=["not", "an", "object"])

    async with TasteApiClient("http://taste.test", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(TasteApiError):
            await client.get_genome(None)


@pytest.mark.asyncio
async def test_from_settings_uses_url_and_token():
    rec = Recorder()
    settings = TrainerSettings(api_url="http://taste.test/", api_token="tok")
    async with TasteApiClient.from_settings(settings, transport=httpx.MockTransport(rec)) as client:
        await client.get_archetype_catalog()
    (req,) = rec.requests
    assert str(req.url) == "http://taste.test/api/genome/archetypes"
    assert req.headers["Authorization"] == "Bearer tok"


@pytest.mark.asyncio
async def test_raw_genome_route_and_not_found():
    rec = Recorder({("GET", "/api/genome/raw"): (404, {"error": "Genome not found"})})
    async with _client(rec) as client:
        with pytest.raises(TasteApiError) as exc_info:
            await client.get_raw_genome("p-1")
    assert exc_info.value.status_code == 404
    assert rec.requests[0].url.params["profileId"] == "p-1"

"""Tests for the remote identity client and wire conversions."""

import asyncio
import json
from uuid import UUID

import httpx
import pytest

from tastematch.core import base_client
from tastematch.models.embedding import EMBEDDING_SIZE
from tastematch.models.identity import FurnitureCategory, ReturnReason, TasteIdentity, TasteVote
from tastematch.models.sync import RemoteIdentity
from tastematch.services.sync.remote import RemoteIdentityClient, adopt_remote

from .helpers import unit_embedding

IDENTITY_ID = "6e1d4c2b-0a9f-4e8d-b7c6-5a4b3c2d1e0f"


def remote_payload(version: int = 2, **extra) -> dict:
    payload = {
        "id": IDENTITY_ID.upper(),
        "version": version,
        "embedding": [0.0] * EMBEDDING_SIZE,
        "anti_embedding": [0.0] * EMBEDDING_SIZE,
        "stability": 0.6,
        "count_me": 1,
    }
    payload.update(extra)
    return payload


def make_client(handler) -> RemoteIdentityClient:
    client = RemoteIdentityClient(
        base_url="https://sync.example.com/",
        api_key="anon-key",
        transport=httpx.MockTransport(handler),
    )
    client.max_retries = 1
    return client


class TestRemoteIdentity:
    def test_to_identity(self):
        identity = RemoteIdentity.model_validate(remote_payload()).to_identity()
        assert identity.id == UUID(IDENTITY_ID)
        assert identity.version == 2
        assert identity.stability == pytest.approx(0.6)
        assert identity.count_me == 1

    def test_wrong_embedding_length_becomes_zero(self):
        identity = RemoteIdentity.model_validate(remote_payload(embedding=[1.0, 2.0])).to_identity()
        assert identity.embedding.is_zero

    def test_invalid_id_gets_a_fresh_uuid(self):
        identity = RemoteIdentity.model_validate(remote_payload(id="not-a-uuid")).to_identity()
        assert isinstance(identity.id, UUID)

    def test_stability_is_clamped(self):
        assert RemoteIdentity.model_validate(remote_payload(stability=1.7)).to_identity().stability == 1.0
        assert RemoteIdentity.model_validate(remote_payload(stability=-0.2)).to_identity().stability == 0.0


class TestAdoptRemote:
    def test_no_local_copy(self):
        remote = TasteIdentity(version=3)
        assert adopt_remote(None, remote) is remote

    def test_newer_or_equal_remote_wins(self):
        local, remote = TasteIdentity(version=3), TasteIdentity(version=3)
        assert adopt_remote(local, remote) is remote

    def test_local_ahead_is_kept(self):
        local, remote = TasteIdentity(version=5), TasteIdentity(version=3)
        assert adopt_remote(local, remote) is local


class TestRemoteIdentityClient:
    def test_not_configured_without_url(self):
        assert not RemoteIdentityClient(base_url="", api_key="").configured
        assert RemoteIdentityClient(base_url="https://sync.example.com", api_key="").configured

    def test_bootstrap(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"identity": remote_payload()})

        async def scenario():
            client = make_client(handler)
            try:
                return await client.bootstrap_identity("device-1")
            finally:
                await client.close()

        identity = asyncio.run(scenario())
        assert identity.id == UUID(IDENTITY_ID)

        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/functions/v1/identity-bootstrap"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["authorization"] == "Bearer anon-key"
        assert json.loads(request.content) == {"device_install_id": "device-1"}

    def test_record_event_body(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"identity": remote_payload(version=3), "pending": True})

        local = TasteIdentity(id=UUID(IDENTITY_ID), version=2)

        async def scenario():
            client = make_client(handler)
            try:
                return await client.record_event(
                    "device-1",
                    local,
                    TasteVote.RETURNED,
                    unit_embedding(0),
                    category=FurnitureCategory.SOFA,
                    return_reason=ReturnReason.COLOR_MISMATCH,
                    scores={"alignment": 0.7},
                )
            finally:
                await client.close()

        identity, pending = asyncio.run(scenario())
        assert identity.version == 3
        assert pending is True

        body = seen[0]
        assert body["identity_id"] == IDENTITY_ID.upper()
        assert body["vote"] == "returned"
        assert body["category"] == "sofa"
        assert body["return_reason"] == "colorMismatch"
        assert body["scores"] == {"alignment": 0.7}
        assert len(body["object_embedding"]) == EMBEDDING_SIZE

    def test_record_event_defaults(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"identity": remote_payload()})

        async def scenario():
            client = make_client(handler)
            try:
                return await client.record_event("device-1", TasteIdentity(), TasteVote.ME, unit_embedding(1))
            finally:
                await client.close()

        _, pending = asyncio.run(scenario())
        assert pending is False
        assert seen[0]["category"] == "other"
        assert "return_reason" not in seen[0]
        assert "scores" not in seen[0]

    def test_fetch_events(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            event = {
                "id": "e-1",
                "identity_id": IDENTITY_ID,
                "vote": "me",
                "category": "rug",
                "created_at": "2026-03-01T10:00:00Z",
            }
            return httpx.Response(200, json={"events": [event]})

        async def scenario():
            client = make_client(handler)
            try:
                return await client.fetch_events("device-1", UUID(IDENTITY_ID), limit=10)
            finally:
                await client.close()

        events = asyncio.run(scenario())
        assert [e.id for e in events] == ["e-1"]
        assert events[0].pending is False

        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/functions/v1/fetch-events"
        assert request.url.params["identity_id"] == IDENTITY_ID.upper()
        assert request.url.params["limit"] == "10"

    def test_server_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "boom"})

        async def scenario():
            client = make_client(handler)
            try:
                await client.bootstrap_identity("device-1")
            finally:
                await client.close()

        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(scenario())


class TestRetries:
    @staticmethod
    def counting_client(statuses: list[int], calls: list) -> RemoteIdentityClient:
        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            status = statuses[min(len(calls), len(statuses)) - 1]
            return httpx.Response(status, json={"identity": remote_payload()})

        client = make_client(handler)
        client.max_retries = 3
        return client

    def test_rejected_request_is_not_retried(self):
        calls = []

        async def scenario():
            client = self.counting_client([404], calls)
            try:
                await client.bootstrap_identity("device-1")
            finally:
                await client.close()

        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(scenario())
        assert len(calls) == 1

    def test_unavailable_backend_is_retried(self, monkeypatch):
        async def no_wait(_seconds):
            return None

        monkeypatch.setattr(base_client.asyncio, "sleep", no_wait)
        calls = []

        async def scenario():
            client = self.counting_client([503, 200], calls)
            try:
                return await client.bootstrap_identity("device-1")
            finally:
                await client.close()

        identity = asyncio.run(scenario())
        assert identity.id == UUID(IDENTITY_ID)
        assert len(calls) == 2

    def test_non_object_body_is_rejected(self):
        async def scenario():
            client = make_client(lambda request: httpx.Response(200, json=["not", "an", "object"]))
            try:
                await client.fetch_events("device-1", UUID(IDENTITY_ID))
            finally:
                await client.close()

        with pytest.raises(ValueError):
            asyncio.run(scenario())

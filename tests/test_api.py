"""End-to-end tests for the HTTP API over an in-memory Redis and the bundled catalog."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from tastematch.core.app import app
from tastematch.services.catalog.loader import catalog_loader
from tastematch.services.reinforcement.session import identity_sessions
from tastematch.services.stores.redis_service import redis_service

from .helpers import CATALOG_DIR

NEUTRAL_SIGNALS = [0.5] * 11


@pytest.fixture
def client(monkeypatch, fake_redis):
    monkeypatch.setattr(redis_service, "_client", fake_redis)
    monkeypatch.setattr(catalog_loader, "catalog_dir", CATALOG_DIR)
    catalog_loader.reset_cache()
    identity_sessions._sessions.clear()
    identity_sessions._live.clear()
    with TestClient(app) as test_client:
        yield test_client
    identity_sessions._sessions.clear()
    identity_sessions._live.clear()
    catalog_loader.reset_cache()


def calibrate_space(client, profile_id):
    state = client.post(f"/calibration/{profile_id}/space/start").json()
    while state["phase"] == "swipe":
        response = client.post(f"/calibration/{profile_id}/space/swipe", json={"direction": "right"})
        assert response.status_code == 200
        state = response.json()
    return state


def calibrate_objects(client, profile_id):
    state = client.post(f"/calibration/{profile_id}/objects/start").json()
    while state["phase"] == "swipe":
        state = client.post(f"/calibration/{profile_id}/objects/swipe", json={"direction": "up"}).json()
    while state["phase"] == "duel":
        winner = state["current_duel"]["left"]
        response = client.post(f"/calibration/{profile_id}/objects/duel", json={"winner": winner})
        assert response.status_code == 200
        state = response.json()
    return state


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_redis_health(self, client):
        assert client.get("/health/redis").json() == {"redis": "ok"}


class TestIdentity:
    def test_bootstrap_is_stable_per_device(self, client):
        first = client.post("/identity/bootstrap", json={"device_id": "device-a"}).json()
        again = client.post("/identity/bootstrap", json={"device_id": "device-a"}).json()
        other = client.post("/identity/bootstrap", json={"device_id": "device-b"}).json()

        assert first["identity"]["id"] == again["identity"]["id"]
        assert first["identity"]["id"] != other["identity"]["id"]
        assert first["identity"]["version"] == 1
        assert first["pending"] == []

    def test_empty_device_id_is_rejected(self, client):
        assert client.post("/identity/bootstrap", json={"device_id": ""}).status_code == 422

    def test_unknown_identity(self, client):
        assert client.get(f"/identity/{uuid4()}").status_code == 404

    def test_vote_then_anchor_deferral(self, client):
        identity_id = client.post("/identity/bootstrap", json={"device_id": "device-a"}).json()["identity"]["id"]

        immediate = client.post(f"/identity/{identity_id}/votes", json={"vote": "me", "signals": NEUTRAL_SIGNALS})
        assert immediate.status_code == 200
        assert immediate.json()["deferred"] is False
        assert immediate.json()["identity"]["version"] == 2
        assert immediate.json()["identity"]["count_me"] == 1

        deferred = client.post(
            f"/identity/{identity_id}/votes",
            json={"vote": "me", "signals": NEUTRAL_SIGNALS, "category": "sofa"},
        ).json()
        assert deferred["deferred"] is True
        pending_id = deferred["pending"]["id"]

        pending = client.get(f"/identity/{identity_id}/pending").json()
        assert [p["id"] for p in pending] == [pending_id]

        finalized = client.post(f"/identity/{identity_id}/pending/{pending_id}/finalize")
        assert finalized.status_code == 200
        assert client.get(f"/identity/{identity_id}/pending").json() == []

        missing = client.post(f"/identity/{identity_id}/pending/{pending_id}/finalize")
        assert missing.status_code == 404

    def test_wrong_embedding_length(self, client):
        identity_id = client.post("/identity/bootstrap", json={"device_id": "device-a"}).json()["identity"]["id"]
        response = client.post(f"/identity/{identity_id}/votes", json={"vote": "me", "embedding": [0.1, 0.2]})
        assert response.status_code == 422


class TestScoring:
    def test_evaluate(self, client):
        identity_id = client.post("/identity/bootstrap", json={"device_id": "device-a"}).json()["identity"]["id"]
        response = client.post("/scoring/evaluate", json={"identity_id": identity_id, "signals": NEUTRAL_SIGNALS})
        assert response.status_code == 200
        assert "score" in response.json()

    def test_evaluate_unknown_identity(self, client):
        response = client.post("/scoring/evaluate", json={"identity_id": str(uuid4()), "signals": NEUTRAL_SIGNALS})
        assert response.status_code == 404

    def test_tags(self, client):
        body = {"candidate": {"rustic": 1.0}, "identity": {"rustic": 1.0}}
        result = client.post("/scoring/tags", json=body).json()
        assert result["alignment"] == pytest.approx(100.0)

    def test_advisory_unknown_sku(self, client):
        response = client.post("/scoring/objects/advisory", json={"profile_id": str(uuid4()), "sku_id": "NOPE"})
        assert response.status_code == 404


class TestSpaceProfile:
    def test_calibrate_rank_and_name(self, client):
        profile_id = str(uuid4())
        state = calibrate_space(client, profile_id)
        assert state["phase"] == "complete"
        assert state["swipe_count"] == 10

        again = client.post(f"/calibration/{profile_id}/space/swipe", json={"direction": "left"})
        assert again.status_code == 409

        page = client.get(f"/ranking/{profile_id}/commerce").json()
        assert len(page["items"]) == 10
        assert page["has_more"] is False
        scores = [item["attribution_confidence"] for item in page["items"]]
        assert all(0.0 <= s <= 1.0 for s in scores)
        assert all(item["reason"] for item in page["items"])

        limited = client.get(f"/ranking/{profile_id}/commerce", params={"limit": 3}).json()
        assert len(limited["items"]) == 3
        assert limited["has_more"] is True

        name = client.get(f"/profiles/{profile_id}/name").json()
        assert name["name"]
        assert name["version"] == 1

        presentation = client.get(f"/profiles/{profile_id}/presentation").json()
        assert presentation["reading"].startswith(name["name"])
        assert len(presentation["axis_scores"]) == 7

        snapshot = client.get(f"/profiles/{profile_id}/snapshot").json()
        assert snapshot["profile_name"] == name["name"]

        share = client.post(f"/profiles/{profile_id}/share").json()
        assert share["slug"] == profile_id[:8]

        tips = client.get(f"/profiles/{profile_id}/tips", params={"room": "bedroom"}).json()
        assert 1 <= len(tips) <= 3
        assert "Keep tech out of sight" in [tip["headline"] for tip in tips]

    def test_discovery_and_radar(self, client):
        profile_id = str(uuid4())
        calibrate_space(client, profile_id)

        feed = client.get(f"/ranking/{profile_id}/discovery").json()
        assert len(feed["items"]) == 8
        first_id = feed["items"][0]["id"]

        signals = client.post(f"/ranking/{profile_id}/discovery/{first_id}/dismiss").json()
        assert first_id in signals["dismissed_ids"]
        after = client.get(f"/ranking/{profile_id}/discovery").json()
        assert len(after["items"]) == 8
        assert first_id in [item["id"] for item in after["items"]]

        radar = client.get(f"/ranking/{profile_id}/radar", params={"day": 20500}).json()
        assert radar == client.get(f"/ranking/{profile_id}/radar", params={"day": 20500}).json()
        assert len(radar) <= 6

    def test_reset(self, client):
        profile_id = str(uuid4())
        calibrate_space(client, profile_id)
        assert client.delete(f"/calibration/{profile_id}/space").status_code == 200
        assert client.get(f"/calibration/{profile_id}/space").status_code == 404
        assert client.get(f"/ranking/{profile_id}/commerce").status_code == 404


class TestObjectsProfile:
    def test_calibrate_rank_and_advise(self, client):
        profile_id = str(uuid4())
        state = calibrate_objects(client, profile_id)
        assert state["phase"] == "complete"
        assert 5 <= state["duel_count"] <= 8

        page = client.get(f"/ranking/{profile_id}/objects").json()
        assert len(page["items"]) == 10

        decision = client.post("/scoring/objects/advisory", json={"profile_id": profile_id, "sku_id": "OB-001"}).json()
        assert decision["verdict"] in {"green", "yellow", "red"}

        recorded = client.post(
            "/scoring/objects/advisory/actions",
            json={"profile_id": profile_id, "sku_id": "OB-001", "action": "proceeded", "verdict": "red"},
        ).json()
        assert recorded == {"recorded": True}

        name = client.get(f"/profiles/{profile_id}/name", params={"domain": "objects"}).json()
        assert name["name"]

    def test_duel_before_swipes_conflicts(self, client):
        profile_id = str(uuid4())
        client.post(f"/calibration/{profile_id}/objects/start")
        response = client.post(f"/calibration/{profile_id}/objects/duel", json={"winner": "quietLuxury"})
        assert response.status_code == 409


class TestUnknownProfile:
    @pytest.mark.parametrize("path", ["objects", "art", "commerce", "discovery", "radar"])
    def test_ranking_needs_calibration(self, client, path):
        assert client.get(f"/ranking/{uuid4()}/{path}").status_code == 404

    def test_profile_without_calibration(self, client):
        profile_id = uuid4()
        assert client.get(f"/profiles/{profile_id}/name").status_code == 404
        assert client.get(f"/profiles/{profile_id}/snapshot").status_code == 404
        assert client.get(f"/profiles/{profile_id}/tips").status_code == 404

    def test_calibration_not_started(self, client):
        assert client.post(f"/calibration/{uuid4()}/space/swipe", json={"direction": "right"}).status_code == 404


class TestFavorites:
    def test_add_list_remove(self, client):
        identity_id = client.post("/identity/bootstrap", json={"device_id": "device-a"}).json()["identity"]["id"]
        profile_id = str(uuid4())
        calibrate_space(client, profile_id)
        item = client.get(f"/ranking/{profile_id}/commerce", params={"limit": 1}).json()["items"][0]

        added = client.post(f"/favorites/{identity_id}", json=item).json()
        assert added["added"] is True
        assert [f["item"]["sku_id"] for f in added["favorites"]] == [item["sku_id"]]
        assert client.post(f"/favorites/{identity_id}", json=item).json()["added"] is False

        listed = client.get(f"/favorites/{identity_id}").json()
        assert listed[0]["item"]["reason"] == item["reason"]

        assert client.delete(f"/favorites/{identity_id}/{item['sku_id']}").status_code == 200
        assert client.delete(f"/favorites/{identity_id}/{item['sku_id']}").status_code == 404
        assert client.get(f"/favorites/{identity_id}").json() == []

    def test_unknown_identity(self, client):
        assert client.get(f"/favorites/{uuid4()}").status_code == 404

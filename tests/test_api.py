"""API tests with the weather provider, store and registry swapped for local fakes."""

import pytest
from fastapi.testclient import TestClient

from drift_sar.api import app
from drift_sar.deps import get_provider, get_registry, get_store
from drift_sar.providers.base import WeatherProvider
from drift_sar.store.memory import MemoryResultStore
from drift_sar.tracking import TrackingRegistry


class FixedProvider(WeatherProvider):
    def __init__(self, sample):
        self.sample = sample

    def get_weather(self, lat, lng):
        return self.sample


@pytest.fixture
def client(southerly_weather):
    registry = TrackingRegistry(signal_lost_threshold_s=60)
    store = MemoryResultStore()
    app.dependency_overrides[get_provider] = lambda: FixedProvider(southerly_weather)
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_registry] = lambda: registry
    yield TestClient(app)
    app.dependency_overrides.clear()


def _run(client, **overrides):
    body = {
        "subjectId": "f1",
        "lastKnownLat": 13.0827,
        "lastKnownLng": 80.2707,
        "simulationHours": 3,
        "numPaths": 50,
        "seed": 5,
    }
    body.update(overrides)
    return client.post("/simulation/run", json=body)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_marine_weather(client):
    r = client.get("/marine-weather", params={"lat": 13.08, "lng": 80.27})
    assert r.status_code == 200
    data = r.json()
    assert data["windSpeed"] == 20.0
    assert data["windDescription"] == "Moderate breeze"
    assert data["seaStateDescription"] == "Slight"


def test_run_simulation(client):
    r = _run(client)
    assert r.status_code == 200
    data = r.json()
    assert data["success"] is True

    result = data["result"]["result"]
    assert len(result["driftPaths"]) == 50
    assert all(len(p) == 4 for p in result["driftPaths"])
    assert len(result["predictedPoints"]) == 3
    assert max(c["intensity"] for c in result["heatmapPoints"]) == 1.0
    assert 2.0 <= data["result"]["searchRadiusKm"] <= 50.0
    assert data["weather"]["currentDirection"] == 200.0
    assert data["summary"]["finalPosition"]["lat"] < 13.0827


def test_default_num_paths(client):
    body = {"subjectId": "f1", "lastKnownLat": 13.0, "lastKnownLng": 80.0, "simulationHours": 1}
    r = client.post("/simulation/run", json=body)
    assert r.status_code == 200
    assert r.json()["result"]["numPaths"] == 100
    assert len(r.json()["result"]["result"]["driftPaths"]) == 100


@pytest.mark.parametrize(
    "overrides",
    [
        {"simulationHours": 0},
        {"simulationHours": 13},
        {"numPaths": 9},
        {"numPaths": 201},
    ],
)
def test_out_of_range_rejected(client, overrides):
    assert _run(client, **overrides).status_code == 422


def test_latest_and_session_results(client):
    first = _run(client, sessionId="s1").json()["result"]
    second = _run(client, sessionId="s2").json()["result"]

    latest = client.get("/drift-result/f1")
    assert latest.status_code == 200
    assert latest.json()["id"] == second["id"]

    by_session = client.get("/sessions/s1/drift-result")
    assert by_session.json()["id"] == first["id"]

    history = client.get("/drift-result/f1/history").json()
    assert [h["id"] for h in history] == [second["id"], first["id"]]


def test_missing_results_404(client):
    assert client.get("/drift-result/nobody").status_code == 404
    assert client.get("/sessions/none/drift-result").status_code == 404


def test_simulation_raises_alert(client):
    _run(client)
    alerts = client.get("/alerts", params={"subjectId": "f1"}).json()
    assert [a["type"] for a in alerts] == ["drift_complete"]

    r = client.patch(f"/alerts/{alerts[0]['id']}/dismiss")
    assert r.status_code == 200
    assert client.get("/alerts").json() == []
    assert client.patch("/alerts/unknown/dismiss").status_code == 404


def test_tracking_flow(client):
    r = client.post("/tracking/f7/location", json={"lat": 13.1, "lng": 80.3, "sessionId": "s7"})
    assert r.status_code == 200
    assert r.json()["status"] == "online"
    assert r.json()["lastKnownLocation"] == {"lat": 13.1, "lng": 80.3}

    assert client.post("/tracking/f7/trigger-drift").json()["type"] == "signal_lost"
    state = client.get("/tracking/f7").json()
    assert (state["status"], state["mode"]) == ("offline", "drift")

    assert client.post("/tracking/f7/exit-drift").json()["type"] == "mode_change"
    assert client.get("/tracking/f7").json()["mode"] == "live"


def test_tracking_unknown_subject(client):
    assert client.get("/tracking/ghost").status_code == 404
    assert client.post("/tracking/ghost/trigger-drift").status_code == 404


def test_bad_location_rejected(client):
    r = client.post("/tracking/f7/location", json={"lat": 95.0, "lng": 80.3})
    assert r.status_code == 422


def test_subject_named_session_has_its_own_history(client):
    rec = _run(client, subjectId="session").json()["result"]
    history = client.get("/drift-result/session/history")
    assert history.status_code == 200
    assert [h["id"] for h in history.json()] == [rec["id"]]
    assert client.get("/drift-result/session").json()["id"] == rec["id"]


def test_location_source_and_accuracy_echoed(client):
    r = client.post(
        "/tracking/f8/location",
        json={"lat": 13.1, "lng": 80.3, "source": "pinned", "accuracy": 12.5},
    )
    assert r.status_code == 200
    assert (r.json()["locationSource"], r.json()["accuracy"]) == ("pinned", 12.5)

    state = client.get("/tracking/f8").json()
    assert (state["locationSource"], state["accuracy"]) == ("pinned", 12.5)


def test_unknown_location_source_rejected(client):
    r = client.post("/tracking/f8/location", json={"lat": 13.1, "lng": 80.3, "source": "radio"})
    assert r.status_code == 422

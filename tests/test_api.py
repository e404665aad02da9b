import pytest
from fastapi.testclient import TestClient

from vaxmap.data.catalog_repository import load_catalog
from vaxmap.main import create_app
from vaxmap.services.screens import registry


@pytest.fixture(autouse=True)
def clear_state():
    load_catalog.cache_clear()
    registry.clear()
    yield
    load_catalog.cache_clear()
    registry.clear()


@pytest.fixture
def api_client() -> TestClient:
    return TestClient(create_app())


@pytest.fixture
def session_id(api_client: TestClient) -> str:
    response = api_client.post("/api/sessions")
    assert response.status_code == 201
    return response.json()["session_id"]


def _ids(items):
    return [item["id"] for item in items]


def test_health(api_client: TestClient):
    assert api_client.get("/api/health").json() == {"status": "ok"}
    catalog_health = api_client.get("/api/health/catalog").json()
    assert catalog_health["healthy"] is True
    assert catalog_health["locations"] == 10


def test_vaccines_listed_in_enumeration_order(api_client: TestClient):
    payload = api_client.get("/api/vaccines").json()

    assert [item["id"] for item in payload] == ["moderna", "pfizer", "johnson_johnson"]
    assert payload[2]["label"] == "Johnson & Johnson"


def test_locations_default_to_all_types(api_client: TestClient):
    payload = api_client.get("/api/locations").json()

    assert payload["total"] == 10
    assert payload["filters"] == ["moderna", "pfizer", "johnson_johnson"]
    assert payload["items"][0]["id"] == "midtown-medicenter-pharmacy"


def test_locations_filtered_by_vaccine(api_client: TestClient):
    pfizer = api_client.get("/api/locations", params={"vaccine": "pfizer"}).json()
    assert _ids(pfizer["items"]) == ["reid-health-richmond"]

    moderna = api_client.get("/api/locations", params={"vaccine": ["moderna"]}).json()
    assert moderna["total"] == 6
    assert "meijer" in _ids(moderna["items"])
    assert "walmart" not in _ids(moderna["items"])


def test_locations_rejects_unknown_vaccine(api_client: TestClient):
    response = api_client.get("/api/locations", params={"vaccine": "sputnik"})

    assert response.status_code == 422


def test_location_detail_and_missing(api_client: TestClient):
    detail = api_client.get("/api/locations/meijer")
    assert detail.status_code == 200
    assert detail.json()["subtitle"] == "Available: Moderna"

    assert api_client.get("/api/locations/nowhere").status_code == 404


def test_locations_geojson(api_client: TestClient):
    payload = api_client.get("/api/locations.geojson", params={"vaccine": "pfizer"}).json()

    assert payload["type"] == "FeatureCollection"
    assert len(payload["features"]) == 1
    assert payload["features"][0]["id"] == "reid-health-richmond"


def test_map_screen_flow(api_client: TestClient, session_id: str):
    base = f"/api/sessions/{session_id}/map"

    initial = api_client.get(base).json()
    assert initial["region"]["latitude"] == pytest.approx(39.84)
    assert len(initial["annotations"]) == 10
    assert initial["has_initially_centered"] is False

    in_view = api_client.get(base, params={"in_region": "true"}).json()
    assert len(in_view["annotations"]) == 8  # Cambridge City is off screen

    fixed = api_client.post(f"{base}/position", json={"latitude": 39.85, "longitude": -84.88}).json()
    assert fixed["has_initially_centered"] is True
    assert fixed["region"]["latitude"] == pytest.approx(39.85)

    second_fix = api_client.post(f"{base}/position", json={"latitude": 41.0, "longitude": -85.0}).json()
    assert second_fix["region"]["latitude"] == pytest.approx(39.85)

    selected = api_client.post(f"{base}/selection", json={"location_id": "reid-health-richmond"}).json()
    assert selected["selected"]["id"] == "reid-health-richmond"
    assert selected["region"]["latitude"] == pytest.approx(39.88275)

    toggled = api_client.post(f"{base}/filters/toggle", json={"vaccine": "johnson_johnson"}).json()
    assert toggled["selected"] is None
    assert toggled["filters"] == ["moderna", "pfizer"]
    assert len(toggled["annotations"]) == 6

    cleared = api_client.post(f"{base}/filters/clear").json()
    assert cleared["annotations"] == []

    restored = api_client.post(f"{base}/filters/all").json()
    assert len(restored["annotations"]) == 10

    recentered = api_client.post(f"{base}/recenter").json()
    assert recentered["region"]["latitude"] == pytest.approx(41.0)


def test_map_position_failure_shows_default_region(api_client: TestClient, session_id: str):
    base = f"/api/sessions/{session_id}/map"

    payload = api_client.post(f"{base}/position/failure", json={"reason": "denied by user", "denied": True}).json()

    assert payload["region"]["latitude"] == pytest.approx(39.84)
    assert payload["region"]["longitude"] == pytest.approx(-84.89)
    assert len(payload["annotations"]) == 10


def test_selecting_filtered_out_location_is_404(api_client: TestClient, session_id: str):
    base = f"/api/sessions/{session_id}/map"
    api_client.put(f"{base}/filters", json={"vaccines": ["pfizer"]})

    response = api_client.post(f"{base}/selection", json={"location_id": "walmart"})

    assert response.status_code == 404


def test_list_filters_are_independent_of_map(api_client: TestClient, session_id: str):
    api_client.post(f"/api/sessions/{session_id}/map/filters/clear")

    listing = api_client.get(f"/api/sessions/{session_id}/list").json()
    assert listing["total"] == 10

    toggled = api_client.post(
        f"/api/sessions/{session_id}/list/filters/toggle", json={"vaccine": "johnson_johnson"}
    ).json()
    assert _ids(toggled["rows"]) == [
        "midtown-medicenter-pharmacy",
        "wayne-county-health-department",
        "reid-health-richmond",
        "meijer",
        "walgreens",
        "kroger-pharmacy",
    ]

    map_view = api_client.get(f"/api/sessions/{session_id}/map").json()
    assert map_view["annotations"] == []


def test_list_rows_include_distance_when_position_given(api_client: TestClient, session_id: str):
    listing = api_client.get(
        f"/api/sessions/{session_id}/list", params={"latitude": 39.8285, "longitude": -84.89014}
    ).json()

    assert listing["rows"][0]["distance_km"] == 0
    assert all(row["distance_km"] is not None for row in listing["rows"])


def test_list_focus_region(api_client: TestClient, session_id: str):
    region = api_client.get(f"/api/sessions/{session_id}/list/walmart/focus").json()

    assert region["latitude"] == pytest.approx(39.82667)
    assert region["latitude_delta"] == pytest.approx(0.02)


def test_unknown_session_is_404(api_client: TestClient):
    assert api_client.get("/api/sessions/missing/map").status_code == 404
    assert api_client.delete("/api/sessions/missing").status_code == 404


def test_delete_session(api_client: TestClient, session_id: str):
    assert api_client.delete(f"/api/sessions/{session_id}").status_code == 204
    assert api_client.get(f"/api/sessions/{session_id}/list").status_code == 404


def test_position_failure_without_body_falls_back_to_default_region(api_client: TestClient, session_id: str):
    base = f"/api/sessions/{session_id}/map"
    api_client.post(f"{base}/position", json={"latitude": 41.0, "longitude": -85.0})

    response = api_client.post(f"{base}/position/failure")

    assert response.status_code == 200
    payload = response.json()
    assert payload["region"]["latitude"] == pytest.approx(39.84)
    assert len(payload["annotations"]) == 10


def test_empty_vaccine_query_means_nothing_visible(api_client: TestClient):
    payload = api_client.get("/api/locations", params={"vaccine": ""}).json()

    assert payload["filters"] == []
    assert payload["total"] == 0
    assert payload["items"] == []

    geojson = api_client.get("/api/locations.geojson", params={"vaccine": ""}).json()
    assert geojson["features"] == []


def test_vaccine_query_accepts_labels(api_client: TestClient):
    payload = api_client.get("/api/locations", params={"vaccine": "Pfizer"}).json()

    assert [item["id"] for item in payload["items"]] == ["reid-health-richmond"]


def test_malformed_catalog_reports_load_failure(api_client: TestClient, tmp_path, monkeypatch: pytest.MonkeyPatch):
    import json

    from vaxmap.config import settings

    source = tmp_path / "catalog.json"
    source.write_text(json.dumps(["not-a-record"]), encoding="utf-8")
    monkeypatch.setattr(settings, "catalog_file", source)

    response = api_client.post("/api/sessions")

    assert response.status_code == 500
    assert response.json()["detail"].startswith("Failed to load catalog")

import pytest

from vaxmap.models.domain import Coordinate, Location, MapRegion, VaccineType
from vaxmap.services import geospatial


def _location(lat: float, lon: float) -> Location:
    return Location(id="L1", latitude=lat, longitude=lon, title="L1", vaccines=(VaccineType.PFIZER,))


def test_haversine_zero_and_known_distance():
    assert geospatial.haversine_km(39.8, -84.9, 39.8, -84.9) == 0
    # One degree of latitude is roughly 111 km.
    assert geospatial.haversine_km(39.0, -84.9, 40.0, -84.9) == pytest.approx(111.19, rel=1e-3)


def test_default_region_uses_settings():
    region = geospatial.default_region()

    assert region.center == Coordinate(39.840, -84.890)
    assert region.latitude_delta == pytest.approx(0.15)
    assert region.longitude_delta == pytest.approx(0.15)


def test_selection_region_is_shifted_north():
    region = geospatial.selection_region(_location(39.86275, -84.88375))

    assert region.center.latitude == pytest.approx(39.88275)
    assert region.center.longitude == pytest.approx(-84.88375)
    assert region.latitude_delta == pytest.approx(0.08)


def test_focus_region_is_tight_around_location():
    region = geospatial.focus_region(_location(39.8, -84.9))

    assert region.center == Coordinate(39.8, -84.9)
    assert region.latitude_delta == pytest.approx(0.02)


def test_region_contains_includes_edges():
    region = MapRegion(center=Coordinate(0.0, 0.0), latitude_delta=2.0, longitude_delta=2.0)

    assert geospatial.region_contains(region, Coordinate(0.5, -0.5))
    assert geospatial.region_contains(region, Coordinate(1.0, 1.0))
    assert not geospatial.region_contains(region, Coordinate(1.5, 0.0))


def test_region_settings_can_be_overridden(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(geospatial.settings, "region_span_degrees", 0.5)

    region = geospatial.centered_region(Coordinate(40.0, -85.0))

    assert region.latitude_delta == 0.5

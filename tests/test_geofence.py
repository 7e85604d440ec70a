import pytest
import requests

from hostelkeeper.core.exceptions import ValidationError
from hostelkeeper.services.attendance.geofence import (
    BoundingBoxVerifier,
    CampusGeofence,
    ReverseGeocodingVerifier,
    build_campus_geofence,
)
from hostelkeeper.utils.geo_utils import AddressGeocoder, BoundingBox, GeoPoint, ReverseGeocodingError

BOX = BoundingBox(16.25, 16.65, 80.35, 80.75)


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error is not None:
            raise self.error
        return self.response


def geocoded(*addresses, components=()):
    return FakeResponse({
        "status": "OK",
        "results": [{
            "formatted_address": address,
            "address_components": [{"long_name": name, "short_name": name} for name in components],
        } for address in addresses],
    })


def fence(session):
    geocoder = AddressGeocoder(api_key="key", url="https://geo.example/json", session=session)
    primary = ReverseGeocodingVerifier(
        geocoder,
        place_tokens=["vadlamudi", "vignan", "university"],
        region_tokens=["guntur"],
        component_tokens=["vadlamudi", "vignan"],
    )
    return CampusGeofence(fallback=BoundingBoxVerifier(BOX), primary=primary)


def test_bounding_box_edges_are_inclusive():
    assert BOX.contains(GeoPoint(16.25, 80.75))
    assert not BOX.contains(GeoPoint(16.66, 80.5))


def test_geopoint_validates_ranges():
    with pytest.raises(ValueError):
        GeoPoint(91, 0)


def test_address_match_needs_place_and_region():
    session = FakeSession(geocoded("Vignan University Road, Vadlamudi, Guntur, Andhra Pradesh"))
    assert fence(session).verify(16.23, 80.44)
    assert session.calls[0][1] == {"latlng": "16.23,80.44", "key": "key"}


def test_address_without_region_does_not_match():
    assert not fence(FakeSession(geocoded("Vignan Residency, Hyderabad"))).verify(17.3, 78.4)


def test_component_name_matches():
    session = FakeSession(geocoded("Unnamed Road", components=["Vadlamudi", "Andhra Pradesh"]))
    assert fence(session).verify(16.23, 80.44)


def test_no_match_is_not_rescued_by_bounding_box():
    session = FakeSession(FakeResponse({"status": "ZERO_RESULTS", "results": []}))
    assert not fence(session).verify(16.45, 80.55)


def test_lookup_failure_falls_back_to_bounding_box():
    session = FakeSession(error=requests.ConnectionError("offline"))
    assert fence(session).verify(16.45, 80.55)
    assert not fence(session).verify(17.38, 78.48)


@pytest.mark.parametrize("response", [
    FakeResponse({}, status_code=503),
    FakeResponse({"status": "REQUEST_DENIED", "error_message": "bad key"}),
])
def test_service_errors_fall_back(response):
    assert fence(FakeSession(response)).verify(16.45, 80.55)


def test_geocoder_raises_on_bad_status():
    geocoder = AddressGeocoder("key", "https://geo.example/json",
                               session=FakeSession(FakeResponse({"status": "OVER_QUERY_LIMIT"})))
    with pytest.raises(ReverseGeocodingError):
        geocoder.reverse_geocode(GeoPoint(16.4, 80.5))


def test_invalid_coordinates_are_a_validation_error():
    with pytest.raises(ValidationError):
        CampusGeofence(fallback=BoundingBoxVerifier(BOX)).verify(120.0, 80.5)


def test_without_api_key_only_bounding_box_is_used():
    geofence = build_campus_geofence()

    assert geofence.primary is None
    assert geofence.verify(16.45, 80.55)
    assert not geofence.verify(17.38, 78.48)

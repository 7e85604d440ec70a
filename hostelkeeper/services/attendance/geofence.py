"""
Campus geofence.

Two tiers behind one ``verify`` call: a reverse-geocoding lookup matched
against expected place names, and a fixed bounding box used when the lookup
is unavailable. Neither tier passing means the location is rejected.
"""

from typing import Iterable, List, Optional, Protocol

import requests

from hostelkeeper.config.settings import settings
from hostelkeeper.core.exceptions import ExternalServiceError, ValidationError
from hostelkeeper.core.logging import get_logger
from hostelkeeper.utils.geo_utils import (
    AddressGeocoder,
    BoundingBox,
    GeoPoint,
    ReverseGeocodeResult,
    ReverseGeocodingError,
)

logger = get_logger(__name__)


class GeofenceVerifier(Protocol):
    def verify(self, latitude: float, longitude: float) -> bool:
        ...


class BoundingBoxVerifier:
    """Local check against an inclusive latitude/longitude box"""

    def __init__(self, box: BoundingBox):
        self.box = box

    def verify(self, latitude: float, longitude: float) -> bool:
        return self.box.contains(GeoPoint(latitude, longitude))


class ReverseGeocodingVerifier:
    """
    Remote check: the coordinate's address must name the campus.

    A formatted address matches when it contains any place token and any
    region token; an address component matches when it contains any
    component token.
    """

    def __init__(
        self,
        geocoder: AddressGeocoder,
        place_tokens: Iterable[str],
        region_tokens: Iterable[str],
        component_tokens: Iterable[str],
    ):
        self.geocoder = geocoder
        self.place_tokens: List[str] = [t.lower() for t in place_tokens]
        self.region_tokens: List[str] = [t.lower() for t in region_tokens]
        self.component_tokens: List[str] = [t.lower() for t in component_tokens]

    def verify(self, latitude: float, longitude: float) -> bool:
        try:
            result = self.geocoder.reverse_geocode(GeoPoint(latitude, longitude))
        except ReverseGeocodingError as e:
            raise ExternalServiceError("Reverse geocoding", f"Location lookup failed: {e}") from e
        return self.matches(result)

    def matches(self, result: ReverseGeocodeResult) -> bool:
        for address in result.formatted_addresses:
            text = address.lower()
            if any(t in text for t in self.place_tokens) and any(t in text for t in self.region_tokens):
                return True
        for name in result.component_names:
            text = name.lower()
            if any(t in text for t in self.component_tokens):
                return True
        return False


class CampusGeofence:
    """Primary verifier with a local fallback; never fails open"""

    def __init__(self, fallback: GeofenceVerifier, primary: Optional[GeofenceVerifier] = None):
        self.primary = primary
        self.fallback = fallback

    def verify(self, latitude: float, longitude: float) -> bool:
        try:
            GeoPoint(latitude, longitude)
        except ValueError as e:
            raise ValidationError(str(e), field_errors={"location": [str(e)]})

        if self.primary is None:
            verified = self.fallback.verify(latitude, longitude)
            logger.debug(f"Geofence bounding box check for ({latitude}, {longitude}): {verified}")
            return verified

        try:
            verified = self.primary.verify(latitude, longitude)
        except ExternalServiceError as e:
            logger.warning(f"{e.message}; falling back to bounding box check")
            verified = self.fallback.verify(latitude, longitude)

        logger.info(f"Geofence check for ({latitude}, {longitude}): {'verified' if verified else 'rejected'}")
        return verified


def build_campus_geofence(session: Optional[requests.Session] = None) -> CampusGeofence:
    """Geofence configured from settings"""
    fallback = BoundingBoxVerifier(BoundingBox(
        min_latitude=settings.GEOFENCE_MIN_LAT,
        max_latitude=settings.GEOFENCE_MAX_LAT,
        min_longitude=settings.GEOFENCE_MIN_LON,
        max_longitude=settings.GEOFENCE_MAX_LON,
    ))

    primary = None
    if settings.GEOCODING_API_KEY:
        primary = ReverseGeocodingVerifier(
            AddressGeocoder(
                api_key=settings.GEOCODING_API_KEY,
                url=settings.GEOCODING_URL,
                timeout=settings.GEOCODING_TIMEOUT_SECONDS,
                session=session,
            ),
            place_tokens=settings.GEOFENCE_PLACE_TOKENS,
            region_tokens=settings.GEOFENCE_REGION_TOKENS,
            component_tokens=settings.GEOFENCE_COMPONENT_TOKENS,
        )
    else:
        logger.info("No geocoding API key configured, using bounding box geofence only")

    return CampusGeofence(fallback=fallback, primary=primary)

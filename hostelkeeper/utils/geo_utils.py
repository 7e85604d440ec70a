"""
Geolocation utilities for campus location checks
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests


@dataclass
class GeoPoint:
    """Geographic point with latitude and longitude"""
    latitude: float
    longitude: float

    def __post_init__(self):
        if not (-90 <= self.latitude <= 90):
            raise ValueError("Latitude must be between -90 and 90")
        if not (-180 <= self.longitude <= 180):
            raise ValueError("Longitude must be between -180 and 180")


@dataclass
class BoundingBox:
    """Axis aligned latitude/longitude box, edges inclusive"""
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    def contains(self, point: GeoPoint) -> bool:
        return (
            self.min_latitude <= point.latitude <= self.max_latitude
            and self.min_longitude <= point.longitude <= self.max_longitude
        )


@dataclass
class ReverseGeocodeResult:
    """Addresses returned for a coordinate"""
    status: str
    formatted_addresses: List[str] = field(default_factory=list)
    component_names: List[str] = field(default_factory=list)


class ReverseGeocodingError(Exception):
    """Raised when the geocoding service cannot answer"""


class AddressGeocoder:
    """Google Maps style reverse geocoding client"""

    ACCEPTED_STATUSES = ("OK", "ZERO_RESULTS")

    def __init__(
        self,
        api_key: str,
        url: str,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def reverse_geocode(self, point: GeoPoint) -> ReverseGeocodeResult:
        """
        Look up the addresses at a coordinate.

        Raises:
            ReverseGeocodingError: transport failure, timeout, non-2xx
                response or an API status other than OK/ZERO_RESULTS
        """
        params = {
            'latlng': f"{point.latitude},{point.longitude}",
            'key': self.api_key,
        }

        try:
            response = self.session.get(self.url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data: Dict[str, Any] = response.json()
        except requests.RequestException as e:
            raise ReverseGeocodingError(str(e)) from e
        except ValueError as e:
            raise ReverseGeocodingError(f"Invalid geocoding response: {e}") from e

        status = data.get('status')
        if status not in self.ACCEPTED_STATUSES:
            raise ReverseGeocodingError(
                f"Geocoding status {status}: {data.get('error_message', '')}".strip()
            )

        result = ReverseGeocodeResult(status=status)
        for item in data.get('results') or []:
            if item.get('formatted_address'):
                result.formatted_addresses.append(item['formatted_address'])
            for component in item.get('address_components', []):
                for key in ('long_name', 'short_name'):
                    if component.get(key):
                        result.component_names.append(component[key])
        return result

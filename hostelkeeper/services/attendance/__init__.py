from hostelkeeper.services.attendance.attendance_service import AttendanceService
from hostelkeeper.services.attendance.geofence import (
    BoundingBoxVerifier,
    CampusGeofence,
    ReverseGeocodingVerifier,
    build_campus_geofence,
)

__all__ = [
    "AttendanceService",
    "BoundingBoxVerifier",
    "CampusGeofence",
    "ReverseGeocodingVerifier",
    "build_campus_geofence",
]

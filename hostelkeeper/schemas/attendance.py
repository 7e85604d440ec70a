from datetime import date, datetime
from typing import Optional

from pydantic import Field

from hostelkeeper.models.enums import AttendanceStatus
from hostelkeeper.schemas.base import BaseResponseSchema, BaseSchema, GeoLocation


class SelfAttendanceCreate(BaseSchema):
    date: date
    status: AttendanceStatus = AttendanceStatus.PRESENT
    location: Optional[GeoLocation] = None


class AttendanceMark(BaseSchema):
    user_id: str
    date: date
    status: AttendanceStatus
    remarks: Optional[str] = Field(None, max_length=500)


class FaceAttendanceMark(BaseSchema):
    student_id: str
    date: date
    status: AttendanceStatus = AttendanceStatus.PRESENT


class AttendanceResponse(BaseResponseSchema):
    user_id: str
    date: date
    status: AttendanceStatus
    marked_by_id: Optional[str] = None
    remarks: Optional[str] = None
    location_latitude: Optional[float] = None
    location_longitude: Optional[float] = None
    location_accuracy: Optional[float] = None
    location_timestamp: Optional[datetime] = None


class ReconcileRequest(BaseSchema):
    day: Optional[date] = None


class ReconcileSummary(BaseSchema):
    success: bool = True
    date: date
    considered: int
    created: int
    skipped: int
    failed: int

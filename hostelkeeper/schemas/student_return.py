from datetime import date, datetime
from typing import Literal, Optional

from pydantic import Field

from hostelkeeper.models.enums import AccessPermission
from hostelkeeper.schemas.base import BaseResponseSchema, BaseSchema, GeoLocation
from hostelkeeper.schemas.user import UserBrief


class ReturnReportCreate(BaseSchema):
    leave_request_id: Optional[str] = None
    expected_return_date: date
    location: Optional[GeoLocation] = None
    remarks: Optional[str] = Field(None, max_length=1000)


class AccessDecision(BaseSchema):
    permission: Literal["approved", "denied"]
    remarks: Optional[str] = Field(None, max_length=1000)


class ReturnReportResponse(BaseResponseSchema):
    student_id: str
    leave_request_id: Optional[str] = None
    reported_date: datetime
    expected_return_date: date
    actual_return_date: Optional[datetime] = None
    hostel_access_permission: AccessPermission
    permission_granted_by_id: Optional[str] = None
    permission_granted_at: Optional[datetime] = None
    remarks: Optional[str] = None
    location_latitude: Optional[float] = None
    location_longitude: Optional[float] = None
    location_accuracy: Optional[float] = None
    student: Optional[UserBrief] = None

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import Field

from hostelkeeper.models.enums import LeaveStatus
from hostelkeeper.schemas.base import BaseResponseSchema, BaseSchema
from hostelkeeper.schemas.user import UserBrief


class LeaveCreate(BaseSchema):
    from_date: date
    to_date: date
    reason: str = Field(..., min_length=1, max_length=1000)


class LeaveDecision(BaseSchema):
    status: Literal["approved", "rejected"]


class MarkReturned(BaseSchema):
    return_date: Optional[datetime] = None


class LeaveResponse(BaseResponseSchema):
    student_id: str
    from_date: date
    to_date: date
    reason: str
    status: LeaveStatus
    approver_id: Optional[str] = None
    decided_at: Optional[datetime] = None
    has_returned: bool
    returned_date: Optional[datetime] = None
    auto_attendance_enabled: bool
    student: Optional[UserBrief] = None

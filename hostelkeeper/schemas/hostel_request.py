from typing import Literal, Optional

from pydantic import Field

from hostelkeeper.models.enums import Gender, HostelRequestStatus, RoomType
from hostelkeeper.schemas.base import BaseResponseSchema, BaseSchema


class HostelRequestCreate(BaseSchema):
    hostel_preference: Optional[str] = Field(None, max_length=100)
    room_type: Optional[RoomType] = None
    ac_preference: bool = False
    gender: Optional[Gender] = None
    year: Optional[int] = Field(None, ge=1, le=10)


class HostelRequestDecision(BaseSchema):
    status: Literal["approved", "rejected"]
    room_id: Optional[str] = None
    remarks: Optional[str] = Field(None, max_length=1000)


class HostelRequestResponse(BaseResponseSchema):
    student_id: str
    hostel_preference: Optional[str] = None
    room_type: Optional[RoomType] = None
    ac_preference: bool
    gender: Optional[Gender] = None
    year: Optional[int] = None
    status: HostelRequestStatus
    assigned_room_id: Optional[str] = None
    approved_by_id: Optional[str] = None
    remarks: Optional[str] = None

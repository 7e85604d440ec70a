from typing import Dict, List, Optional

from pydantic import Field, model_validator

from hostelkeeper.models.enums import HostelGender
from hostelkeeper.schemas.base import BaseResponseSchema, BaseSchema
from hostelkeeper.schemas.room import RoomResponse


class HostelCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=100)
    block: str = Field(..., min_length=1, max_length=50)
    gender: HostelGender
    warden_id: Optional[str] = None
    facilities: List[str] = Field(default_factory=list)
    address: Optional[str] = None


class HostelUpdate(BaseSchema):
    block: Optional[str] = Field(None, min_length=1, max_length=50)
    gender: Optional[HostelGender] = None
    warden_id: Optional[str] = None
    facilities: Optional[List[str]] = None
    address: Optional[str] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "HostelUpdate":
        nulls = sorted(
            name for name in self.model_fields_set
            if name in ("block", "gender", "facilities", "is_active") and getattr(self, name) is None
        )
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null")
        return self


class HostelResponse(BaseResponseSchema):
    name: str
    block: str
    gender: HostelGender
    total_rooms: int
    total_capacity: int
    warden_id: Optional[str] = None
    facilities: List[str] = Field(default_factory=list)
    address: Optional[str] = None
    is_active: bool = True


class HostelStatistics(BaseSchema):
    total_rooms: int
    total_capacity: int
    occupied: int
    available: int
    room_types: Dict[str, Dict[str, int]]


class HostelDetails(BaseSchema):
    hostel: HostelResponse
    statistics: HostelStatistics
    rooms: List[RoomResponse]


class AggregateDrift(BaseSchema):
    hostel: str
    stored_rooms: int
    stored_capacity: int
    actual_rooms: int
    actual_capacity: int


class WardenAssignment(BaseSchema):
    warden_id: str
    hostel_name: str
    floor: int = Field(..., ge=0)


class StudentHostelUpdate(BaseSchema):
    hostel_name: Optional[str] = None
    room_id: Optional[str] = None

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, model_validator

from hostelkeeper.models.enums import Gender, MaintenanceStatus, RoomType
from hostelkeeper.schemas.base import BaseResponseSchema, BaseSchema
from hostelkeeper.schemas.user import UserBrief


class RoomCreate(BaseSchema):
    hostel_name: str = Field(..., min_length=1, max_length=100)
    floor: int = Field(..., ge=0)
    number: str = Field(..., min_length=1, max_length=20)
    room_type: RoomType = RoomType.DOUBLE
    capacity: int = Field(2, ge=1, le=20)
    gender: Gender
    facilities: List[str] = Field(default_factory=list)
    has_ac: bool = False
    fee_per_year: Optional[Decimal] = Field(None, ge=0)
    maintenance_status: MaintenanceStatus = MaintenanceStatus.GOOD


_NOT_NULL_FIELDS = frozenset({
    "hostel_name",
    "floor",
    "number",
    "room_type",
    "capacity",
    "gender",
    "facilities",
    "has_ac",
    "maintenance_status",
})


class RoomUpdate(BaseSchema):
    hostel_name: Optional[str] = Field(None, min_length=1, max_length=100)
    floor: Optional[int] = Field(None, ge=0)
    number: Optional[str] = Field(None, min_length=1, max_length=20)
    room_type: Optional[RoomType] = None
    capacity: Optional[int] = Field(None, ge=1, le=20)
    gender: Optional[Gender] = None
    facilities: Optional[List[str]] = None
    has_ac: Optional[bool] = None
    fee_per_year: Optional[Decimal] = Field(None, ge=0)
    maintenance_status: Optional[MaintenanceStatus] = None
    last_maintenance: Optional[datetime] = None

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "RoomUpdate":
        """Fields backed by NOT NULL columns may be omitted but not set to null."""
        nulls = sorted(
            name for name in self.model_fields_set
            if name in _NOT_NULL_FIELDS and getattr(self, name) is None
        )
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null")
        return self


class RoomResponse(BaseResponseSchema):
    hostel_name: str
    floor: int
    number: str
    room_type: RoomType
    capacity: int
    gender: Gender
    assigned_warden_id: Optional[str] = None
    facilities: List[str] = Field(default_factory=list)
    has_ac: bool
    fee_per_year: Optional[Decimal] = None
    maintenance_status: MaintenanceStatus
    last_maintenance: Optional[datetime] = None
    occupants: List[UserBrief] = Field(default_factory=list)
    occupancy: int
    available_beds: int


class RoomAllocation(BaseSchema):
    student_id: str
    room_id: str

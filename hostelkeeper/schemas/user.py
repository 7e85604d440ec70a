from typing import Optional

from hostelkeeper.models.enums import Gender, UserRole
from hostelkeeper.schemas.base import BaseResponseSchema, BaseSchema


class UserBrief(BaseSchema):
    id: str
    name: str
    email: str
    role: UserRole
    hostel_code: Optional[str] = None


class UserResponse(BaseResponseSchema):
    name: str
    email: str
    role: UserRole
    gender: Optional[Gender] = None
    year: Optional[int] = None
    hostel_code: Optional[str] = None
    room_id: Optional[str] = None
    assigned_hostel: Optional[str] = None
    assigned_floor: Optional[int] = None
    is_active: bool = True

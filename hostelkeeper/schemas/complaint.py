from typing import Optional

from pydantic import Field

from hostelkeeper.models.enums import ComplaintStatus
from hostelkeeper.schemas.base import BaseResponseSchema, BaseSchema


class ComplaintCreate(BaseSchema):
    type: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1, max_length=2000)


class ComplaintStatusUpdate(BaseSchema):
    status: ComplaintStatus
    remarks: Optional[str] = Field(None, max_length=1000)


class ComplaintResponse(BaseResponseSchema):
    student_id: str
    type: str
    description: str
    status: ComplaintStatus
    remarks: Optional[str] = None

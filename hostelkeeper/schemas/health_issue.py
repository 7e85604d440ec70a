from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from hostelkeeper.models.enums import HealthIssueStatus, HealthIssueType, HealthSeverity
from hostelkeeper.schemas.base import BaseResponseSchema, BaseSchema


class HealthIssueCreate(BaseSchema):
    issue_type: HealthIssueType
    description: str = Field(..., min_length=1, max_length=2000)
    severity: HealthSeverity = HealthSeverity.MEDIUM
    symptoms: List[str] = Field(default_factory=list)


class HealthIssueUpdate(BaseSchema):
    """Handling update by a warden; unset fields are left unchanged."""

    status: Optional[HealthIssueStatus] = None
    action_taken: Optional[str] = Field(None, max_length=2000)
    referred_to: Optional[str] = Field(None, max_length=200)
    follow_up_date: Optional[date] = None
    remarks: Optional[str] = Field(None, max_length=1000)


class HealthIssueResponse(BaseResponseSchema):
    student_id: str
    issue_type: HealthIssueType
    description: str
    severity: HealthSeverity
    symptoms: List[str] = Field(default_factory=list)
    date_reported: datetime
    status: HealthIssueStatus
    action_taken: Optional[str] = None
    handled_by_id: Optional[str] = None
    referred_to: Optional[str] = None
    follow_up_date: Optional[date] = None
    remarks: Optional[str] = None

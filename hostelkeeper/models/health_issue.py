"""
Health issues reported by students and handled by wardens.
"""

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import JSON, Date, DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostelkeeper.models.base import TimestampModel
from hostelkeeper.models.enums import HealthIssueStatus, HealthIssueType, HealthSeverity
from hostelkeeper.utils.datetime_utils import utcnow

__all__ = ["HealthIssue"]


class HealthIssue(TimestampModel):
    __tablename__ = "health_issues"

    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    issue_type: Mapped[HealthIssueType] = mapped_column(
        Enum(HealthIssueType, name="health_issue_type_enum"),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    severity: Mapped[HealthSeverity] = mapped_column(
        Enum(HealthSeverity, name="health_severity_enum"),
        nullable=False,
        default=HealthSeverity.MEDIUM,
    )
    symptoms: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    date_reported: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    status: Mapped[HealthIssueStatus] = mapped_column(
        Enum(HealthIssueStatus, name="health_issue_status_enum"),
        nullable=False,
        default=HealthIssueStatus.REPORTED,
        index=True,
    )

    action_taken: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    handled_by_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    referred_to: Mapped[Optional[str]] = mapped_column(String(200), nullable=True, comment="Hospital or doctor")
    follow_up_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    remarks: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    student = relationship("User", foreign_keys=[student_id])
    handled_by = relationship("User", foreign_keys=[handled_by_id])

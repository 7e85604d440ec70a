"""
Leave request model.

A request is decided once (pending -> approved/rejected). Only approved
requests may be marked as returned.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostelkeeper.models.base import TimestampModel
from hostelkeeper.models.enums import LeaveStatus

if TYPE_CHECKING:
    from hostelkeeper.models.user import User

__all__ = ["LeaveRequest"]


class LeaveRequest(TimestampModel):
    __tablename__ = "leave_requests"
    __table_args__ = (
        CheckConstraint("to_date >= from_date", name="ck_leave_date_range"),
    )

    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    from_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    to_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[LeaveStatus] = mapped_column(
        Enum(LeaveStatus, name="leave_status_enum"),
        nullable=False,
        default=LeaveStatus.PENDING,
        index=True,
    )
    approver_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    decided_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    has_returned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    returned_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    auto_attendance_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    student: Mapped["User"] = relationship(
        "User",
        back_populates="leave_requests",
        foreign_keys=[student_id],
    )
    approver: Mapped[Optional["User"]] = relationship("User", foreign_keys=[approver_id])

    def is_active(self, today: date) -> bool:
        """Approved, covering ``today`` and not yet returned"""
        return (
            self.status == LeaveStatus.APPROVED
            and not self.has_returned
            and self.from_date <= today <= self.to_date
        )

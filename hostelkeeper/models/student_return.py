"""
Return-to-hostel reports filed by students coming back from leave.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, DateTime, Enum, Float, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostelkeeper.models.base import TimestampModel
from hostelkeeper.models.enums import AccessPermission

if TYPE_CHECKING:
    from hostelkeeper.models.leave_request import LeaveRequest
    from hostelkeeper.models.user import User

__all__ = ["StudentReturn"]


class StudentReturn(TimestampModel):
    __tablename__ = "student_returns"
    __table_args__ = (
        UniqueConstraint("student_id", "leave_request_id", name="uq_student_return_leave"),
    )

    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    leave_request_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("leave_requests.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    reported_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expected_return_date: Mapped[date] = mapped_column(Date, nullable=False)
    actual_return_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    hostel_access_permission: Mapped[AccessPermission] = mapped_column(
        Enum(AccessPermission, name="access_permission_enum"),
        nullable=False,
        default=AccessPermission.PENDING,
        index=True,
    )
    permission_granted_by_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    permission_granted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    remarks: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    location_latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    location_longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    location_accuracy: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    location_timestamp: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    student: Mapped["User"] = relationship("User", foreign_keys=[student_id])
    leave_request: Mapped[Optional["LeaveRequest"]] = relationship("LeaveRequest")
    permission_granted_by: Mapped[Optional["User"]] = relationship("User", foreign_keys=[permission_granted_by_id])

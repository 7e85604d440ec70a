"""
User model covering students, wardens and administrators.
"""

import random
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, String, event
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostelkeeper.config.settings import settings
from hostelkeeper.models.base import TimestampModel
from hostelkeeper.models.enums import Gender, UserRole

if TYPE_CHECKING:
    from hostelkeeper.models.room import Room

__all__ = ["User", "generate_hostel_code"]


class User(TimestampModel):
    """
    Hostel user.

    Students occupy at most one room through ``room_id``; wardens carry the
    hostel and floor they are responsible for.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role_enum"),
        nullable=False,
        default=UserRole.STUDENT,
        index=True,
    )
    gender: Mapped[Optional[Gender]] = mapped_column(Enum(Gender, name="gender_enum"), nullable=True)
    year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    hostel_code: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        unique=True,
        comment="Generated student hostel id",
    )

    room_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    room_assigned_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    assigned_hostel: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    assigned_floor: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    room: Mapped[Optional["Room"]] = relationship(
        "Room",
        back_populates="occupants",
        foreign_keys=[room_id],
    )
    leave_requests: Mapped[List["LeaveRequest"]] = relationship(  # noqa: F821
        "LeaveRequest",
        back_populates="student",
        foreign_keys="LeaveRequest.student_id",
        cascade="all, delete-orphan",
    )


def generate_hostel_code(prefix: Optional[str] = None, when: Optional[datetime] = None) -> str:
    """``<prefix><two digit year><six random digits>``, e.g. SHAMS24012345"""
    prefix = prefix if prefix is not None else settings.STUDENT_ID_PREFIX
    when = when or datetime.now()
    return f"{prefix}{when:%y}{random.randint(0, 999999):06d}"


@event.listens_for(User, "before_insert")
def _assign_hostel_code(mapper, connection, target: User) -> None:
    if target.role in (UserRole.STUDENT, None) and not target.hostel_code:
        target.hostel_code = generate_hostel_code()

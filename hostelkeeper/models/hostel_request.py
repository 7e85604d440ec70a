"""
Requests from students for a hostel room.
"""

from typing import Optional

from sqlalchemy import Boolean, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostelkeeper.models.base import TimestampModel
from hostelkeeper.models.enums import Gender, HostelRequestStatus, RoomType

__all__ = ["HostelRequest"]


class HostelRequest(TimestampModel):
    __tablename__ = "hostel_requests"

    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    hostel_preference: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    room_type: Mapped[Optional[RoomType]] = mapped_column(Enum(RoomType, name="room_type_enum"), nullable=True)
    ac_preference: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    gender: Mapped[Optional[Gender]] = mapped_column(Enum(Gender, name="gender_enum"), nullable=True)
    year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    status: Mapped[HostelRequestStatus] = mapped_column(
        Enum(HostelRequestStatus, name="hostel_request_status_enum"),
        nullable=False,
        default=HostelRequestStatus.PENDING,
        index=True,
    )
    assigned_room_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="SET NULL"),
        nullable=True,
    )
    approved_by_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    remarks: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    student = relationship("User", foreign_keys=[student_id])
    assigned_room = relationship("Room", foreign_keys=[assigned_room_id])

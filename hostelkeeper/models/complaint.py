"""
Student complaints.
"""

from typing import Optional

from sqlalchemy import Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostelkeeper.models.base import TimestampModel
from hostelkeeper.models.enums import ComplaintStatus

__all__ = ["Complaint"]


class Complaint(TimestampModel):
    __tablename__ = "complaints"

    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ComplaintStatus] = mapped_column(
        Enum(ComplaintStatus, name="complaint_status_enum"),
        nullable=False,
        default=ComplaintStatus.PENDING,
        index=True,
    )
    remarks: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    student = relationship("User", foreign_keys=[student_id])

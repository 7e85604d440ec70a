"""
Hostel model.

``total_rooms`` and ``total_capacity`` are derived from the rooms naming
the hostel and are maintained by the capacity ledger.
"""

from typing import List, Optional

from sqlalchemy import JSON, Boolean, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hostelkeeper.models.base import TimestampModel
from hostelkeeper.models.enums import HostelGender

__all__ = ["Hostel"]


class Hostel(TimestampModel):
    __tablename__ = "hostels"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    block: Mapped[str] = mapped_column(String(50), nullable=False)
    gender: Mapped[HostelGender] = mapped_column(Enum(HostelGender, name="hostel_gender_enum"), nullable=False)

    total_rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    warden_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    facilities: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

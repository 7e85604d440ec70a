"""
Room model.

Rooms reference their hostel by name only. Occupants are the users whose
``room_id`` points at the room, in assignment order.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Enum, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostelkeeper.models.base import TimestampModel
from hostelkeeper.models.enums import Gender, MaintenanceStatus, RoomType

if TYPE_CHECKING:
    from hostelkeeper.models.user import User

__all__ = ["Room"]


class Room(TimestampModel):
    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("hostel_name", "number", name="uq_room_hostel_number"),
    )

    hostel_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    floor: Mapped[int] = mapped_column(Integer, nullable=False)
    number: Mapped[str] = mapped_column(String(20), nullable=False)
    room_type: Mapped[RoomType] = mapped_column(
        Enum(RoomType, name="room_type_enum"),
        nullable=False,
        default=RoomType.DOUBLE,
    )
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    gender: Mapped[Gender] = mapped_column(Enum(Gender, name="gender_enum"), nullable=False)

    # Plain id column; users.room_id already points the other way
    assigned_warden_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)

    facilities: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    has_ac: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    fee_per_year: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    maintenance_status: Mapped[MaintenanceStatus] = mapped_column(
        Enum(MaintenanceStatus, name="maintenance_status_enum"),
        nullable=False,
        default=MaintenanceStatus.GOOD,
    )
    last_maintenance: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    occupants: Mapped[List["User"]] = relationship(
        "User",
        back_populates="room",
        foreign_keys="User.room_id",
        order_by="User.room_assigned_at",
    )

    @property
    def occupancy(self) -> int:
        return len(self.occupants)

    @property
    def available_beds(self) -> int:
        return max(self.capacity - self.occupancy, 0)

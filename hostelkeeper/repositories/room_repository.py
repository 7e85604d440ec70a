"""
Room repository.
"""

from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from hostelkeeper.models.enums import MaintenanceStatus
from hostelkeeper.models.room import Room
from hostelkeeper.models.user import User
from hostelkeeper.repositories.base import BaseRepository


class RoomRepository(BaseRepository[Room]):
    def __init__(self, db: Session):
        super().__init__(Room, db)

    def find_by_hostel(self, hostel_name: str) -> List[Room]:
        return self.find_all(Room.hostel_name == hostel_name, order_by=Room.number)

    def find_by_number(self, hostel_name: str, number: str) -> Optional[Room]:
        return self.find_one(Room.hostel_name == hostel_name, Room.number == number)

    def find_available(self, hostel_name: Optional[str] = None, gender=None) -> List[Room]:
        """Rooms with at least one free bed."""
        occupied = (
            select(func.count(User.id))
            .where(User.room_id == Room.id)
            .correlate(Room)
            .scalar_subquery()
        )
        stmt = select(Room).where(occupied < Room.capacity)
        if hostel_name:
            stmt = stmt.where(Room.hostel_name == hostel_name)
        if gender is not None:
            stmt = stmt.where(Room.gender == gender)
        return list(self.db.scalars(stmt.order_by(Room.hostel_name, Room.number)).all())

    def totals_by_hostel(self) -> Dict[str, Tuple[int, int]]:
        """``{hostel_name: (room count, capacity sum)}`` from the rooms themselves."""
        rows = self.db.execute(
            select(Room.hostel_name, func.count(Room.id), func.coalesce(func.sum(Room.capacity), 0))
            .group_by(Room.hostel_name)
        ).all()
        return {name: (int(count), int(capacity)) for name, count, capacity in rows}

    def assign_warden_to_floor(self, hostel_name: str, floor: int, warden_id: str) -> int:
        result = self.db.execute(
            update(Room)
            .where(Room.hostel_name == hostel_name, Room.floor == floor)
            .values(assigned_warden_id=warden_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0

    def count_occupied(self) -> int:
        """Rooms with at least one occupant."""
        return self.db.scalar(
            select(func.count(func.distinct(User.room_id))).where(User.room_id.is_not(None))
        ) or 0

    def find_needing_maintenance(self) -> List[Room]:
        return self.find_all(
            Room.maintenance_status != MaintenanceStatus.GOOD,
            order_by=Room.hostel_name,
        )

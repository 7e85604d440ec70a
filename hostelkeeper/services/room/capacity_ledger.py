"""
Capacity ledger.

Keeps each hostel's ``total_rooms``/``total_capacity`` in step with the rooms
naming it, and room occupancy in step with student assignment. Methods only
flush; the calling service commits, so the room change and the aggregate
change land in one transaction.
"""

from collections import defaultdict
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from hostelkeeper.core.exceptions import CapacityExceededError, GenderMismatchError
from hostelkeeper.models.hostel import Hostel
from hostelkeeper.models.room import Room
from hostelkeeper.models.user import User
from hostelkeeper.repositories.hostel_repository import HostelRepository
from hostelkeeper.repositories.room_repository import RoomRepository
from hostelkeeper.repositories.user_repository import UserRepository
from hostelkeeper.services.base import BaseService
from hostelkeeper.utils.datetime_utils import utcnow


class CapacityLedger(BaseService):
    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.hostels = HostelRepository(db_session)
        self.rooms = RoomRepository(db_session)
        self.users = UserRepository(db_session)

    # -------------------------------------------------------------------------
    # Hostel aggregates
    # -------------------------------------------------------------------------

    def _adjust(self, hostel_name: str, rooms_delta: int, capacity_delta: int, reason: str) -> bool:
        if not self.hostels.adjust_aggregates(hostel_name, rooms_delta, capacity_delta):
            self._logger.warning(
                f"Consistency gap: no hostel named '{hostel_name}' for {reason}",
                extra={"hostel_name": hostel_name, "rooms_delta": rooms_delta, "capacity_delta": capacity_delta},
            )
            return False
        self._logger.debug(
            f"Hostel '{hostel_name}' aggregates adjusted by rooms={rooms_delta:+d} capacity={capacity_delta:+d}"
        )
        return True

    def on_room_created(self, room: Room) -> bool:
        return self._adjust(room.hostel_name, 1, room.capacity, f"created room {room.number}")

    def on_room_capacity_changed(self, room: Room, old_capacity: int, new_capacity: int) -> bool:
        if new_capacity == old_capacity:
            return False
        return self._adjust(room.hostel_name, 0, new_capacity - old_capacity, f"resized room {room.number}")

    def on_room_deleted(self, room: Room) -> bool:
        return self._adjust(room.hostel_name, -1, -room.capacity, f"deleted room {room.number}")

    def on_room_moved(self, room: Room, old_hostel_name: str, old_capacity: Optional[int] = None) -> None:
        """Move the room's count and capacity from its old hostel to its current one."""
        if old_hostel_name == room.hostel_name:
            return
        old_capacity = room.capacity if old_capacity is None else old_capacity
        self._adjust(old_hostel_name, -1, -old_capacity, f"room {room.number} moved out")
        self._adjust(room.hostel_name, 1, room.capacity, f"room {room.number} moved in")

    def recompute_hostel_aggregates(self) -> List[Dict[str, Any]]:
        """
        Recompute every hostel's totals from its rooms.

        Returns one entry per hostel whose stored totals had drifted.
        """
        totals = self.rooms.totals_by_hostel()
        drift: List[Dict[str, Any]] = []

        hostels = self.hostels.find_all(order_by=Hostel.name)
        for hostel in hostels:
            rooms, capacity = totals.pop(hostel.name, (0, 0))
            if (hostel.total_rooms, hostel.total_capacity) == (rooms, capacity):
                continue
            entry = {
                "hostel": hostel.name,
                "stored_rooms": hostel.total_rooms,
                "stored_capacity": hostel.total_capacity,
                "actual_rooms": rooms,
                "actual_capacity": capacity,
            }
            self._logger.warning(f"Hostel aggregate drift corrected: {entry}")
            self.hostels.set_aggregates(hostel.id, rooms, capacity)
            drift.append(entry)

        for orphan_name in totals:
            self._logger.warning(f"Consistency gap: rooms reference unknown hostel '{orphan_name}'")

        self.db.flush()
        return drift

    def hostel_statistics(self, hostel: Hostel) -> Dict[str, Any]:
        rooms = self.rooms.find_by_hostel(hostel.name)
        by_type: Dict[str, Dict[str, int]] = defaultdict(lambda: {"rooms": 0, "capacity": 0, "occupied": 0})

        occupied = 0
        for room in rooms:
            bucket = by_type[room.room_type.value]
            bucket["rooms"] += 1
            bucket["capacity"] += room.capacity
            bucket["occupied"] += room.occupancy
            occupied += room.occupancy

        total_capacity = sum(room.capacity for room in rooms)
        return {
            "total_rooms": len(rooms),
            "total_capacity": total_capacity,
            "occupied": occupied,
            "available": max(total_capacity - occupied, 0),
            "room_types": dict(by_type),
        }

    # -------------------------------------------------------------------------
    # Occupancy
    # -------------------------------------------------------------------------

    def assign_student_to_room(self, student: User, room: Room) -> Room:
        """
        Place a student in a room, moving them out of any previous room.

        Raises:
            CapacityExceededError: the room has no free bed
            GenderMismatchError: the student's gender differs from the room's
        """
        if student.room_id == room.id:
            self._logger.debug(f"Student {student.id} already in room {room.id}")
            return room

        self.db.flush()
        # Serialises concurrent assignments to the same room
        self.rooms.get_by_id(room.id, for_update=True)

        occupancy = self.users.count_occupants(room.id)
        if occupancy >= room.capacity:
            raise CapacityExceededError(room.id, room.capacity)
        if student.gender != room.gender:
            raise GenderMismatchError(
                student.gender.value if student.gender else None,
                room.gender.value,
            )

        previous_room_id: Optional[str] = student.room_id
        student.room = room
        student.room_assigned_at = utcnow()
        self.db.flush()

        self._logger.info(
            f"Student {student.id} assigned to room {room.hostel_name}/{room.number}",
            extra={"student_id": student.id, "room_id": room.id, "previous_room_id": previous_room_id},
        )
        return room

    def unassign_student(self, student: User) -> Optional[str]:
        """Clear the student's room; returns the room id they left."""
        if student.room_id is None:
            self._logger.debug(f"Student {student.id} has no room to leave")
            return None

        previous_room_id = student.room_id
        student.room = None
        student.room_assigned_at = None
        self.db.flush()

        self._logger.info(
            f"Student {student.id} removed from room {previous_room_id}",
            extra={"student_id": student.id, "room_id": previous_room_id},
        )
        return previous_room_id

"""
Room administration.

Every change that affects a hostel's totals goes through the capacity
ledger in the same transaction as the room change.
"""

from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hostelkeeper.core.exceptions import ConflictError, GenderMismatchError, ValidationError
from hostelkeeper.core.permissions import ensure_same_hostel
from hostelkeeper.models.enums import Gender, UserRole
from hostelkeeper.models.room import Room
from hostelkeeper.models.user import User
from hostelkeeper.repositories.room_repository import RoomRepository
from hostelkeeper.repositories.user_repository import UserRepository
from hostelkeeper.schemas.room import RoomCreate, RoomUpdate
from hostelkeeper.services.base import BaseService
from hostelkeeper.services.room.capacity_ledger import CapacityLedger


class RoomService(BaseService):
    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.rooms = RoomRepository(db_session)
        self.users = UserRepository(db_session)
        self.ledger = CapacityLedger(db_session)

    def _duplicate(self, hostel_name: str, number: str) -> ConflictError:
        return ConflictError(
            f"Room {number} already exists in {hostel_name}",
            details={"hostel_name": hostel_name, "number": number},
        )

    def create_room(self, data: RoomCreate) -> Room:
        with self.transaction():
            if self.rooms.find_by_number(data.hostel_name, data.number):
                raise self._duplicate(data.hostel_name, data.number)

            room = Room(**data.model_dump())
            try:
                self.rooms.add(room)
            except IntegrityError:
                raise self._duplicate(data.hostel_name, data.number)
            self.ledger.on_room_created(room)

        self._logger.info(f"Room {room.hostel_name}/{room.number} created with capacity {room.capacity}")
        return room

    def update_room(self, room_id: str, data: RoomUpdate) -> Room:
        changes = data.model_dump(exclude_unset=True)

        with self.transaction():
            room = self.rooms.get_by_id(room_id, for_update=True)
            old_capacity = room.capacity
            old_hostel = room.hostel_name

            new_capacity = changes.get("capacity", old_capacity)
            if new_capacity < room.occupancy:
                raise ValidationError(
                    "Capacity cannot be lower than the current number of occupants",
                    field_errors={"capacity": [f"room has {room.occupancy} occupants"]},
                )

            new_gender = changes.get("gender", room.gender)
            for occupant in room.occupants:
                if occupant.gender != new_gender:
                    raise GenderMismatchError(
                        occupant.gender.value if occupant.gender else None,
                        new_gender.value,
                    )

            target_hostel = changes.get("hostel_name", old_hostel)
            target_number = changes.get("number", room.number)
            if (target_hostel, target_number) != (old_hostel, room.number):
                if self.rooms.find_by_number(target_hostel, target_number):
                    raise self._duplicate(target_hostel, target_number)

            for field, value in changes.items():
                setattr(room, field, value)
            self.db.flush()

            if room.hostel_name != old_hostel:
                self.ledger.on_room_moved(room, old_hostel, old_capacity)
            else:
                self.ledger.on_room_capacity_changed(room, old_capacity, new_capacity)

        self._logger.info(f"Room {room.id} updated: {sorted(changes)}")
        return room

    def delete_room(self, room_id: str) -> None:
        with self.transaction():
            room = self.rooms.get_by_id(room_id, for_update=True)
            for occupant in list(room.occupants):
                self.ledger.unassign_student(occupant)
            self.ledger.on_room_deleted(room)
            self.rooms.delete(room)

        self._logger.info(f"Room {room_id} deleted")

    def get_room(self, room_id: str) -> Room:
        return self.rooms.get_by_id(room_id)

    def list_rooms(self, hostel_name: Optional[str] = None) -> List[Room]:
        if hostel_name:
            return self.rooms.find_by_hostel(hostel_name)
        return self.rooms.find_all(order_by=Room.hostel_name)

    def list_available_rooms(self, hostel_name: Optional[str] = None, gender: Optional[Gender] = None) -> List[Room]:
        return self.rooms.find_available(hostel_name, gender)

    def allocate_room(self, student_id: str, room_id: str, actor: Optional[User] = None) -> Room:
        with self.transaction():
            student = self.users.get_by_id(student_id)
            if actor is not None:
                ensure_same_hostel(actor, student)
            if student.role != UserRole.STUDENT:
                raise ValidationError("Only students can be allocated rooms")
            room = self.rooms.get_by_id(room_id)
            self.ledger.assign_student_to_room(student, room)
        return room

    def vacate_room(self, student_id: str) -> Optional[str]:
        with self.transaction():
            student = self.users.get_by_id(student_id)
            previous = self.ledger.unassign_student(student)
        return previous

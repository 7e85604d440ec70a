"""
Hostel administration, warden floor assignment and student hostel moves.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from hostelkeeper.core.exceptions import ConflictError, ResourceNotFoundError, ValidationError
from hostelkeeper.models.enums import UserRole
from hostelkeeper.models.hostel import Hostel
from hostelkeeper.models.room import Room
from hostelkeeper.models.user import User
from hostelkeeper.repositories.hostel_repository import HostelRepository
from hostelkeeper.repositories.room_repository import RoomRepository
from hostelkeeper.repositories.user_repository import UserRepository
from hostelkeeper.schemas.hostel import HostelCreate, HostelUpdate
from hostelkeeper.services.base import BaseService
from hostelkeeper.services.room.capacity_ledger import CapacityLedger


class HostelService(BaseService):
    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.hostels = HostelRepository(db_session)
        self.rooms = RoomRepository(db_session)
        self.users = UserRepository(db_session)
        self.ledger = CapacityLedger(db_session)

    # -------------------------------------------------------------------------
    # Hostels
    # -------------------------------------------------------------------------

    def create_hostel(self, data: HostelCreate) -> Hostel:
        """
        Create a hostel.

        Rooms created earlier under the same name are counted immediately so
        the aggregates start consistent.
        """
        with self.transaction():
            if self.hostels.find_by_name(data.name):
                raise ConflictError(f"Hostel {data.name} already exists", details={"name": data.name})

            existing_rooms = self.rooms.find_by_hostel(data.name)
            hostel = Hostel(
                **data.model_dump(),
                total_rooms=len(existing_rooms),
                total_capacity=sum(room.capacity for room in existing_rooms),
            )
            self.hostels.add(hostel)

        self._logger.info(f"Hostel {hostel.name} created")
        return hostel

    def get_hostel(self, hostel_id: str) -> Hostel:
        return self.hostels.get_by_id(hostel_id)

    def list_hostels(self) -> List[Hostel]:
        return self.hostels.find_all(order_by=Hostel.name)

    def update_hostel(self, hostel_id: str, data: HostelUpdate) -> Hostel:
        changes = data.model_dump(exclude_unset=True)
        with self.transaction():
            hostel = self.hostels.get_by_id(hostel_id)
            for field, value in changes.items():
                setattr(hostel, field, value)
            self.db.flush()

        self._logger.info(f"Hostel {hostel.name} updated: {sorted(changes)}")
        return hostel

    def delete_hostel(self, hostel_id: str) -> None:
        """
        Delete a hostel that no longer has rooms.

        Rooms must be deleted or moved first so that no room is left naming
        a missing hostel. Wardens and students assigned to the hostel are
        detached from it.
        """
        with self.transaction():
            hostel = self.hostels.get_by_id(hostel_id, for_update=True)
            remaining = self.rooms.count(Room.hostel_name == hostel.name)
            if remaining:
                raise ConflictError(
                    f"Hostel {hostel.name} still has {remaining} room(s)",
                    details={"hostel": hostel.name, "rooms": remaining},
                )
            name = hostel.name
            detached = self.users.clear_hostel(name)
            self.hostels.delete(hostel)

        self._logger.info(f"Hostel {name} deleted, {detached} user(s) detached")

    def hostel_details(self, hostel_id: str) -> Dict[str, Any]:
        hostel = self.hostels.get_by_id(hostel_id)
        return {
            "hostel": hostel,
            "statistics": self.ledger.hostel_statistics(hostel),
            "rooms": self.rooms.find_by_hostel(hostel.name),
        }

    def recompute_aggregates(self) -> List[Dict[str, Any]]:
        with self.transaction():
            drift = self.ledger.recompute_hostel_aggregates()
        self._logger.info(f"Hostel aggregate sweep finished, {len(drift)} hostel(s) corrected")
        return drift

    # -------------------------------------------------------------------------
    # Assignments
    # -------------------------------------------------------------------------

    def assign_warden(self, warden_id: str, hostel_name: str, floor: int) -> User:
        with self.transaction():
            warden = self.users.get_by_id(warden_id)
            if warden.role != UserRole.WARDEN:
                raise ValidationError("User is not a warden", field_errors={"warden_id": ["must reference a warden"]})
            if self.hostels.find_by_name(hostel_name) is None:
                raise ResourceNotFoundError("Hostel", hostel_name)

            warden.assigned_hostel = hostel_name
            warden.assigned_floor = floor
            updated = self.rooms.assign_warden_to_floor(hostel_name, floor, warden.id)
            self.db.flush()

        self._logger.info(
            f"Warden {warden.id} assigned to {hostel_name} floor {floor} ({updated} rooms)"
        )
        return warden

    def update_student_hostel(
        self,
        student_id: str,
        hostel_name: Optional[str],
        room_id: Optional[str] = None,
    ) -> User:
        """Move a student to a hostel and optionally a room; no room unassigns."""
        with self.transaction():
            student = self.users.get_by_id(student_id)
            if student.role != UserRole.STUDENT:
                raise ValidationError("User is not a student", field_errors={"student_id": ["must reference a student"]})

            room: Optional[Room] = self.rooms.get_by_id(room_id) if room_id else None
            if room is not None and hostel_name and room.hostel_name != hostel_name:
                raise ValidationError(
                    "Room does not belong to the selected hostel",
                    field_errors={"room_id": [f"room is in {room.hostel_name}"]},
                )

            student.assigned_hostel = hostel_name or (room.hostel_name if room else None)
            if room is not None:
                self.ledger.assign_student_to_room(student, room)
            else:
                self.ledger.unassign_student(student)
            self.db.flush()

        self._logger.info(f"Student {student.id} moved to hostel {student.assigned_hostel}")
        return student

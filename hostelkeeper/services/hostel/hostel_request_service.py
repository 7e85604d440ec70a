"""
Student applications for a hostel room, processed by wardens.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from hostelkeeper.core.exceptions import ConflictError, InvalidStateTransitionError, ValidationError
from hostelkeeper.core.permissions import ensure_same_hostel
from hostelkeeper.models.enums import HostelRequestStatus
from hostelkeeper.models.hostel_request import HostelRequest
from hostelkeeper.models.user import User
from hostelkeeper.repositories.hostel_request_repository import HostelRequestRepository
from hostelkeeper.repositories.room_repository import RoomRepository
from hostelkeeper.schemas.hostel_request import HostelRequestCreate
from hostelkeeper.services.base import BaseService
from hostelkeeper.services.room.capacity_ledger import CapacityLedger

DECISIONS = (HostelRequestStatus.APPROVED, HostelRequestStatus.REJECTED)


class HostelRequestService(BaseService):
    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.requests = HostelRequestRepository(db_session)
        self.rooms = RoomRepository(db_session)
        self.ledger = CapacityLedger(db_session)

    def apply_hostel(self, student: User, data: HostelRequestCreate) -> HostelRequest:
        """One pending application per student."""
        with self.transaction():
            if self.requests.find_pending_for_student(student.id) is not None:
                raise ConflictError("You already have a pending hostel request")

            request = self.requests.add(HostelRequest(
                student_id=student.id,
                hostel_preference=data.hostel_preference,
                room_type=data.room_type,
                ac_preference=data.ac_preference,
                gender=data.gender or student.gender,
                year=data.year or student.year,
                status=HostelRequestStatus.PENDING,
            ))

        self._logger.info(f"Hostel request {request.id} submitted by {student.id}")
        return request

    def list_my_hostel_requests(self, student: User) -> List[HostelRequest]:
        return self.requests.find_by_student(student.id)

    def list_hostel_requests(self, status: Optional[HostelRequestStatus] = None) -> List[HostelRequest]:
        return self.requests.find_by_status(status)

    def process_hostel_request(
        self,
        request_id: str,
        warden: User,
        status: str,
        room_id: Optional[str] = None,
        remarks: Optional[str] = None,
    ) -> HostelRequest:
        """
        Decide a pending application; approving with a room places the
        student in it through the capacity ledger.
        """
        try:
            new_status = HostelRequestStatus(status)
        except ValueError:
            new_status = None
        if new_status not in DECISIONS:
            raise ValidationError(
                "Status must be approved or rejected",
                field_errors={"status": [f"invalid value {status!r}"]},
            )

        with self.transaction():
            request = self.requests.get_by_id(request_id, for_update=True)
            ensure_same_hostel(warden, request.student)
            if request.status != HostelRequestStatus.PENDING:
                raise InvalidStateTransitionError("Hostel request", request.status.value, new_status.value)

            request.status = new_status
            request.approved_by_id = warden.id
            if remarks is not None:
                request.remarks = remarks

            if new_status == HostelRequestStatus.APPROVED and room_id:
                room = self.rooms.get_by_id(room_id)
                self.ledger.assign_student_to_room(request.student, room)
                request.student.assigned_hostel = room.hostel_name
                request.assigned_room_id = room.id
            self.db.flush()

        self._logger.info(f"Hostel request {request.id} {new_status.value} by {warden.id}")
        return request

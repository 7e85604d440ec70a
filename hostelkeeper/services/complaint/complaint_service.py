"""
Complaints raised by students and their status updates.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from hostelkeeper.core.notifications import NotificationEvent, Notifier, build_status_payload
from hostelkeeper.core.permissions import ensure_same_hostel, hostel_scope
from hostelkeeper.models.complaint import Complaint
from hostelkeeper.models.enums import ComplaintStatus
from hostelkeeper.models.user import User
from hostelkeeper.repositories.complaint_repository import ComplaintRepository
from hostelkeeper.schemas.complaint import ComplaintCreate
from hostelkeeper.services.base import BaseService


class ComplaintService(BaseService):
    def __init__(self, db_session: Session, notifier: Optional[Notifier] = None):
        super().__init__(db_session, notifier)
        self.complaints = ComplaintRepository(db_session)

    def create_complaint(self, student: User, data: ComplaintCreate) -> Complaint:
        with self.transaction():
            complaint = self.complaints.add(Complaint(
                student_id=student.id,
                type=data.type,
                description=data.description,
                status=ComplaintStatus.PENDING,
            ))
        self._logger.info(f"Complaint {complaint.id} filed by {student.id}")
        return complaint

    def list_my_complaints(self, student: User) -> List[Complaint]:
        return self.complaints.find_by_student(student.id)

    def list_complaints(self, status: Optional[ComplaintStatus] = None, actor: Optional[User] = None) -> List[Complaint]:
        hostel = hostel_scope(actor) if actor is not None else None
        return self.complaints.find_by_status(status, hostel)

    def update_complaint_status(
        self,
        complaint_id: str,
        status: ComplaintStatus,
        actor: User,
        remarks: Optional[str] = None,
    ) -> Complaint:
        with self.transaction():
            complaint = self.complaints.get_by_id(complaint_id)
            ensure_same_hostel(actor, complaint.student)
            complaint.status = status
            if remarks is not None:
                complaint.remarks = remarks
            self.db.flush()

        self._logger.info(f"Complaint {complaint.id} set to {status.value} by {actor.id}")
        self.notifier.publish(
            NotificationEvent.COMPLAINT_UPDATED.value,
            build_status_payload(
                complaint.id,
                complaint.student_id,
                status.value,
                remarks=complaint.remarks,
                include_remarks=True,
            ),
        )
        return complaint

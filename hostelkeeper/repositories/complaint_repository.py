from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from hostelkeeper.core.permissions import visible_in_hostel
from hostelkeeper.models.complaint import Complaint
from hostelkeeper.models.enums import ComplaintStatus
from hostelkeeper.models.user import User
from hostelkeeper.repositories.base import BaseRepository


class ComplaintRepository(BaseRepository[Complaint]):
    def __init__(self, db: Session):
        super().__init__(Complaint, db)

    def find_by_student(self, student_id: str) -> List[Complaint]:
        return self.find_all(Complaint.student_id == student_id, order_by=Complaint.created_at.desc())

    def find_by_status(self, status: Optional[ComplaintStatus] = None, hostel: Optional[str] = None) -> List[Complaint]:
        stmt = select(Complaint)
        if hostel is not None:
            stmt = stmt.join(User, User.id == Complaint.student_id).where(visible_in_hostel(hostel))
        if status is not None:
            stmt = stmt.where(Complaint.status == status)
        return list(self.db.scalars(stmt.order_by(Complaint.created_at.desc())).all())

    def find_by_types(self, types: Iterable[str], limit: int = 50) -> List[Complaint]:
        return self.find_all(Complaint.type.in_(list(types)), order_by=Complaint.created_at.desc(), limit=limit)

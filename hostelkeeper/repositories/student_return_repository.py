"""
Student return report repository.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from hostelkeeper.core.permissions import visible_in_hostel
from hostelkeeper.models.student_return import StudentReturn
from hostelkeeper.models.user import User
from hostelkeeper.repositories.base import BaseRepository


class StudentReturnRepository(BaseRepository[StudentReturn]):
    def __init__(self, db: Session):
        super().__init__(StudentReturn, db)

    def find_for_leave(self, student_id: str, leave_request_id: Optional[str]) -> Optional[StudentReturn]:
        if leave_request_id is None:
            return self.find_one(
                StudentReturn.student_id == student_id,
                StudentReturn.leave_request_id.is_(None),
            )
        return self.find_one(
            StudentReturn.student_id == student_id,
            StudentReturn.leave_request_id == leave_request_id,
        )

    def find_by_student(self, student_id: str) -> List[StudentReturn]:
        return self.find_all(StudentReturn.student_id == student_id, order_by=StudentReturn.reported_date.desc())

    def find_recent(self, hostel: Optional[str] = None) -> List[StudentReturn]:
        if hostel is None:
            return self.find_all(order_by=StudentReturn.reported_date.desc())
        stmt = (
            select(StudentReturn)
            .join(User, User.id == StudentReturn.student_id)
            .where(visible_in_hostel(hostel))
            .order_by(StudentReturn.reported_date.desc())
        )
        return list(self.db.scalars(stmt).all())

"""
Leave request repository.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from hostelkeeper.core.permissions import visible_in_hostel
from hostelkeeper.models.enums import LeaveStatus, UserRole
from hostelkeeper.models.leave_request import LeaveRequest
from hostelkeeper.models.user import User
from hostelkeeper.repositories.base import BaseRepository


class LeaveRequestRepository(BaseRepository[LeaveRequest]):
    def __init__(self, db: Session):
        super().__init__(LeaveRequest, db)

    def find_by_student(self, student_id: str) -> List[LeaveRequest]:
        return self.find_all(LeaveRequest.student_id == student_id, order_by=LeaveRequest.created_at.desc())

    def find_for_role(
        self,
        role: Optional[UserRole] = None,
        status: Optional[LeaveStatus] = None,
        hostel: Optional[str] = None,
    ) -> List[LeaveRequest]:
        stmt = (
            select(LeaveRequest)
            .join(User, User.id == LeaveRequest.student_id)
            .options(joinedload(LeaveRequest.student))
        )
        if role is not None:
            stmt = stmt.where(User.role == role)
        if hostel is not None:
            stmt = stmt.where(visible_in_hostel(hostel))
        if status is not None:
            stmt = stmt.where(LeaveRequest.status == status)
        return list(self.db.scalars(stmt.order_by(LeaveRequest.created_at.desc())).unique().all())

    def find_active_on(self, day: date) -> List[LeaveRequest]:
        """Approved, unreturned, auto-attendance leaves covering ``day``."""
        return self.find_all(
            LeaveRequest.status == LeaveStatus.APPROVED,
            LeaveRequest.has_returned.is_(False),
            LeaveRequest.auto_attendance_enabled.is_(True),
            LeaveRequest.from_date <= day,
            LeaveRequest.to_date >= day,
            order_by=LeaveRequest.from_date,
        )

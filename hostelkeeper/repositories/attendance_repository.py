"""
Attendance repository.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from hostelkeeper.models.attendance import Attendance
from hostelkeeper.models.enums import UserRole
from hostelkeeper.models.user import User
from hostelkeeper.repositories.base import BaseRepository


class AttendanceRepository(BaseRepository[Attendance]):
    def __init__(self, db: Session):
        super().__init__(Attendance, db)

    def find_for_day(self, user_id: str, day: date) -> Optional[Attendance]:
        return self.find_one(Attendance.user_id == user_id, Attendance.date == day)

    def exists_for_day(self, user_id: str, day: date) -> bool:
        return self.find_for_day(user_id, day) is not None

    def search(
        self,
        user_id: Optional[str] = None,
        day: Optional[date] = None,
        role: Optional[UserRole] = None,
    ) -> List[Attendance]:
        stmt = select(Attendance)
        if role is not None:
            stmt = stmt.join(User, User.id == Attendance.user_id).where(User.role == role)
        if user_id:
            stmt = stmt.where(Attendance.user_id == user_id)
        if day:
            stmt = stmt.where(Attendance.date == day)
        return list(self.db.scalars(stmt.order_by(Attendance.date.desc())).all())

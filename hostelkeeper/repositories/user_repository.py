"""
User repository.
"""

from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from hostelkeeper.models.user import User
from hostelkeeper.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, db: Session):
        super().__init__(User, db)

    def find_active(self, user_id: str) -> Optional[User]:
        return self.find_one(User.id == user_id, User.is_active.is_(True))

    def count_occupants(self, room_id: str) -> int:
        return self.db.scalar(select(func.count(User.id)).where(User.room_id == room_id)) or 0

    def clear_hostel(self, hostel_name: str) -> int:
        """Detach every user from ``hostel_name``; returns how many were updated."""
        result = self.db.execute(
            update(User)
            .where(User.assigned_hostel == hostel_name)
            .values(assigned_hostel=None, assigned_floor=None)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0

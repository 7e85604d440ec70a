from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from hostelkeeper.core.permissions import visible_in_hostel
from hostelkeeper.models.enums import HealthIssueStatus
from hostelkeeper.models.health_issue import HealthIssue
from hostelkeeper.models.user import User
from hostelkeeper.repositories.base import BaseRepository


class HealthIssueRepository(BaseRepository[HealthIssue]):
    def __init__(self, db: Session):
        super().__init__(HealthIssue, db)

    def find_by_student(self, student_id: str) -> List[HealthIssue]:
        return self.find_all(HealthIssue.student_id == student_id, order_by=HealthIssue.date_reported.desc())

    def find_by_status(
        self,
        status: Optional[HealthIssueStatus] = None,
        hostel: Optional[str] = None,
    ) -> List[HealthIssue]:
        stmt = select(HealthIssue)
        if hostel is not None:
            stmt = stmt.join(User, User.id == HealthIssue.student_id).where(visible_in_hostel(hostel))
        if status is not None:
            stmt = stmt.where(HealthIssue.status == status)
        return list(self.db.scalars(stmt.order_by(HealthIssue.date_reported.desc())).all())

"""
Health issues reported by students and followed up by wardens.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from hostelkeeper.core.permissions import ensure_same_hostel, hostel_scope
from hostelkeeper.models.enums import HealthIssueStatus
from hostelkeeper.models.health_issue import HealthIssue
from hostelkeeper.models.user import User
from hostelkeeper.repositories.health_issue_repository import HealthIssueRepository
from hostelkeeper.schemas.health_issue import HealthIssueCreate, HealthIssueUpdate
from hostelkeeper.services.base import BaseService
from hostelkeeper.utils.datetime_utils import utcnow


class HealthIssueService(BaseService):
    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.issues = HealthIssueRepository(db_session)

    def report_health_issue(self, student: User, data: HealthIssueCreate) -> HealthIssue:
        with self.transaction():
            issue = self.issues.add(HealthIssue(
                student_id=student.id,
                issue_type=data.issue_type,
                description=data.description,
                severity=data.severity,
                symptoms=list(data.symptoms),
                date_reported=utcnow(),
                status=HealthIssueStatus.REPORTED,
            ))
        self._logger.info(
            f"Health issue {issue.id} ({issue.issue_type.value}, {issue.severity.value}) reported by {student.id}"
        )
        return issue

    def list_my_health_issues(self, student: User) -> List[HealthIssue]:
        return self.issues.find_by_student(student.id)

    def list_health_issues(
        self,
        status: Optional[HealthIssueStatus] = None,
        actor: Optional[User] = None,
    ) -> List[HealthIssue]:
        hostel = hostel_scope(actor) if actor is not None else None
        return self.issues.find_by_status(status, hostel)

    def update_health_issue(self, issue_id: str, actor: User, data: HealthIssueUpdate) -> HealthIssue:
        """Apply a handling update and record ``actor`` as the handler."""
        changes = {field: value for field, value in data.model_dump(exclude_unset=True).items() if value is not None}

        with self.transaction():
            issue = self.issues.get_by_id(issue_id)
            ensure_same_hostel(actor, issue.student)
            for field, value in changes.items():
                setattr(issue, field, value)
            issue.handled_by_id = actor.id
            self.db.flush()

        self._logger.info(f"Health issue {issue.id} updated by {actor.id}: {sorted(changes)}")
        return issue

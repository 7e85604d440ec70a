"""
Leave request lifecycle.

    pending -> approved -> (active) -> returned
    pending -> rejected

"Active" is derived, never stored: approved, covering today and not yet
returned. A request is decided exactly once.
"""

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from hostelkeeper.core.exceptions import (
    InvalidDateRangeError,
    InvalidStateTransitionError,
    NotApprovedError,
    ValidationError,
)
from hostelkeeper.core.notifications import NotificationEvent, Notifier, build_status_payload
from hostelkeeper.core.permissions import ensure_can_decide_leave, ensure_same_hostel, hostel_scope
from hostelkeeper.models.enums import LeaveStatus, UserRole
from hostelkeeper.models.leave_request import LeaveRequest
from hostelkeeper.models.user import User
from hostelkeeper.repositories.leave_repository import LeaveRequestRepository
from hostelkeeper.services.base import BaseService
from hostelkeeper.utils.datetime_utils import utcnow

DECISIONS = (LeaveStatus.APPROVED, LeaveStatus.REJECTED)


def is_active(leave: LeaveRequest, today: date) -> bool:
    """Whether the leave keeps its student away on ``today``."""
    return leave.is_active(today)


class LeaveService(BaseService):
    def __init__(self, db_session: Session, notifier: Optional[Notifier] = None):
        super().__init__(db_session, notifier)
        self.leaves = LeaveRequestRepository(db_session)

    def submit_leave(self, student: User, from_date: date, to_date: date, reason: str) -> LeaveRequest:
        """Create a pending request. Overlapping requests are not checked."""
        if to_date < from_date:
            raise InvalidDateRangeError(from_date, to_date)
        if not reason or not reason.strip():
            raise ValidationError("Reason is required", field_errors={"reason": ["must not be empty"]})

        with self.transaction():
            leave = self.leaves.add(LeaveRequest(
                student_id=student.id,
                from_date=from_date,
                to_date=to_date,
                reason=reason.strip(),
                status=LeaveStatus.PENDING,
            ))

        self._logger.info(
            f"Leave {leave.id} submitted by {student.id} for {from_date} to {to_date}",
            extra={"leave_id": leave.id, "student_id": student.id},
        )
        return leave

    def decide_leave(self, leave_id: str, approver: User, decision: str) -> LeaveRequest:
        """
        Approve or reject a pending request and notify listeners.

        Raises:
            ValidationError: decision is not approved/rejected
            InvalidStateTransitionError: the request was already decided
            AuthorizationError: approver may not decide this applicant's leave
        """
        try:
            new_status = LeaveStatus(decision)
        except ValueError:
            new_status = None
        if new_status not in DECISIONS:
            raise ValidationError(
                "Decision must be approved or rejected",
                field_errors={"status": [f"invalid value {decision!r}"]},
            )

        with self.transaction():
            leave = self.leaves.get_by_id(leave_id, for_update=True)
            ensure_can_decide_leave(approver, leave.student)
            if leave.status != LeaveStatus.PENDING:
                raise InvalidStateTransitionError("Leave request", leave.status.value, new_status.value)

            leave.status = new_status
            leave.approver_id = approver.id
            leave.decided_at = utcnow()
            self.db.flush()

        self._logger.info(
            f"Leave {leave.id} {new_status.value} by {approver.role.value} {approver.id}",
            extra={"leave_id": leave.id, "student_id": leave.student_id, "status": new_status.value},
        )
        self.notifier.publish(
            NotificationEvent.LEAVE_UPDATED.value,
            build_status_payload(leave.id, leave.student_id, new_status.value),
        )
        return leave

    def mark_returned_directly(
        self,
        leave_id: str,
        return_date: Optional[datetime] = None,
        actor: Optional[User] = None,
    ) -> LeaveRequest:
        """
        Close an approved leave without a return report.

        Raises:
            NotApprovedError: the leave is pending or rejected
        """
        with self.transaction():
            leave = self.leaves.get_by_id(leave_id, for_update=True)
            if actor is not None:
                ensure_same_hostel(actor, leave.student)
            if leave.status != LeaveStatus.APPROVED:
                raise NotApprovedError(leave.id, leave.status.value)

            leave.has_returned = True
            leave.returned_date = return_date or utcnow()
            self.db.flush()

        self._logger.info(f"Leave {leave.id} marked returned at {leave.returned_date}")
        return leave

    def list_my_leaves(self, user: User) -> List[LeaveRequest]:
        return self.leaves.find_by_student(user.id)

    def list_leaves(
        self,
        role: Optional[UserRole] = None,
        status: Optional[LeaveStatus] = None,
        actor: Optional[User] = None,
    ) -> List[LeaveRequest]:
        """Leaves of applicants with ``role``; a warden only sees their own hostel."""
        hostel = hostel_scope(actor) if actor is not None else None
        return self.leaves.find_for_role(role, status, hostel)

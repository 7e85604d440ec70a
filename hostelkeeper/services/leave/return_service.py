"""
Return-to-hostel reports and warden-granted hostel access.

Granting access to a report linked to a leave closes that leave, which is
what stops the auto-attendance job from marking the student on leave.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from hostelkeeper.core.exceptions import (
    AuthorizationError,
    DuplicateReportError,
    InvalidStateTransitionError,
    NotApprovedError,
    ValidationError,
)
from hostelkeeper.core.permissions import ensure_same_hostel, hostel_scope
from hostelkeeper.models.enums import AccessPermission, LeaveStatus
from hostelkeeper.models.student_return import StudentReturn
from hostelkeeper.models.user import User
from hostelkeeper.repositories.leave_repository import LeaveRequestRepository
from hostelkeeper.repositories.student_return_repository import StudentReturnRepository
from hostelkeeper.schemas.base import GeoLocation
from hostelkeeper.services.base import BaseService
from hostelkeeper.utils.datetime_utils import utcnow

ACCESS_DECISIONS = (AccessPermission.APPROVED, AccessPermission.DENIED)


class ReturnService(BaseService):
    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.returns = StudentReturnRepository(db_session)
        self.leaves = LeaveRequestRepository(db_session)

    def report_return(
        self,
        student: User,
        leave_request_id: Optional[str],
        expected_return_date: date,
        location: Optional[GeoLocation] = None,
        remarks: Optional[str] = None,
    ) -> StudentReturn:
        """
        File a pending return report.

        Raises:
            ResourceNotFoundError: the leave does not exist
            AuthorizationError: the leave belongs to someone else
            NotApprovedError: the leave is not approved
            DuplicateReportError: a report already exists for this leave
        """
        with self.transaction():
            if leave_request_id is not None:
                leave = self.leaves.get_by_id(leave_request_id)
                if leave.student_id != student.id:
                    raise AuthorizationError("Leave request belongs to another student")
                if leave.status != LeaveStatus.APPROVED:
                    raise NotApprovedError(leave.id, leave.status.value)

            if self.returns.find_for_leave(student.id, leave_request_id) is not None:
                raise DuplicateReportError(student.id, leave_request_id)

            report = StudentReturn(
                student_id=student.id,
                leave_request_id=leave_request_id,
                reported_date=utcnow(),
                expected_return_date=expected_return_date,
                hostel_access_permission=AccessPermission.PENDING,
                remarks=remarks,
            )
            if location is not None:
                report.location_latitude = location.latitude
                report.location_longitude = location.longitude
                report.location_accuracy = location.accuracy
                report.location_timestamp = location.timestamp or utcnow()

            if not self.returns.try_insert(report):
                raise DuplicateReportError(student.id, leave_request_id)

        self._logger.info(
            f"Return reported by {student.id} for leave {leave_request_id}",
            extra={"student_id": student.id, "leave_request_id": leave_request_id, "return_id": report.id},
        )
        return report

    def grant_access(
        self,
        report_id: str,
        warden: User,
        decision: str,
        remarks: Optional[str] = None,
    ) -> StudentReturn:
        """
        Approve or deny hostel access on a pending report.

        Approval records the actual return time and closes the linked leave.
        """
        try:
            permission = AccessPermission(decision)
        except ValueError:
            permission = None
        if permission not in ACCESS_DECISIONS:
            raise ValidationError(
                "Permission must be approved or denied",
                field_errors={"permission": [f"invalid value {decision!r}"]},
            )

        with self.transaction():
            report = self.returns.get_by_id(report_id, for_update=True)
            ensure_same_hostel(warden, report.student)
            if report.hostel_access_permission != AccessPermission.PENDING:
                raise InvalidStateTransitionError(
                    "Return report",
                    report.hostel_access_permission.value,
                    permission.value,
                )

            now = utcnow()
            report.hostel_access_permission = permission
            report.permission_granted_by_id = warden.id
            report.permission_granted_at = now
            if remarks is not None:
                report.remarks = remarks

            if permission == AccessPermission.APPROVED:
                report.actual_return_date = now
                leave = report.leave_request
                if leave is not None:
                    if leave.status == LeaveStatus.APPROVED:
                        leave.has_returned = True
                        leave.returned_date = now
                    else:
                        self._logger.warning(
                            f"Return {report.id} approved but leave {leave.id} is {leave.status.value}; leave left open"
                        )
            self.db.flush()

        self._logger.info(
            f"Hostel access {permission.value} for return {report.id} by {warden.id}",
            extra={"return_id": report.id, "student_id": report.student_id, "permission": permission.value},
        )
        return report

    def list_my_returns(self, student: User) -> List[StudentReturn]:
        return self.returns.find_by_student(student.id)

    def list_returns(self, actor: Optional[User] = None) -> List[StudentReturn]:
        hostel = hostel_scope(actor) if actor is not None else None
        return self.returns.find_recent(hostel)

"""
Auto-attendance reconciler.

For every student on an active leave, make sure a ``leave`` attendance
record exists for the day. Existing records for the day are never touched,
so running the job again on the same day changes nothing.
"""

from datetime import date
from typing import Any, Callable, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostelkeeper.core.logging import log_execution_time
from hostelkeeper.models.attendance import Attendance
from hostelkeeper.models.enums import AttendanceStatus
from hostelkeeper.models.leave_request import LeaveRequest
from hostelkeeper.repositories.attendance_repository import AttendanceRepository
from hostelkeeper.repositories.leave_repository import LeaveRequestRepository
from hostelkeeper.repositories.user_repository import UserRepository
from hostelkeeper.services.base import BaseService, ServiceResult
from hostelkeeper.utils.datetime_utils import today as current_day

AUTO_REMARKS = "Auto-marked: On approved leave ({reason})"

CREATED = "created"
SKIPPED = "skipped"


class AutoAttendanceService(BaseService):
    def __init__(self, db_session: Session, clock: Callable[[], date] = current_day):
        super().__init__(db_session)
        self.leaves = LeaveRequestRepository(db_session)
        self.records = AttendanceRepository(db_session)
        self.users = UserRepository(db_session)
        self.clock = clock

    @log_execution_time("hostelkeeper.services.AutoAttendanceService")
    def run(self, day: Optional[date] = None) -> ServiceResult[Dict[str, Any]]:
        """
        Reconcile one day.

        Returns a result whose data is ``{"date", "considered", "created",
        "skipped", "failed"}``. ``considered`` counts active leaves, not
        records written. Only a failure of the leave query itself or of the
        final commit makes the result unsuccessful.
        """
        day = day or self.clock()
        summary: Dict[str, Any] = {"date": day, "considered": 0, CREATED: 0, SKIPPED: 0, "failed": 0}

        try:
            leaves = self.leaves.find_active_on(day)
        except SQLAlchemyError as e:
            self._rollback()
            return self._handle_exception(e, "load active leaves", entity_ref=day, data=summary)

        summary["considered"] = len(leaves)
        self._logger.info(f"Auto-attendance for {day}: {len(leaves)} active leave(s)")

        for leave in leaves:
            try:
                with self.db.begin_nested():
                    outcome = self._reconcile(leave, day)
            except Exception as e:
                summary["failed"] += 1
                self._logger.error(
                    f"Auto-attendance failed for leave {leave.id}: {e}",
                    exc_info=True,
                    extra={"leave_id": leave.id, "student_id": leave.student_id, "date": day.isoformat()},
                )
                continue
            summary[outcome] += 1

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self._rollback()
            return self._handle_exception(e, "commit auto-attendance", entity_ref=day, data=summary)

        self._logger.info(
            f"Auto-attendance for {day} finished: created={summary[CREATED]} "
            f"skipped={summary[SKIPPED]} failed={summary['failed']}"
        )
        return ServiceResult.success(
            summary,
            message=f"Auto-attendance processed {summary['considered']} leave(s)",
        )

    def _reconcile(self, leave: LeaveRequest, day: date) -> str:
        student = self.users.find_by_id(leave.student_id)
        if student is None:
            self._logger.warning(f"Leave {leave.id} references missing student {leave.student_id}")
            return SKIPPED

        if self.records.exists_for_day(student.id, day):
            self._logger.debug(f"Attendance for {student.id} on {day} already exists")
            return SKIPPED

        record = Attendance(
            user_id=student.id,
            date=day,
            status=AttendanceStatus.LEAVE,
            marked_by_id=leave.approver_id or student.id,
            remarks=AUTO_REMARKS.format(reason=leave.reason),
        )
        if not self.records.try_insert(record):
            return SKIPPED

        self._logger.debug(f"Marked {student.id} on leave for {day}")
        return CREATED

from datetime import date

import pytest

from hostelkeeper import worker
from hostelkeeper.models.attendance import Attendance
from hostelkeeper.models.enums import AttendanceStatus, LeaveStatus
from hostelkeeper.services.attendance.attendance_service import AttendanceService
from hostelkeeper.services.background.auto_attendance_service import AutoAttendanceService
from hostelkeeper.services.leave.return_service import ReturnService


def records_for(db, user, day):
    return db.query(Attendance).filter_by(user_id=user.id, date=day).all()


def test_active_leave_gets_one_leave_record(db, student, warden, make_leave):
    make_leave(student, approver=warden, reason="Family function")

    result = AutoAttendanceService(db).run(date(2024, 1, 12))

    assert result.is_success
    assert result.data == {"date": date(2024, 1, 12), "considered": 1, "created": 1, "skipped": 0, "failed": 0}
    [record] = records_for(db, student, date(2024, 1, 12))
    assert record.status == AttendanceStatus.LEAVE
    assert record.marked_by_id == warden.id
    assert record.remarks == "Auto-marked: On approved leave (Family function)"


def test_second_run_same_day_changes_nothing(db, student, make_leave):
    make_leave(student)
    service = AutoAttendanceService(db)
    service.run(date(2024, 1, 12))

    result = service.run(date(2024, 1, 12))

    assert result.data["created"] == 0
    assert result.data["skipped"] == 1
    assert len(records_for(db, student, date(2024, 1, 12))) == 1


def test_existing_record_is_not_overwritten(db, student, admin, make_leave):
    make_leave(student)
    AttendanceService(db).mark_attendance_for(student.id, date(2024, 1, 12), AttendanceStatus.PRESENT, admin)

    result = AutoAttendanceService(db).run(date(2024, 1, 12))

    assert result.data["skipped"] == 1
    [record] = records_for(db, student, date(2024, 1, 12))
    assert record.status == AttendanceStatus.PRESENT


def test_without_approver_student_is_recorded_as_marker(db, student, make_leave):
    make_leave(student)
    AutoAttendanceService(db).run(date(2024, 1, 12))

    [record] = records_for(db, student, date(2024, 1, 12))
    assert record.marked_by_id == student.id


@pytest.mark.parametrize("kwargs", [
    {"status": LeaveStatus.PENDING},
    {"status": LeaveStatus.REJECTED},
    {"has_returned": True},
    {"auto_attendance_enabled": False},
    {"from_date": date(2024, 1, 13), "to_date": date(2024, 1, 20)},
])
def test_inactive_leaves_are_ignored(db, student, make_leave, kwargs):
    make_leave(student, **kwargs)

    result = AutoAttendanceService(db).run(date(2024, 1, 12))

    assert result.data["considered"] == 0
    assert records_for(db, student, date(2024, 1, 12)) == []


def test_granted_return_stops_auto_marking(db, student, warden, make_leave):
    leave = make_leave(student, approver=warden)
    service = AutoAttendanceService(db)
    service.run(date(2024, 1, 12))

    returns = ReturnService(db)
    report = returns.report_return(student, leave.id, date(2024, 1, 13))
    returns.grant_access(report.id, warden, "approved")

    result = service.run(date(2024, 1, 13))

    assert result.data["considered"] == 0
    assert records_for(db, student, date(2024, 1, 13)) == []


def test_one_failing_leave_does_not_abort_the_batch(db, make_user, make_leave, monkeypatch):
    first = make_user()
    second = make_user()
    make_leave(first)
    make_leave(second)
    service = AutoAttendanceService(db)

    original = service._reconcile

    def flaky(leave, day):
        if leave.student_id == first.id:
            raise RuntimeError("lookup failed")
        return original(leave, day)

    monkeypatch.setattr(service, "_reconcile", flaky)

    result = service.run(date(2024, 1, 12))

    assert result.is_success
    assert result.data["failed"] == 1
    assert result.data["created"] == 1
    assert records_for(db, first, date(2024, 1, 12)) == []
    assert len(records_for(db, second, date(2024, 1, 12))) == 1


def test_defaults_to_clock_day(db, student, make_leave):
    make_leave(student)
    result = AutoAttendanceService(db, clock=lambda: date(2024, 1, 14)).run()

    assert result.data["date"] == date(2024, 1, 14)
    assert len(records_for(db, student, date(2024, 1, 14))) == 1


def test_worker_entry_point_reports_iso_date(db, student, make_leave, monkeypatch):
    make_leave(student)
    student_id = student.id

    class SharedSession:
        def __enter__(self):
            return db

        def __exit__(self, *exc):
            return False

    monkeypatch.setattr(worker, "get_db_context", SharedSession)

    summary = worker.run_auto_attendance_once("2024-01-12")

    assert summary == {
        "success": True,
        "date": "2024-01-12",
        "considered": 1,
        "created": 1,
        "skipped": 0,
        "failed": 0,
    }
    assert db.query(Attendance).filter_by(user_id=student_id).count() == 1

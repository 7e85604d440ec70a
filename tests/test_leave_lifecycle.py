from datetime import date, datetime

import pytest

from hostelkeeper.core.exceptions import (
    AuthorizationError,
    InvalidDateRangeError,
    InvalidStateTransitionError,
    NotApprovedError,
    ValidationError,
)
from hostelkeeper.models.enums import LeaveStatus, UserRole
from hostelkeeper.services.leave.leave_service import LeaveService, is_active


def test_submit_creates_pending_leave(db, student):
    leave = LeaveService(db).submit_leave(student, date(2024, 1, 10), date(2024, 1, 15), "  Family function ")

    assert leave.status == LeaveStatus.PENDING
    assert leave.reason == "Family function"
    assert leave.has_returned is False
    assert leave.auto_attendance_enabled is True


def test_submit_rejects_inverted_range(db, student):
    with pytest.raises(InvalidDateRangeError):
        LeaveService(db).submit_leave(student, date(2024, 1, 15), date(2024, 1, 10), "Trip")


def test_single_day_leave_is_allowed(db, student):
    leave = LeaveService(db).submit_leave(student, date(2024, 1, 10), date(2024, 1, 10), "Exam")
    assert leave.from_date == leave.to_date


def test_warden_approves_and_notifies(db, notifier, student, warden, make_leave):
    leave = make_leave(student, status=LeaveStatus.PENDING)

    decided = LeaveService(db, notifier).decide_leave(leave.id, warden, "approved")

    assert decided.status == LeaveStatus.APPROVED
    assert decided.approver_id == warden.id
    assert decided.decided_at is not None
    assert len(notifier.events) == 1
    event, payload = notifier.events[0]
    assert event == "leave-updated"
    assert payload["id"] == leave.id
    assert payload["student_id"] == student.id
    assert payload["status"] == "approved"
    assert "remarks" not in payload


def test_leave_is_decided_only_once(db, notifier, student, warden, make_leave):
    leave = make_leave(student, status=LeaveStatus.PENDING)
    service = LeaveService(db, notifier)
    service.decide_leave(leave.id, warden, "rejected")

    with pytest.raises(InvalidStateTransitionError):
        service.decide_leave(leave.id, warden, "approved")

    db.refresh(leave)
    assert leave.status == LeaveStatus.REJECTED
    assert len(notifier.events) == 1


def test_invalid_decision_is_rejected(db, student, warden, make_leave):
    leave = make_leave(student, status=LeaveStatus.PENDING)

    with pytest.raises(ValidationError):
        LeaveService(db).decide_leave(leave.id, warden, "returned")


def test_warden_leave_needs_admin(db, make_user, warden, admin, make_leave):
    other_warden = make_user(role=UserRole.WARDEN, assigned_hostel="Boys Hostel A")
    leave = make_leave(other_warden, status=LeaveStatus.PENDING)
    service = LeaveService(db)

    with pytest.raises(AuthorizationError):
        service.decide_leave(leave.id, warden, "approved")

    assert service.decide_leave(leave.id, admin, "approved").status == LeaveStatus.APPROVED


def test_warden_cannot_decide_other_hostel(db, make_user, warden, make_leave):
    outsider = make_user(assigned_hostel="Girls Hostel")
    leave = make_leave(outsider, status=LeaveStatus.PENDING)

    with pytest.raises(AuthorizationError):
        LeaveService(db).decide_leave(leave.id, warden, "approved")


def test_mark_returned_directly(db, student, warden, make_leave):
    leave = make_leave(student, approver=warden)
    returned_at = datetime(2024, 1, 13, 18, 30)

    updated = LeaveService(db).mark_returned_directly(leave.id, returned_at, actor=warden)

    assert updated.has_returned is True
    assert updated.returned_date.replace(tzinfo=None) == returned_at


@pytest.mark.parametrize("status", [LeaveStatus.PENDING, LeaveStatus.REJECTED])
def test_only_approved_leave_can_be_marked_returned(db, student, make_leave, status):
    leave = make_leave(student, status=status)

    with pytest.raises(NotApprovedError):
        LeaveService(db).mark_returned_directly(leave.id)

    db.refresh(leave)
    assert leave.has_returned is False


def test_active_leave_window(student, make_leave):
    leave = make_leave(student)

    assert is_active(leave, date(2024, 1, 10))
    assert is_active(leave, date(2024, 1, 15))
    assert not is_active(leave, date(2024, 1, 16))
    assert not is_active(leave, date(2024, 1, 9))


def test_returned_or_pending_leave_is_not_active(student, make_leave):
    assert not is_active(make_leave(student, has_returned=True), date(2024, 1, 12))
    assert not is_active(make_leave(student, status=LeaveStatus.PENDING), date(2024, 1, 12))


def test_list_leaves_by_role(db, student, warden, make_leave):
    make_leave(student, status=LeaveStatus.PENDING)
    make_leave(warden, status=LeaveStatus.PENDING)
    service = LeaveService(db)

    assert [l.student_id for l in service.list_leaves(role=UserRole.STUDENT)] == [student.id]
    assert [l.student_id for l in service.list_leaves(role=UserRole.WARDEN)] == [warden.id]
    assert len(service.list_my_leaves(student)) == 1


def test_warden_sees_leaves_of_own_hostel_only(db, student, warden, make_user, make_leave, admin):
    other = make_user(assigned_hostel="Boys Hostel B")
    unassigned = make_user()
    own_leave = make_leave(student, status=LeaveStatus.PENDING)
    make_leave(other, status=LeaveStatus.PENDING)
    unassigned_leave = make_leave(unassigned, status=LeaveStatus.PENDING)
    service = LeaveService(db)

    listed = service.list_leaves(role=UserRole.STUDENT, actor=warden)

    assert {l.id for l in listed} == {own_leave.id, unassigned_leave.id}
    assert len(service.list_leaves(role=UserRole.STUDENT, actor=admin)) == 3

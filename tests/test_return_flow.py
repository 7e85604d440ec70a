from datetime import date

import pytest

from hostelkeeper.core.exceptions import (
    AuthorizationError,
    DuplicateReportError,
    InvalidStateTransitionError,
    NotApprovedError,
    ResourceNotFoundError,
)
from hostelkeeper.models.enums import AccessPermission, LeaveStatus, UserRole
from hostelkeeper.schemas.base import GeoLocation
from hostelkeeper.services.leave.return_service import ReturnService


def test_report_return_for_approved_leave(db, student, warden, make_leave):
    leave = make_leave(student, approver=warden)

    report = ReturnService(db).report_return(
        student,
        leave.id,
        date(2024, 1, 13),
        location=GeoLocation(latitude=16.45, longitude=80.55, accuracy=12.0),
        remarks="Reached campus",
    )

    assert report.hostel_access_permission == AccessPermission.PENDING
    assert report.leave_request_id == leave.id
    assert report.location_latitude == 16.45
    assert report.location_timestamp is not None


def test_second_report_for_same_leave_is_a_duplicate(db, student, make_leave):
    leave = make_leave(student)
    service = ReturnService(db)
    service.report_return(student, leave.id, date(2024, 1, 13))

    with pytest.raises(DuplicateReportError) as exc:
        service.report_return(student, leave.id, date(2024, 1, 14))

    assert exc.value.status_code == 409
    assert len(service.list_my_returns(student)) == 1


def test_report_requires_existing_own_approved_leave(db, student, make_user, make_leave):
    service = ReturnService(db)

    with pytest.raises(ResourceNotFoundError):
        service.report_return(student, "missing", date(2024, 1, 13))

    someone_else = make_leave(make_user())
    with pytest.raises(AuthorizationError):
        service.report_return(student, someone_else.id, date(2024, 1, 13))

    pending = make_leave(student, status=LeaveStatus.PENDING)
    with pytest.raises(NotApprovedError):
        service.report_return(student, pending.id, date(2024, 1, 13))


def test_granting_access_closes_the_leave(db, student, warden, make_leave):
    leave = make_leave(student, approver=warden)
    service = ReturnService(db)
    report = service.report_return(student, leave.id, date(2024, 1, 13))

    granted = service.grant_access(report.id, warden, "approved", remarks="Welcome back")
    db.refresh(leave)

    assert granted.hostel_access_permission == AccessPermission.APPROVED
    assert granted.permission_granted_by_id == warden.id
    assert granted.actual_return_date is not None
    assert granted.remarks == "Welcome back"
    assert leave.has_returned is True
    assert leave.returned_date is not None


def test_denied_access_keeps_leave_open(db, student, warden, make_leave):
    leave = make_leave(student, approver=warden)
    service = ReturnService(db)
    report = service.report_return(student, leave.id, date(2024, 1, 13))

    denied = service.grant_access(report.id, warden, "denied")
    db.refresh(leave)

    assert denied.hostel_access_permission == AccessPermission.DENIED
    assert denied.actual_return_date is None
    assert leave.has_returned is False


def test_access_is_decided_once(db, student, warden, make_leave):
    leave = make_leave(student, approver=warden)
    service = ReturnService(db)
    report = service.report_return(student, leave.id, date(2024, 1, 13))
    service.grant_access(report.id, warden, "denied")

    with pytest.raises(InvalidStateTransitionError):
        service.grant_access(report.id, warden, "approved")


def test_warden_of_other_hostel_cannot_grant(db, student, make_user, make_leave):
    outsider = make_user(role=UserRole.WARDEN, assigned_hostel="Girls Hostel")
    leave = make_leave(student)
    service = ReturnService(db)
    report = service.report_return(student, leave.id, date(2024, 1, 13))

    with pytest.raises(AuthorizationError):
        service.grant_access(report.id, outsider, "approved")


def test_warden_lists_returns_of_own_hostel_only(db, student, warden, make_user, make_leave):
    other = make_user(assigned_hostel="Boys Hostel B")
    service = ReturnService(db)
    own = service.report_return(student, make_leave(student).id, date(2024, 1, 13))
    service.report_return(other, make_leave(other).id, date(2024, 1, 13))

    assert [r.id for r in service.list_returns(actor=warden)] == [own.id]
    assert len(service.list_returns()) == 2

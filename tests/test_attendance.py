from datetime import date

import pytest

from hostelkeeper.core.exceptions import (
    AlreadyMarkedError,
    AuthorizationError,
    InvalidDateError,
    LocationNotVerifiedError,
)
from hostelkeeper.models.attendance import Attendance
from hostelkeeper.models.enums import AttendanceStatus, UserRole
from hostelkeeper.schemas.base import GeoLocation
from hostelkeeper.services.attendance.attendance_service import (
    FACE_REMARKS,
    FACE_UPDATED_REMARKS,
    SELF_REMARKS,
    WARDEN_SELF_REMARKS,
    AttendanceService,
)
from hostelkeeper.services.attendance.geofence import BoundingBoxVerifier, CampusGeofence
from hostelkeeper.utils.geo_utils import BoundingBox

TODAY = date(2024, 1, 12)
ON_CAMPUS = GeoLocation(latitude=16.45, longitude=80.55, accuracy=8.0)
OFF_CAMPUS = GeoLocation(latitude=17.38, longitude=78.48)


@pytest.fixture
def service(db):
    geofence = CampusGeofence(fallback=BoundingBoxVerifier(BoundingBox(16.25, 16.65, 80.35, 80.75)))
    return AttendanceService(db, geofence=geofence, clock=lambda: TODAY)


def test_self_mark_today(service, student):
    record = service.mark_own_attendance(student, TODAY, location=ON_CAMPUS)

    assert record.status == AttendanceStatus.PRESENT
    assert record.marked_by_id == student.id
    assert record.remarks == SELF_REMARKS
    assert record.location_accuracy == 8.0


def test_warden_self_mark_uses_warden_remarks(service, warden):
    assert service.mark_own_attendance(warden, TODAY).remarks == WARDEN_SELF_REMARKS


def test_second_self_mark_is_rejected(db, service, student):
    service.mark_own_attendance(student, TODAY)

    with pytest.raises(AlreadyMarkedError) as exc:
        service.mark_own_attendance(student, TODAY, AttendanceStatus.ABSENT)

    assert exc.value.message == "Attendance already marked for this date"
    records = db.query(Attendance).filter_by(user_id=student.id).all()
    assert len(records) == 1
    assert records[0].status == AttendanceStatus.PRESENT


def test_self_mark_only_for_today(service, student):
    with pytest.raises(InvalidDateError):
        service.mark_own_attendance(student, date(2024, 1, 11))


def test_self_mark_off_campus_is_rejected(db, service, student):
    with pytest.raises(LocationNotVerifiedError):
        service.mark_own_attendance(student, TODAY, location=OFF_CAMPUS)

    assert db.query(Attendance).count() == 0


def test_warden_upserts_student_attendance(service, student, warden):
    first = service.mark_attendance_for(student.id, date(2024, 1, 5), AttendanceStatus.ABSENT, warden)
    second = service.mark_attendance_for(
        student.id, date(2024, 1, 5), AttendanceStatus.PRESENT, warden, remarks="Late entry"
    )

    assert second.id == first.id
    assert second.status == AttendanceStatus.PRESENT
    assert second.remarks == "Late entry"


def test_warden_cannot_mark_wardens(service, make_user, warden):
    other = make_user(role=UserRole.WARDEN)

    with pytest.raises(AuthorizationError):
        service.mark_attendance_for(other.id, TODAY, AttendanceStatus.PRESENT, warden)


def test_warden_cannot_mark_other_hostel(service, make_user, warden):
    outsider = make_user(assigned_hostel="Girls Hostel")

    with pytest.raises(AuthorizationError):
        service.mark_attendance_for(outsider.id, TODAY, AttendanceStatus.PRESENT, warden)


def test_admin_marks_warden_attendance(service, warden, admin):
    record = service.mark_attendance_for(warden.id, TODAY, AttendanceStatus.LEAVE, admin)
    assert record.marked_by_id == admin.id


def test_face_marking_updates_existing_record(service, student, warden):
    first = service.mark_attendance_by_face(student.id, TODAY, AttendanceStatus.PRESENT, warden)
    assert first.remarks == FACE_REMARKS

    second = service.mark_attendance_by_face(student.id, TODAY, AttendanceStatus.ABSENT, warden)
    assert second.id == first.id
    assert second.remarks == FACE_UPDATED_REMARKS


def test_list_attendance_filters_by_role(service, student, warden, admin):
    service.mark_attendance_for(student.id, TODAY, AttendanceStatus.PRESENT, admin)
    service.mark_attendance_for(warden.id, TODAY, AttendanceStatus.PRESENT, admin)

    assert [r.user_id for r in service.list_attendance(day=TODAY, role=UserRole.STUDENT)] == [student.id]
    assert [r.user_id for r in service.list_attendance(user_id=warden.id)] == [warden.id]

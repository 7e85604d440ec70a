import pytest

from hostelkeeper.core.exceptions import AuthorizationError
from hostelkeeper.models.enums import (
    HealthIssueStatus,
    HealthIssueType,
    HealthSeverity,
    LeaveStatus,
    MaintenanceStatus,
    NoticeAudience,
    UserRole,
)
from hostelkeeper.schemas.complaint import ComplaintCreate
from hostelkeeper.schemas.health_issue import HealthIssueCreate, HealthIssueUpdate
from hostelkeeper.schemas.notice import NoticeCreate
from hostelkeeper.services.admin.dashboard_service import DashboardService
from hostelkeeper.services.complaint.complaint_service import ComplaintService
from hostelkeeper.services.health.health_issue_service import HealthIssueService
from hostelkeeper.services.notice.notice_service import NoticeService
from hostelkeeper.services.room.room_service import RoomService


def report_fever(service, student):
    return service.report_health_issue(student, HealthIssueCreate(
        issue_type=HealthIssueType.ILLNESS,
        description="High fever since last night",
        severity=HealthSeverity.HIGH,
        symptoms=["fever", "headache"],
    ))


def test_reported_health_issue_starts_reported(db, student):
    service = HealthIssueService(db)

    issue = report_fever(service, student)

    assert issue.status == HealthIssueStatus.REPORTED
    assert issue.symptoms == ["fever", "headache"]
    assert issue.date_reported is not None
    assert issue.handled_by_id is None
    assert [i.id for i in service.list_my_health_issues(student)] == [issue.id]


def test_warden_update_records_handler(db, student, warden):
    service = HealthIssueService(db)
    issue = report_fever(service, student)

    updated = service.update_health_issue(issue.id, warden, HealthIssueUpdate(
        status=HealthIssueStatus.REFERRED,
        referred_to="City Hospital",
        action_taken="Paracetamol given",
    ))

    assert updated.status == HealthIssueStatus.REFERRED
    assert updated.referred_to == "City Hospital"
    assert updated.handled_by_id == warden.id
    assert updated.description == "High fever since last night"
    assert [i.id for i in service.list_health_issues(HealthIssueStatus.REFERRED)] == [issue.id]
    assert service.list_health_issues(HealthIssueStatus.REPORTED) == []


def test_health_issues_are_scoped_to_the_warden_hostel(db, student, make_user):
    other_warden = make_user(role=UserRole.WARDEN, assigned_hostel="Boys Hostel B")
    service = HealthIssueService(db)
    issue = report_fever(service, student)

    assert service.list_health_issues(actor=other_warden) == []
    with pytest.raises(AuthorizationError):
        service.update_health_issue(issue.id, other_warden, HealthIssueUpdate(status=HealthIssueStatus.CLOSED))


def test_notices_follow_their_audience(db):
    service = NoticeService(db)
    everyone = service.create_notice(NoticeCreate(title="Holiday", body="Campus closed on Friday"))
    students = service.create_notice(NoticeCreate(
        title="Fees", body="Hostel fees due", audience=NoticeAudience.STUDENTS,
    ))
    wardens = service.create_notice(NoticeCreate(
        title="Meeting", body="Wardens meet at 5 pm", audience=NoticeAudience.WARDENS,
    ))

    assert everyone.audience == NoticeAudience.ALL
    assert {n.id for n in service.list_notices(UserRole.STUDENT)} == {everyone.id, students.id}
    assert {n.id for n in service.list_notices(UserRole.WARDEN)} == {everyone.id, wardens.id}
    assert len(service.list_notices()) == 3


def test_dashboard_stats(db, make_hostel, make_room, make_user, make_leave, student, warden):
    make_hostel()
    room = make_room(number="101")
    make_room(number="102")
    RoomService(db).allocate_room(student.id, room.id)
    RoomService(db).allocate_room(make_user().id, room.id)
    complaints = ComplaintService(db)
    complaints.create_complaint(student, ComplaintCreate(type="plumbing", description="Tap leaking"))
    make_leave(student, status=LeaveStatus.PENDING)
    make_leave(student)
    report_fever(HealthIssueService(db), student)

    stats = DashboardService(db).dashboard_stats()

    assert stats == {
        "total_students": 2,
        "total_wardens": 1,
        "total_rooms": 2,
        "occupied_rooms": 1,
        "total_complaints": 1,
        "pending_complaints": 1,
        "total_leaves": 2,
        "pending_leaves": 1,
        "open_health_issues": 1,
    }


def test_maintenance_report(db, make_hostel, make_room, student):
    make_hostel()
    make_room(number="101")
    broken = make_room(number="102", maintenance_status=MaintenanceStatus.NEEDS_REPAIR)
    complaints = ComplaintService(db)
    leak = complaints.create_complaint(student, ComplaintCreate(type="plumbing", description="Tap leaking"))
    complaints.create_complaint(student, ComplaintCreate(type="noise", description="Loud music"))

    report = DashboardService(db).maintenance_report()

    assert [r.id for r in report["rooms"]] == [broken.id]
    assert [c.id for c in report["complaints"]] == [leak.id]

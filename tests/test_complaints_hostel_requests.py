import pytest

from hostelkeeper.core.exceptions import ConflictError, InvalidStateTransitionError
from hostelkeeper.models.enums import ComplaintStatus, HostelRequestStatus, RoomType
from hostelkeeper.schemas.complaint import ComplaintCreate
from hostelkeeper.schemas.hostel_request import HostelRequestCreate
from hostelkeeper.services.complaint.complaint_service import ComplaintService
from hostelkeeper.services.hostel.hostel_request_service import HostelRequestService


def test_complaint_status_update_notifies_with_remarks(db, notifier, student, warden):
    service = ComplaintService(db, notifier)
    complaint = service.create_complaint(student, ComplaintCreate(type="plumbing", description="Tap leaking"))
    assert complaint.status == ComplaintStatus.PENDING

    updated = service.update_complaint_status(complaint.id, ComplaintStatus.RESOLVED, warden, remarks="Fixed")

    assert updated.status == ComplaintStatus.RESOLVED
    event, payload = notifier.events[-1]
    assert event == "complaint-updated"
    assert payload["status"] == "resolved"
    assert payload["remarks"] == "Fixed"
    assert [c.id for c in service.list_complaints(ComplaintStatus.RESOLVED)] == [complaint.id]


def test_one_pending_hostel_request_per_student(db, student):
    service = HostelRequestService(db)
    service.apply_hostel(student, HostelRequestCreate(hostel_preference="Boys Hostel A"))

    with pytest.raises(ConflictError):
        service.apply_hostel(student, HostelRequestCreate())


def test_hostel_request_defaults_from_student(db, make_user):
    student = make_user(year=2)
    request = HostelRequestService(db).apply_hostel(student, HostelRequestCreate(room_type=RoomType.DOUBLE))

    assert request.gender == student.gender
    assert request.year == 2


def test_approving_with_room_allocates_it(db, student, warden, make_hostel, make_room):
    make_hostel()
    room = make_room()
    service = HostelRequestService(db)
    request = service.apply_hostel(student, HostelRequestCreate())

    approved = service.process_hostel_request(request.id, warden, "approved", room_id=room.id)
    db.refresh(student)

    assert approved.status == HostelRequestStatus.APPROVED
    assert approved.assigned_room_id == room.id
    assert approved.approved_by_id == warden.id
    assert student.room_id == room.id
    assert student.assigned_hostel == "Boys Hostel A"


def test_hostel_request_decided_once(db, student, warden):
    service = HostelRequestService(db)
    request = service.apply_hostel(student, HostelRequestCreate())
    service.process_hostel_request(request.id, warden, "rejected", remarks="No vacancy")

    with pytest.raises(InvalidStateTransitionError):
        service.process_hostel_request(request.id, warden, "approved")


def test_warden_lists_complaints_of_own_hostel_only(db, student, warden, make_user):
    other = make_user(assigned_hostel="Boys Hostel B")
    service = ComplaintService(db)
    own = service.create_complaint(student, ComplaintCreate(type="plumbing", description="Tap leaking"))
    service.create_complaint(other, ComplaintCreate(type="electricity", description="Fan broken"))

    assert [c.id for c in service.list_complaints(actor=warden)] == [own.id]
    assert len(service.list_complaints()) == 2

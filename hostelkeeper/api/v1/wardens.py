"""
Warden endpoints.

Wardens decide student leaves and return reports, mark attendance for
students of their own hostel, allocate rooms and handle complaints,
health issues and hostel requests. They also apply for their own leave,
which only an admin can decide.
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from hostelkeeper.api.deps import (
    get_attendance_service,
    get_complaint_service,
    get_health_issue_service,
    get_hostel_request_service,
    get_leave_service,
    get_notice_service,
    get_return_service,
    get_room_service,
)
from hostelkeeper.core.dependencies import get_warden
from hostelkeeper.models.enums import ComplaintStatus, HealthIssueStatus, HostelRequestStatus, LeaveStatus, UserRole
from hostelkeeper.models.user import User
from hostelkeeper.schemas.attendance import (
    AttendanceMark,
    AttendanceResponse,
    FaceAttendanceMark,
    SelfAttendanceCreate,
)
from hostelkeeper.schemas.complaint import ComplaintResponse, ComplaintStatusUpdate
from hostelkeeper.schemas.health_issue import HealthIssueResponse, HealthIssueUpdate
from hostelkeeper.schemas.hostel_request import HostelRequestDecision, HostelRequestResponse
from hostelkeeper.schemas.leave import LeaveCreate, LeaveDecision, LeaveResponse, MarkReturned
from hostelkeeper.schemas.notice import NoticeResponse
from hostelkeeper.schemas.room import RoomAllocation, RoomResponse
from hostelkeeper.schemas.student_return import AccessDecision, ReturnReportResponse
from hostelkeeper.services.attendance.attendance_service import AttendanceService
from hostelkeeper.services.complaint.complaint_service import ComplaintService
from hostelkeeper.services.health.health_issue_service import HealthIssueService
from hostelkeeper.services.hostel.hostel_request_service import HostelRequestService
from hostelkeeper.services.leave.leave_service import LeaveService
from hostelkeeper.services.leave.return_service import ReturnService
from hostelkeeper.services.notice.notice_service import NoticeService
from hostelkeeper.services.room.room_service import RoomService

router = APIRouter(prefix="/wardens", tags=["Wardens"])


# --- Student leaves -----------------------------------------------------------

@router.get("/leaves", response_model=List[LeaveResponse])
def list_student_leaves(
    status_filter: Optional[LeaveStatus] = Query(None, alias="status"),
    warden: User = Depends(get_warden),
    service: LeaveService = Depends(get_leave_service),
):
    return service.list_leaves(role=UserRole.STUDENT, status=status_filter, actor=warden)


@router.put("/leaves/{leave_id}/decision", response_model=LeaveResponse)
def decide_leave(
    leave_id: str,
    payload: LeaveDecision,
    warden: User = Depends(get_warden),
    service: LeaveService = Depends(get_leave_service),
):
    return service.decide_leave(leave_id, warden, payload.status)


@router.put("/leaves/{leave_id}/returned", response_model=LeaveResponse)
def mark_returned(
    leave_id: str,
    payload: MarkReturned,
    warden: User = Depends(get_warden),
    service: LeaveService = Depends(get_leave_service),
):
    return service.mark_returned_directly(leave_id, payload.return_date, actor=warden)


# --- Own leaves ---------------------------------------------------------------

@router.post("/my-leaves", response_model=LeaveResponse, status_code=status.HTTP_201_CREATED)
def apply_own_leave(
    payload: LeaveCreate,
    warden: User = Depends(get_warden),
    service: LeaveService = Depends(get_leave_service),
):
    return service.submit_leave(warden, payload.from_date, payload.to_date, payload.reason)


@router.get("/my-leaves", response_model=List[LeaveResponse])
def list_own_leaves(warden: User = Depends(get_warden), service: LeaveService = Depends(get_leave_service)):
    return service.list_my_leaves(warden)


# --- Return reports -----------------------------------------------------------

@router.get("/returns", response_model=List[ReturnReportResponse])
def list_return_reports(warden: User = Depends(get_warden), service: ReturnService = Depends(get_return_service)):
    return service.list_returns(actor=warden)


@router.put("/returns/{report_id}/access", response_model=ReturnReportResponse)
def grant_hostel_access(
    report_id: str,
    payload: AccessDecision,
    warden: User = Depends(get_warden),
    service: ReturnService = Depends(get_return_service),
):
    return service.grant_access(report_id, warden, payload.permission, payload.remarks)


# --- Attendance ---------------------------------------------------------------

@router.post("/attendance", response_model=AttendanceResponse)
def mark_student_attendance(
    payload: AttendanceMark,
    warden: User = Depends(get_warden),
    service: AttendanceService = Depends(get_attendance_service),
):
    return service.mark_attendance_for(payload.user_id, payload.date, payload.status, warden, payload.remarks)


@router.post("/attendance/face", response_model=AttendanceResponse)
def mark_attendance_by_face(
    payload: FaceAttendanceMark,
    warden: User = Depends(get_warden),
    service: AttendanceService = Depends(get_attendance_service),
):
    return service.mark_attendance_by_face(payload.student_id, payload.date, payload.status, warden)


@router.post("/attendance/self", response_model=AttendanceResponse, status_code=status.HTTP_201_CREATED)
def mark_own_attendance(
    payload: SelfAttendanceCreate,
    warden: User = Depends(get_warden),
    service: AttendanceService = Depends(get_attendance_service),
):
    return service.mark_own_attendance(warden, payload.date, payload.status, payload.location)


@router.get("/attendance", response_model=List[AttendanceResponse])
def list_student_attendance(
    day: Optional[date] = None,
    user_id: Optional[str] = None,
    warden: User = Depends(get_warden),
    service: AttendanceService = Depends(get_attendance_service),
):
    return service.list_attendance(user_id=user_id, day=day, role=UserRole.STUDENT)


# --- Rooms --------------------------------------------------------------------

@router.post("/rooms/allocate", response_model=RoomResponse)
def allocate_room(
    payload: RoomAllocation,
    warden: User = Depends(get_warden),
    service: RoomService = Depends(get_room_service),
):
    return service.allocate_room(payload.student_id, payload.room_id, actor=warden)


# --- Complaints ---------------------------------------------------------------

@router.get("/complaints", response_model=List[ComplaintResponse])
def list_complaints(
    status_filter: Optional[ComplaintStatus] = Query(None, alias="status"),
    warden: User = Depends(get_warden),
    service: ComplaintService = Depends(get_complaint_service),
):
    return service.list_complaints(status_filter, actor=warden)


@router.put("/complaints/{complaint_id}/status", response_model=ComplaintResponse)
def update_complaint_status(
    complaint_id: str,
    payload: ComplaintStatusUpdate,
    warden: User = Depends(get_warden),
    service: ComplaintService = Depends(get_complaint_service),
):
    return service.update_complaint_status(complaint_id, payload.status, warden, payload.remarks)


# --- Health issues ------------------------------------------------------------

@router.get("/health-issues", response_model=List[HealthIssueResponse])
def list_health_issues(
    status_filter: Optional[HealthIssueStatus] = Query(None, alias="status"),
    warden: User = Depends(get_warden),
    service: HealthIssueService = Depends(get_health_issue_service),
):
    return service.list_health_issues(status_filter, actor=warden)


@router.put("/health-issues/{issue_id}", response_model=HealthIssueResponse)
def update_health_issue(
    issue_id: str,
    payload: HealthIssueUpdate,
    warden: User = Depends(get_warden),
    service: HealthIssueService = Depends(get_health_issue_service),
):
    return service.update_health_issue(issue_id, warden, payload)


# --- Notices ------------------------------------------------------------------

@router.get("/notices", response_model=List[NoticeResponse])
def list_notices(warden: User = Depends(get_warden), service: NoticeService = Depends(get_notice_service)):
    return service.list_notices(warden.role)


# --- Hostel requests ----------------------------------------------------------

@router.get("/hostel-requests", response_model=List[HostelRequestResponse])
def list_hostel_requests(
    status_filter: Optional[HostelRequestStatus] = Query(None, alias="status"),
    warden: User = Depends(get_warden),
    service: HostelRequestService = Depends(get_hostel_request_service),
):
    return service.list_hostel_requests(status_filter)


@router.put("/hostel-requests/{request_id}", response_model=HostelRequestResponse)
def process_hostel_request(
    request_id: str,
    payload: HostelRequestDecision,
    warden: User = Depends(get_warden),
    service: HostelRequestService = Depends(get_hostel_request_service),
):
    return service.process_hostel_request(request_id, warden, payload.status, payload.room_id, payload.remarks)

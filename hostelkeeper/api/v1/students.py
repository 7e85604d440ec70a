"""
Student endpoints: leaves, return reports, self attendance, complaints,
health issues, notices, hostel requests and room availability.
"""
from typing import List

from fastapi import APIRouter, Depends, status

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
from hostelkeeper.core.dependencies import get_student
from hostelkeeper.models.user import User
from hostelkeeper.schemas.attendance import AttendanceResponse, SelfAttendanceCreate
from hostelkeeper.schemas.complaint import ComplaintCreate, ComplaintResponse
from hostelkeeper.schemas.health_issue import HealthIssueCreate, HealthIssueResponse
from hostelkeeper.schemas.hostel_request import HostelRequestCreate, HostelRequestResponse
from hostelkeeper.schemas.leave import LeaveCreate, LeaveResponse
from hostelkeeper.schemas.notice import NoticeResponse
from hostelkeeper.schemas.room import RoomResponse
from hostelkeeper.schemas.student_return import ReturnReportCreate, ReturnReportResponse
from hostelkeeper.schemas.user import UserResponse
from hostelkeeper.services.attendance.attendance_service import AttendanceService
from hostelkeeper.services.complaint.complaint_service import ComplaintService
from hostelkeeper.services.health.health_issue_service import HealthIssueService
from hostelkeeper.services.hostel.hostel_request_service import HostelRequestService
from hostelkeeper.services.leave.leave_service import LeaveService
from hostelkeeper.services.leave.return_service import ReturnService
from hostelkeeper.services.notice.notice_service import NoticeService
from hostelkeeper.services.room.room_service import RoomService

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("/me", response_model=UserResponse)
def read_profile(student: User = Depends(get_student)):
    return student


# --- Leaves -------------------------------------------------------------------

@router.post("/leaves", response_model=LeaveResponse, status_code=status.HTTP_201_CREATED)
def submit_leave(
    payload: LeaveCreate,
    student: User = Depends(get_student),
    service: LeaveService = Depends(get_leave_service),
):
    return service.submit_leave(student, payload.from_date, payload.to_date, payload.reason)


@router.get("/leaves", response_model=List[LeaveResponse])
def list_my_leaves(student: User = Depends(get_student), service: LeaveService = Depends(get_leave_service)):
    return service.list_my_leaves(student)


# --- Return reports -----------------------------------------------------------

@router.post("/returns", response_model=ReturnReportResponse, status_code=status.HTTP_201_CREATED)
def report_return(
    payload: ReturnReportCreate,
    student: User = Depends(get_student),
    service: ReturnService = Depends(get_return_service),
):
    return service.report_return(
        student,
        payload.leave_request_id,
        payload.expected_return_date,
        location=payload.location,
        remarks=payload.remarks,
    )


@router.get("/returns", response_model=List[ReturnReportResponse])
def list_my_returns(student: User = Depends(get_student), service: ReturnService = Depends(get_return_service)):
    return service.list_my_returns(student)


# --- Attendance ---------------------------------------------------------------

@router.post("/attendance", response_model=AttendanceResponse, status_code=status.HTTP_201_CREATED)
def mark_own_attendance(
    payload: SelfAttendanceCreate,
    student: User = Depends(get_student),
    service: AttendanceService = Depends(get_attendance_service),
):
    return service.mark_own_attendance(student, payload.date, payload.status, payload.location)


@router.get("/attendance", response_model=List[AttendanceResponse])
def list_my_attendance(
    student: User = Depends(get_student),
    service: AttendanceService = Depends(get_attendance_service),
):
    return service.list_attendance(user_id=student.id)


# --- Complaints ---------------------------------------------------------------

@router.post("/complaints", response_model=ComplaintResponse, status_code=status.HTTP_201_CREATED)
def create_complaint(
    payload: ComplaintCreate,
    student: User = Depends(get_student),
    service: ComplaintService = Depends(get_complaint_service),
):
    return service.create_complaint(student, payload)


@router.get("/complaints", response_model=List[ComplaintResponse])
def list_my_complaints(student: User = Depends(get_student), service: ComplaintService = Depends(get_complaint_service)):
    return service.list_my_complaints(student)


# --- Health issues ------------------------------------------------------------

@router.post("/health-issues", response_model=HealthIssueResponse, status_code=status.HTTP_201_CREATED)
def report_health_issue(
    payload: HealthIssueCreate,
    student: User = Depends(get_student),
    service: HealthIssueService = Depends(get_health_issue_service),
):
    return service.report_health_issue(student, payload)


@router.get("/health-issues", response_model=List[HealthIssueResponse])
def list_my_health_issues(
    student: User = Depends(get_student),
    service: HealthIssueService = Depends(get_health_issue_service),
):
    return service.list_my_health_issues(student)


# --- Notices ------------------------------------------------------------------

@router.get("/notices", response_model=List[NoticeResponse])
def list_notices(student: User = Depends(get_student), service: NoticeService = Depends(get_notice_service)):
    return service.list_notices(student.role)


# --- Hostel requests ----------------------------------------------------------

@router.post("/hostel-requests", response_model=HostelRequestResponse, status_code=status.HTTP_201_CREATED)
def apply_hostel(
    payload: HostelRequestCreate,
    student: User = Depends(get_student),
    service: HostelRequestService = Depends(get_hostel_request_service),
):
    return service.apply_hostel(student, payload)


@router.get("/hostel-requests", response_model=List[HostelRequestResponse])
def list_my_hostel_requests(
    student: User = Depends(get_student),
    service: HostelRequestService = Depends(get_hostel_request_service),
):
    return service.list_my_hostel_requests(student)


@router.get("/rooms/available", response_model=List[RoomResponse])
def list_available_rooms(student: User = Depends(get_student), service: RoomService = Depends(get_room_service)):
    return service.list_available_rooms(gender=student.gender)

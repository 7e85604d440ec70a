"""
Admin endpoints: hostel and room administration, warden placement,
warden leaves and attendance, notices, dashboard reports and manual runs
of the scheduled jobs.
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from hostelkeeper.api.deps import (
    get_attendance_service,
    get_auto_attendance_service,
    get_dashboard_service,
    get_hostel_service,
    get_leave_service,
    get_notice_service,
    get_room_service,
)
from hostelkeeper.core.dependencies import get_admin
from hostelkeeper.core.exceptions import BaseAppException, ErrorCode
from hostelkeeper.models.enums import LeaveStatus, UserRole
from hostelkeeper.models.user import User
from hostelkeeper.schemas.attendance import (
    AttendanceMark,
    AttendanceResponse,
    ReconcileRequest,
    ReconcileSummary,
)
from hostelkeeper.schemas.base import MessageResponse
from hostelkeeper.schemas.dashboard import DashboardStats, MaintenanceReport
from hostelkeeper.schemas.hostel import (
    AggregateDrift,
    HostelCreate,
    HostelDetails,
    HostelResponse,
    HostelUpdate,
    StudentHostelUpdate,
    WardenAssignment,
)
from hostelkeeper.schemas.leave import LeaveDecision, LeaveResponse
from hostelkeeper.schemas.notice import NoticeCreate, NoticeResponse
from hostelkeeper.schemas.room import RoomCreate, RoomResponse, RoomUpdate
from hostelkeeper.schemas.user import UserResponse
from hostelkeeper.services.admin.dashboard_service import DashboardService
from hostelkeeper.services.attendance.attendance_service import AttendanceService
from hostelkeeper.services.background.auto_attendance_service import AutoAttendanceService
from hostelkeeper.services.hostel.hostel_service import HostelService
from hostelkeeper.services.leave.leave_service import LeaveService
from hostelkeeper.services.notice.notice_service import NoticeService
from hostelkeeper.services.room.room_service import RoomService

router = APIRouter(prefix="/admin", tags=["Admin"])


# --- Hostels ------------------------------------------------------------------

@router.post("/hostels", response_model=HostelResponse, status_code=status.HTTP_201_CREATED)
def create_hostel(
    payload: HostelCreate,
    admin: User = Depends(get_admin),
    service: HostelService = Depends(get_hostel_service),
):
    return service.create_hostel(payload)


@router.get("/hostels", response_model=List[HostelResponse])
def list_hostels(admin: User = Depends(get_admin), service: HostelService = Depends(get_hostel_service)):
    return service.list_hostels()


@router.post("/hostels/recompute", response_model=List[AggregateDrift])
def recompute_hostel_aggregates(admin: User = Depends(get_admin), service: HostelService = Depends(get_hostel_service)):
    """Rebuild stored hostel totals from the rooms table and report what changed."""
    return service.recompute_aggregates()


@router.get("/hostels/{hostel_id}", response_model=HostelResponse)
def get_hostel(hostel_id: str, admin: User = Depends(get_admin), service: HostelService = Depends(get_hostel_service)):
    return service.get_hostel(hostel_id)


@router.patch("/hostels/{hostel_id}", response_model=HostelResponse)
def update_hostel(
    hostel_id: str,
    payload: HostelUpdate,
    admin: User = Depends(get_admin),
    service: HostelService = Depends(get_hostel_service),
):
    return service.update_hostel(hostel_id, payload)


@router.delete("/hostels/{hostel_id}", response_model=MessageResponse)
def delete_hostel(hostel_id: str, admin: User = Depends(get_admin), service: HostelService = Depends(get_hostel_service)):
    service.delete_hostel(hostel_id)
    return MessageResponse(message="Hostel deleted")


@router.get("/hostels/{hostel_id}/details", response_model=HostelDetails)
def get_hostel_details(
    hostel_id: str,
    admin: User = Depends(get_admin),
    service: HostelService = Depends(get_hostel_service),
):
    return service.hostel_details(hostel_id)


# --- Rooms --------------------------------------------------------------------

@router.post("/rooms", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(payload: RoomCreate, admin: User = Depends(get_admin), service: RoomService = Depends(get_room_service)):
    return service.create_room(payload)


@router.get("/rooms", response_model=List[RoomResponse])
def list_rooms(
    hostel_name: Optional[str] = None,
    admin: User = Depends(get_admin),
    service: RoomService = Depends(get_room_service),
):
    return service.list_rooms(hostel_name)


@router.get("/rooms/{room_id}", response_model=RoomResponse)
def get_room(room_id: str, admin: User = Depends(get_admin), service: RoomService = Depends(get_room_service)):
    return service.get_room(room_id)


@router.patch("/rooms/{room_id}", response_model=RoomResponse)
def update_room(
    room_id: str,
    payload: RoomUpdate,
    admin: User = Depends(get_admin),
    service: RoomService = Depends(get_room_service),
):
    return service.update_room(room_id, payload)


@router.delete("/rooms/{room_id}", response_model=MessageResponse)
def delete_room(room_id: str, admin: User = Depends(get_admin), service: RoomService = Depends(get_room_service)):
    service.delete_room(room_id)
    return MessageResponse(message="Room deleted")


@router.delete("/students/{student_id}/room", response_model=MessageResponse)
def vacate_room(student_id: str, admin: User = Depends(get_admin), service: RoomService = Depends(get_room_service)):
    previous = service.vacate_room(student_id)
    return MessageResponse(message="Room vacated" if previous else "Student had no room")


# --- People -------------------------------------------------------------------

@router.post("/wardens/assign", response_model=UserResponse)
def assign_warden(
    payload: WardenAssignment,
    admin: User = Depends(get_admin),
    service: HostelService = Depends(get_hostel_service),
):
    return service.assign_warden(payload.warden_id, payload.hostel_name, payload.floor)


@router.put("/students/{student_id}/hostel", response_model=UserResponse)
def update_student_hostel(
    student_id: str,
    payload: StudentHostelUpdate,
    admin: User = Depends(get_admin),
    service: HostelService = Depends(get_hostel_service),
):
    return service.update_student_hostel(student_id, payload.hostel_name, payload.room_id)


# --- Warden leaves ------------------------------------------------------------

@router.get("/leaves", response_model=List[LeaveResponse])
def list_warden_leaves(
    status_filter: Optional[LeaveStatus] = Query(None, alias="status"),
    admin: User = Depends(get_admin),
    service: LeaveService = Depends(get_leave_service),
):
    return service.list_leaves(role=UserRole.WARDEN, status=status_filter)


@router.put("/leaves/{leave_id}/decision", response_model=LeaveResponse)
def decide_warden_leave(
    leave_id: str,
    payload: LeaveDecision,
    admin: User = Depends(get_admin),
    service: LeaveService = Depends(get_leave_service),
):
    return service.decide_leave(leave_id, admin, payload.status)


# --- Notices ------------------------------------------------------------------

@router.post("/notices", response_model=NoticeResponse, status_code=status.HTTP_201_CREATED)
def create_notice(
    payload: NoticeCreate,
    admin: User = Depends(get_admin),
    service: NoticeService = Depends(get_notice_service),
):
    return service.create_notice(payload)


@router.get("/notices", response_model=List[NoticeResponse])
def list_notices(admin: User = Depends(get_admin), service: NoticeService = Depends(get_notice_service)):
    return service.list_notices()


# --- Reports ------------------------------------------------------------------

@router.get("/stats", response_model=DashboardStats)
def dashboard_stats(admin: User = Depends(get_admin), service: DashboardService = Depends(get_dashboard_service)):
    return service.dashboard_stats()


@router.get("/maintenance", response_model=MaintenanceReport)
def maintenance_report(admin: User = Depends(get_admin), service: DashboardService = Depends(get_dashboard_service)):
    """Rooms not in good repair and recent plumbing or electricity complaints."""
    return service.maintenance_report()


# --- Attendance ---------------------------------------------------------------

@router.post("/attendance", response_model=AttendanceResponse)
def mark_attendance(
    payload: AttendanceMark,
    admin: User = Depends(get_admin),
    service: AttendanceService = Depends(get_attendance_service),
):
    return service.mark_attendance_for(payload.user_id, payload.date, payload.status, admin, payload.remarks)


@router.get("/attendance", response_model=List[AttendanceResponse])
def list_attendance(
    day: Optional[date] = None,
    user_id: Optional[str] = None,
    role: Optional[UserRole] = None,
    admin: User = Depends(get_admin),
    service: AttendanceService = Depends(get_attendance_service),
):
    return service.list_attendance(user_id=user_id, day=day, role=role)


@router.post("/auto-attendance/run", response_model=ReconcileSummary)
def run_auto_attendance(
    payload: ReconcileRequest,
    admin: User = Depends(get_admin),
    service: AutoAttendanceService = Depends(get_auto_attendance_service),
):
    """Run the auto-attendance reconciler now for ``day`` (default today)."""
    result = service.run(payload.day)
    if not result.is_success and not result.data:
        raise BaseAppException(
            message=result.message or "Auto-attendance run failed",
            error_code=ErrorCode.INTERNAL_ERROR,
            status_code=500,
        )
    return ReconcileSummary(success=result.is_success, **result.data)

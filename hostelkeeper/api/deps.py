"""
Service factories used as route dependencies.

Tests override these through ``app.dependency_overrides``.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from hostelkeeper.core.dependencies import get_notifier
from hostelkeeper.core.notifications import Notifier
from hostelkeeper.db.session import get_db
from hostelkeeper.services.admin.dashboard_service import DashboardService
from hostelkeeper.services.attendance.attendance_service import AttendanceService
from hostelkeeper.services.background.auto_attendance_service import AutoAttendanceService
from hostelkeeper.services.complaint.complaint_service import ComplaintService
from hostelkeeper.services.health.health_issue_service import HealthIssueService
from hostelkeeper.services.hostel.hostel_request_service import HostelRequestService
from hostelkeeper.services.hostel.hostel_service import HostelService
from hostelkeeper.services.leave.leave_service import LeaveService
from hostelkeeper.services.leave.return_service import ReturnService
from hostelkeeper.services.notice.notice_service import NoticeService
from hostelkeeper.services.room.room_service import RoomService


def get_leave_service(db: Session = Depends(get_db), notifier: Notifier = Depends(get_notifier)) -> LeaveService:
    return LeaveService(db, notifier)


def get_return_service(db: Session = Depends(get_db)) -> ReturnService:
    return ReturnService(db)


def get_attendance_service(db: Session = Depends(get_db)) -> AttendanceService:
    return AttendanceService(db)


def get_auto_attendance_service(db: Session = Depends(get_db)) -> AutoAttendanceService:
    return AutoAttendanceService(db)


def get_room_service(db: Session = Depends(get_db)) -> RoomService:
    return RoomService(db)


def get_hostel_service(db: Session = Depends(get_db)) -> HostelService:
    return HostelService(db)


def get_complaint_service(db: Session = Depends(get_db), notifier: Notifier = Depends(get_notifier)) -> ComplaintService:
    return ComplaintService(db, notifier)


def get_hostel_request_service(db: Session = Depends(get_db)) -> HostelRequestService:
    return HostelRequestService(db)


def get_health_issue_service(db: Session = Depends(get_db)) -> HealthIssueService:
    return HealthIssueService(db)


def get_notice_service(db: Session = Depends(get_db)) -> NoticeService:
    return NoticeService(db)


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(db)

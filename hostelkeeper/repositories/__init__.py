from hostelkeeper.repositories.attendance_repository import AttendanceRepository
from hostelkeeper.repositories.base import BaseRepository
from hostelkeeper.repositories.complaint_repository import ComplaintRepository
from hostelkeeper.repositories.hostel_repository import HostelRepository
from hostelkeeper.repositories.hostel_request_repository import HostelRequestRepository
from hostelkeeper.repositories.leave_repository import LeaveRequestRepository
from hostelkeeper.repositories.room_repository import RoomRepository
from hostelkeeper.repositories.student_return_repository import StudentReturnRepository
from hostelkeeper.repositories.user_repository import UserRepository

__all__ = [
    "AttendanceRepository",
    "BaseRepository",
    "ComplaintRepository",
    "HostelRepository",
    "HostelRequestRepository",
    "LeaveRequestRepository",
    "RoomRepository",
    "StudentReturnRepository",
    "UserRepository",
]

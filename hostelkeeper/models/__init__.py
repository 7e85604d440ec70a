from hostelkeeper.models.attendance import Attendance
from hostelkeeper.models.base import Base, BaseModel, TimestampModel
from hostelkeeper.models.complaint import Complaint
from hostelkeeper.models.health_issue import HealthIssue
from hostelkeeper.models.hostel import Hostel
from hostelkeeper.models.hostel_request import HostelRequest
from hostelkeeper.models.leave_request import LeaveRequest
from hostelkeeper.models.notice import Notice
from hostelkeeper.models.room import Room
from hostelkeeper.models.student_return import StudentReturn
from hostelkeeper.models.user import User

__all__ = [
    "Attendance",
    "Base",
    "BaseModel",
    "Complaint",
    "HealthIssue",
    "Hostel",
    "HostelRequest",
    "LeaveRequest",
    "Notice",
    "Room",
    "StudentReturn",
    "TimestampModel",
    "User",
]

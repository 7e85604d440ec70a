"""
Admin dashboard counters and the maintenance report.
"""

from typing import Any, Dict

from sqlalchemy.orm import Session

from hostelkeeper.models.complaint import Complaint
from hostelkeeper.models.enums import ComplaintStatus, HealthIssueStatus, LeaveStatus, UserRole
from hostelkeeper.models.health_issue import HealthIssue
from hostelkeeper.models.leave_request import LeaveRequest
from hostelkeeper.models.user import User
from hostelkeeper.repositories.complaint_repository import ComplaintRepository
from hostelkeeper.repositories.health_issue_repository import HealthIssueRepository
from hostelkeeper.repositories.leave_repository import LeaveRequestRepository
from hostelkeeper.repositories.room_repository import RoomRepository
from hostelkeeper.repositories.user_repository import UserRepository
from hostelkeeper.services.base import BaseService

# Complaint types that point at a room fault rather than a conduct issue
MAINTENANCE_COMPLAINT_TYPES = ("plumbing", "electricity")
MAINTENANCE_COMPLAINT_LIMIT = 50

_CLOSED_HEALTH_STATUSES = (HealthIssueStatus.RESOLVED, HealthIssueStatus.CLOSED)


class DashboardService(BaseService):
    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.users = UserRepository(db_session)
        self.rooms = RoomRepository(db_session)
        self.complaints = ComplaintRepository(db_session)
        self.leaves = LeaveRequestRepository(db_session)
        self.health_issues = HealthIssueRepository(db_session)

    def dashboard_stats(self) -> Dict[str, int]:
        return {
            "total_students": self.users.count(User.role == UserRole.STUDENT),
            "total_wardens": self.users.count(User.role == UserRole.WARDEN),
            "total_rooms": self.rooms.count(),
            "occupied_rooms": self.rooms.count_occupied(),
            "total_complaints": self.complaints.count(),
            "pending_complaints": self.complaints.count(Complaint.status == ComplaintStatus.PENDING),
            "total_leaves": self.leaves.count(),
            "pending_leaves": self.leaves.count(LeaveRequest.status == LeaveStatus.PENDING),
            "open_health_issues": self.health_issues.count(HealthIssue.status.not_in(_CLOSED_HEALTH_STATUSES)),
        }

    def maintenance_report(self) -> Dict[str, Any]:
        """Rooms not in good repair and the latest room-fault complaints."""
        return {
            "rooms": self.rooms.find_needing_maintenance(),
            "complaints": self.complaints.find_by_types(
                MAINTENANCE_COMPLAINT_TYPES,
                limit=MAINTENANCE_COMPLAINT_LIMIT,
            ),
        }

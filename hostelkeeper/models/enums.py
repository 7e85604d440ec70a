"""
Database enums shared by models and schemas.
"""

import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    STUDENT = "student"
    WARDEN = "warden"
    ADMIN = "admin"


class Gender(str, enum.Enum):
    """Gender of a person."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class HostelGender(str, enum.Enum):
    """Who a hostel houses."""
    MALE = "male"
    FEMALE = "female"
    COED = "coed"


class RoomType(str, enum.Enum):
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    QUAD = "quad"


class MaintenanceStatus(str, enum.Enum):
    GOOD = "good"
    NEEDS_REPAIR = "needs_repair"
    UNDER_MAINTENANCE = "under_maintenance"


class LeaveStatus(str, enum.Enum):
    """Leave request status."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AttendanceStatus(str, enum.Enum):
    """Attendance status enumeration."""
    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"


class AccessPermission(str, enum.Enum):
    """Hostel access permission on a return report."""
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class ComplaintStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class HostelRequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class HealthIssueType(str, enum.Enum):
    ILLNESS = "illness"
    INJURY = "injury"
    ALLERGY = "allergy"
    CHRONIC = "chronic"
    EMERGENCY = "emergency"
    MENTAL_HEALTH = "mental_health"
    OTHER = "other"


class HealthSeverity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class HealthIssueStatus(str, enum.Enum):
    """Handling state of a reported health issue."""
    REPORTED = "reported"
    UNDER_TREATMENT = "under_treatment"
    REFERRED = "referred"
    RESOLVED = "resolved"
    CLOSED = "closed"


class NoticeAudience(str, enum.Enum):
    """Who a notice is addressed to."""
    ALL = "all"
    STUDENTS = "students"
    WARDENS = "wardens"

from hostelkeeper.services.leave.leave_service import LeaveService, is_active
from hostelkeeper.services.leave.return_service import ReturnService

__all__ = ["LeaveService", "ReturnService", "is_active"]

from typing import List

from hostelkeeper.schemas.base import BaseSchema
from hostelkeeper.schemas.complaint import ComplaintResponse
from hostelkeeper.schemas.room import RoomResponse


class DashboardStats(BaseSchema):
    total_students: int
    total_wardens: int
    total_rooms: int
    occupied_rooms: int
    total_complaints: int
    pending_complaints: int
    total_leaves: int
    pending_leaves: int
    open_health_issues: int


class MaintenanceReport(BaseSchema):
    rooms: List[RoomResponse]
    complaints: List[ComplaintResponse]

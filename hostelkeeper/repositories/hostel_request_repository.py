from typing import List, Optional

from sqlalchemy.orm import Session

from hostelkeeper.models.enums import HostelRequestStatus
from hostelkeeper.models.hostel_request import HostelRequest
from hostelkeeper.repositories.base import BaseRepository


class HostelRequestRepository(BaseRepository[HostelRequest]):
    def __init__(self, db: Session):
        super().__init__(HostelRequest, db)

    def find_by_student(self, student_id: str) -> List[HostelRequest]:
        return self.find_all(HostelRequest.student_id == student_id, order_by=HostelRequest.created_at.desc())

    def find_pending_for_student(self, student_id: str) -> Optional[HostelRequest]:
        return self.find_one(
            HostelRequest.student_id == student_id,
            HostelRequest.status == HostelRequestStatus.PENDING,
        )

    def find_by_status(self, status: Optional[HostelRequestStatus] = None) -> List[HostelRequest]:
        criteria = [HostelRequest.status == status] if status is not None else []
        return self.find_all(*criteria, order_by=HostelRequest.created_at.desc())

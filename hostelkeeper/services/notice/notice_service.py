"""
Notices published by administrators and read by students and wardens.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from hostelkeeper.models.enums import NoticeAudience, UserRole
from hostelkeeper.models.notice import Notice
from hostelkeeper.repositories.notice_repository import NoticeRepository
from hostelkeeper.schemas.notice import NoticeCreate
from hostelkeeper.services.base import BaseService

_ROLE_AUDIENCE = {
    UserRole.STUDENT: NoticeAudience.STUDENTS,
    UserRole.WARDEN: NoticeAudience.WARDENS,
}


class NoticeService(BaseService):
    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.notices = NoticeRepository(db_session)

    def create_notice(self, data: NoticeCreate) -> Notice:
        with self.transaction():
            notice = self.notices.add(Notice(**data.model_dump()))
        self._logger.info(f"Notice {notice.id} published to {notice.audience.value}")
        return notice

    def list_notices(self, role: Optional[UserRole] = None) -> List[Notice]:
        """
        Notices visible to ``role``: those for everyone plus those for the
        role's own audience. Without a role every notice is returned.
        """
        if role is None or role not in _ROLE_AUDIENCE:
            return self.notices.find_all(order_by=Notice.created_at.desc())
        return self.notices.find_for_audiences((NoticeAudience.ALL, _ROLE_AUDIENCE[role]))

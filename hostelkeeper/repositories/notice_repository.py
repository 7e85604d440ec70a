from typing import Iterable, List

from sqlalchemy.orm import Session

from hostelkeeper.models.enums import NoticeAudience
from hostelkeeper.models.notice import Notice
from hostelkeeper.repositories.base import BaseRepository


class NoticeRepository(BaseRepository[Notice]):
    def __init__(self, db: Session):
        super().__init__(Notice, db)

    def find_for_audiences(self, audiences: Iterable[NoticeAudience]) -> List[Notice]:
        return self.find_all(Notice.audience.in_(list(audiences)), order_by=Notice.created_at.desc())

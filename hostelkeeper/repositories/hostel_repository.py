"""
Hostel repository.

Aggregate columns are only ever changed through single UPDATE statements
so concurrent room changes cannot lose increments.
"""

from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from hostelkeeper.models.hostel import Hostel
from hostelkeeper.repositories.base import BaseRepository


class HostelRepository(BaseRepository[Hostel]):
    def __init__(self, db: Session):
        super().__init__(Hostel, db)

    def find_by_name(self, name: str) -> Optional[Hostel]:
        return self.find_one(Hostel.name == name)

    def adjust_aggregates(self, name: str, rooms_delta: int = 0, capacity_delta: int = 0) -> bool:
        """
        Atomically add the deltas to the hostel's totals.

        Returns False when no hostel carries that name.
        """
        result = self.db.execute(
            update(Hostel)
            .where(Hostel.name == name)
            .values(
                total_rooms=Hostel.total_rooms + rooms_delta,
                total_capacity=Hostel.total_capacity + capacity_delta,
            )
            .execution_options(synchronize_session="fetch")
        )
        return bool(result.rowcount)

    def set_aggregates(self, hostel_id: str, total_rooms: int, total_capacity: int) -> None:
        self.db.execute(
            update(Hostel)
            .where(Hostel.id == hostel_id)
            .values(total_rooms=total_rooms, total_capacity=total_capacity)
            .execution_options(synchronize_session="fetch")
        )

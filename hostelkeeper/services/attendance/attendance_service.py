"""
Attendance marking.

Self-marking is insert-only for the current day; staff marking is an
upsert. The (user, date) unique constraint is the single source of
"already marked", checked by attempting the insert rather than looking first.
"""

from datetime import date
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from hostelkeeper.core.exceptions import (
    AlreadyMarkedError,
    AuthorizationError,
    InvalidDateError,
    LocationNotVerifiedError,
)
from hostelkeeper.core.permissions import ensure_same_hostel
from hostelkeeper.models.attendance import Attendance
from hostelkeeper.models.enums import AttendanceStatus, UserRole
from hostelkeeper.models.user import User
from hostelkeeper.repositories.attendance_repository import AttendanceRepository
from hostelkeeper.repositories.user_repository import UserRepository
from hostelkeeper.schemas.base import GeoLocation
from hostelkeeper.services.attendance.geofence import CampusGeofence, build_campus_geofence
from hostelkeeper.services.base import BaseService
from hostelkeeper.utils.datetime_utils import today as current_day, utcnow

SELF_REMARKS = "Self Attendance - Face Recognition"
WARDEN_SELF_REMARKS = "Self Attendance - Face Recognition (Warden)"
FACE_REMARKS = "Face Recognition"
FACE_UPDATED_REMARKS = "Face Recognition (Updated)"


class AttendanceService(BaseService):
    def __init__(
        self,
        db_session: Session,
        geofence: Optional[CampusGeofence] = None,
        clock: Callable[[], date] = current_day,
    ):
        super().__init__(db_session)
        self.records = AttendanceRepository(db_session)
        self.users = UserRepository(db_session)
        self.geofence = geofence
        self.clock = clock

    def _require_today(self, day: date) -> None:
        today = self.clock()
        if day != today:
            raise InvalidDateError(day, today)

    def _get_geofence(self) -> CampusGeofence:
        if self.geofence is None:
            self.geofence = build_campus_geofence()
        return self.geofence

    # -------------------------------------------------------------------------
    # Self marking
    # -------------------------------------------------------------------------

    def mark_own_attendance(
        self,
        user: User,
        day: date,
        status: AttendanceStatus = AttendanceStatus.PRESENT,
        location: Optional[GeoLocation] = None,
    ) -> Attendance:
        """
        Mark the caller's own attendance for today.

        Raises:
            InvalidDateError: ``day`` is not today
            LocationNotVerifiedError: a location was given and is off campus
            AlreadyMarkedError: a record for today already exists
        """
        self._require_today(day)

        if location is not None and not self._get_geofence().verify(location.latitude, location.longitude):
            self._logger.warning(
                f"Attendance for {user.id} rejected, location not on campus",
                extra={"latitude": location.latitude, "longitude": location.longitude},
            )
            raise LocationNotVerifiedError(location.latitude, location.longitude)

        record = Attendance(
            user_id=user.id,
            date=day,
            status=status,
            marked_by_id=user.id,
            remarks=WARDEN_SELF_REMARKS if user.role == UserRole.WARDEN else SELF_REMARKS,
        )
        if location is not None:
            record.location_latitude = location.latitude
            record.location_longitude = location.longitude
            record.location_accuracy = location.accuracy
            record.location_timestamp = location.timestamp or utcnow()

        with self.transaction():
            if not self.records.try_insert(record):
                raise AlreadyMarkedError(user.id, day)

        self._logger.info(f"{user.role.value} {user.id} marked {status.value} for {day}")
        return record

    # -------------------------------------------------------------------------
    # Staff marking
    # -------------------------------------------------------------------------

    def _upsert(self, user_id: str, day: date, status: AttendanceStatus, marked_by: User, remarks: Optional[str]) -> Attendance:
        existing = self.records.find_for_day(user_id, day)
        if existing is None:
            record = Attendance(user_id=user_id, date=day, status=status, marked_by_id=marked_by.id, remarks=remarks)
            if self.records.try_insert(record):
                return record
            # Lost a race with another writer; update the row it created
            existing = self.records.find_for_day(user_id, day)

        existing.status = status
        existing.marked_by_id = marked_by.id
        existing.remarks = remarks
        self.db.flush()
        return existing

    def mark_attendance_for(
        self,
        user_id: str,
        day: date,
        status: AttendanceStatus,
        marked_by: User,
        remarks: Optional[str] = None,
    ) -> Attendance:
        """Create or overwrite a user's record for a day. Wardens mark students, admins mark anyone."""
        with self.transaction():
            target = self.users.get_by_id(user_id)
            if marked_by.role == UserRole.WARDEN:
                if target.role != UserRole.STUDENT:
                    raise AuthorizationError("Wardens can only mark attendance for students")
                ensure_same_hostel(marked_by, target)
            elif marked_by.role != UserRole.ADMIN:
                raise AuthorizationError("Not authorized to mark attendance for others")

            record = self._upsert(target.id, day, status, marked_by, remarks)

        self._logger.info(f"Attendance for {target.id} on {day} set to {status.value} by {marked_by.id}")
        return record

    def mark_attendance_by_face(
        self,
        student_id: str,
        day: date,
        status: AttendanceStatus,
        marked_by: User,
    ) -> Attendance:
        """Face-recognition marking by a warden, today only; updates an existing record."""
        self._require_today(day)

        with self.transaction():
            student = self.users.get_by_id(student_id)
            ensure_same_hostel(marked_by, student)
            existing = self.records.find_for_day(student.id, day)
            remarks = FACE_UPDATED_REMARKS if existing is not None else FACE_REMARKS
            record = self._upsert(student.id, day, status, marked_by, remarks)

        self._logger.info(f"Face attendance for {student.id} on {day}: {status.value}")
        return record

    def list_attendance(
        self,
        user_id: Optional[str] = None,
        day: Optional[date] = None,
        role: Optional[UserRole] = None,
    ) -> List[Attendance]:
        return self.records.search(user_id=user_id, day=day, role=role)

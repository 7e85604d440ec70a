import itertools
import os
from datetime import date

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["AUTO_ATTENDANCE_RUN_ON_STARTUP"] = "false"
os.environ.pop("GOOGLE_MAPS_API_KEY", None)

import pytest
from fastapi.testclient import TestClient

from hostelkeeper.core.security import create_access_token
from hostelkeeper.db.base import Base
from hostelkeeper.db.session import SessionLocal, engine, get_db
from hostelkeeper.models.enums import Gender, HostelGender, LeaveStatus, UserRole
from hostelkeeper.models.leave_request import LeaveRequest
from hostelkeeper.models.user import User
from hostelkeeper.schemas.hostel import HostelCreate
from hostelkeeper.schemas.room import RoomCreate
from hostelkeeper.services.hostel.hostel_service import HostelService
from hostelkeeper.services.room.room_service import RoomService


class RecordingNotifier:
    def __init__(self):
        self.events = []

    def publish(self, event, payload):
        self.events.append((event, payload))


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def _make(role=UserRole.STUDENT, gender=Gender.MALE, assigned_hostel=None, **kwargs):
        n = next(counter)
        user = User(
            name=kwargs.pop("name", f"{role.value.title()} {n}"),
            email=kwargs.pop("email", f"{role.value}{n}@example.com"),
            role=role,
            gender=gender,
            assigned_hostel=assigned_hostel,
            **kwargs,
        )
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def make_hostel(db):
    def _make(name="Boys Hostel A", gender=HostelGender.MALE, block="A"):
        return HostelService(db).create_hostel(HostelCreate(name=name, block=block, gender=gender))

    return _make


@pytest.fixture
def make_room(db):
    def _make(hostel_name="Boys Hostel A", number="101", capacity=2, gender=Gender.MALE, floor=1, **kwargs):
        return RoomService(db).create_room(RoomCreate(
            hostel_name=hostel_name,
            number=number,
            capacity=capacity,
            gender=gender,
            floor=floor,
            **kwargs,
        ))

    return _make


@pytest.fixture
def make_leave(db):
    def _make(student, from_date=date(2024, 1, 10), to_date=date(2024, 1, 15),
              status=LeaveStatus.APPROVED, approver=None, reason="Family function", **kwargs):
        leave = LeaveRequest(
            student_id=student.id,
            from_date=from_date,
            to_date=to_date,
            reason=reason,
            status=status,
            approver_id=approver.id if approver else None,
            **kwargs,
        )
        db.add(leave)
        db.commit()
        return leave

    return _make


@pytest.fixture
def student(make_user):
    return make_user(name="Ravi Kumar", assigned_hostel="Boys Hostel A")


@pytest.fixture
def warden(make_user):
    return make_user(role=UserRole.WARDEN, name="Warden Rao", assigned_hostel="Boys Hostel A")


@pytest.fixture
def admin(make_user):
    return make_user(role=UserRole.ADMIN, name="Admin")


@pytest.fixture
def client(db):
    from hostelkeeper.main import app

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user):
        token = create_access_token(user.id, user.role.value)
        return {"Authorization": f"Bearer {token}"}

    return _headers

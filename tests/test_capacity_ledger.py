import pytest
from pydantic import ValidationError as SchemaValidationError

from hostelkeeper.core.exceptions import (
    CapacityExceededError,
    ConflictError,
    GenderMismatchError,
    ResourceNotFoundError,
    ValidationError,
)
from hostelkeeper.models.enums import Gender, RoomType, UserRole
from hostelkeeper.models.room import Room
from hostelkeeper.schemas.hostel import HostelCreate, HostelUpdate
from hostelkeeper.schemas.room import RoomUpdate
from hostelkeeper.services.hostel.hostel_service import HostelService
from hostelkeeper.services.room.capacity_ledger import CapacityLedger
from hostelkeeper.services.room.room_service import RoomService


def totals(db, hostel):
    db.refresh(hostel)
    return hostel.total_rooms, hostel.total_capacity


def test_room_create_and_delete_keep_totals_in_step(db, make_hostel, make_room):
    hostel = make_hostel()
    make_room(number="101", capacity=3)
    second = make_room(number="102", capacity=2)
    assert totals(db, hostel) == (2, 5)

    RoomService(db).delete_room(second.id)
    assert totals(db, hostel) == (1, 3)
    assert db.query(Room).count() == 1


def test_capacity_change_applies_delta(db, make_hostel, make_room):
    hostel = make_hostel()
    room = make_room(capacity=2)

    RoomService(db).update_room(room.id, RoomUpdate(capacity=4, room_type=RoomType.QUAD))
    assert totals(db, hostel) == (1, 4)


def test_moving_room_between_hostels(db, make_hostel, make_room):
    first = make_hostel(name="Boys Hostel A")
    second = make_hostel(name="Boys Hostel B", block="B")
    room = make_room(hostel_name="Boys Hostel A", capacity=2)

    RoomService(db).update_room(room.id, RoomUpdate(hostel_name="Boys Hostel B", capacity=3))

    assert totals(db, first) == (0, 0)
    assert totals(db, second) == (1, 3)


def test_room_for_unknown_hostel_is_counted_when_hostel_appears(db, make_room):
    make_room(hostel_name="Annex", number="1", capacity=4)

    hostel = HostelService(db).create_hostel(HostelCreate(name="Annex", block="C", gender="male"))
    assert totals(db, hostel) == (1, 4)


def test_recompute_corrects_drift(db, make_hostel, make_room):
    hostel = make_hostel()
    make_room(number="101", capacity=2)
    make_room(number="102", capacity=3)
    hostel.total_rooms = 7
    hostel.total_capacity = 1
    db.commit()

    drift = HostelService(db).recompute_aggregates()

    assert drift == [{
        "hostel": "Boys Hostel A",
        "stored_rooms": 7,
        "stored_capacity": 1,
        "actual_rooms": 2,
        "actual_capacity": 5,
    }]
    assert totals(db, hostel) == (2, 5)
    assert HostelService(db).recompute_aggregates() == []


def test_assign_student_to_room(db, make_hostel, make_room, student):
    make_hostel()
    room = make_room(capacity=2)

    RoomService(db).allocate_room(student.id, room.id)
    db.refresh(room)

    assert [u.id for u in room.occupants] == [student.id]
    assert student.room_assigned_at is not None


def test_assigning_same_room_twice_is_a_no_op(db, make_hostel, make_room, student):
    make_hostel()
    room = make_room(capacity=1)
    service = RoomService(db)

    service.allocate_room(student.id, room.id)
    service.allocate_room(student.id, room.id)
    db.refresh(room)

    assert room.occupancy == 1


def test_full_room_rejects_assignment(db, make_hostel, make_room, make_user):
    make_hostel()
    room = make_room(capacity=1)
    service = RoomService(db)
    service.allocate_room(make_user().id, room.id)

    with pytest.raises(CapacityExceededError) as exc:
        service.allocate_room(make_user().id, room.id)

    assert exc.value.message == "Room full"
    db.refresh(room)
    assert room.occupancy == 1


def test_gender_mismatch_rejects_assignment(db, make_hostel, make_room, make_user):
    make_hostel()
    room = make_room(gender=Gender.MALE)
    student = make_user(gender=Gender.FEMALE)

    with pytest.raises(GenderMismatchError):
        RoomService(db).allocate_room(student.id, room.id)

    db.refresh(student)
    assert student.room_id is None


def test_reassignment_moves_student_out_of_previous_room(db, make_hostel, make_room, student):
    make_hostel()
    first = make_room(number="101")
    second = make_room(number="102")
    service = RoomService(db)

    service.allocate_room(student.id, first.id)
    service.allocate_room(student.id, second.id)
    db.refresh(first)
    db.refresh(second)

    assert first.occupancy == 0
    assert [u.id for u in second.occupants] == [student.id]


def test_capacity_cannot_drop_below_occupancy(db, make_hostel, make_room, make_user):
    hostel = make_hostel()
    room = make_room(capacity=2)
    service = RoomService(db)
    service.allocate_room(make_user().id, room.id)
    service.allocate_room(make_user().id, room.id)

    with pytest.raises(ValidationError):
        service.update_room(room.id, RoomUpdate(capacity=1))
    assert totals(db, hostel) == (1, 2)


def test_deleting_room_unassigns_occupants(db, make_hostel, make_room, student):
    make_hostel()
    room = make_room()
    service = RoomService(db)
    service.allocate_room(student.id, room.id)

    service.delete_room(room.id)
    db.refresh(student)

    assert student.room_id is None


def test_hostel_statistics(db, make_hostel, make_room, student):
    hostel = make_hostel()
    room = make_room(number="101", capacity=2, room_type=RoomType.DOUBLE)
    make_room(number="102", capacity=1, room_type=RoomType.SINGLE)
    RoomService(db).allocate_room(student.id, room.id)

    stats = CapacityLedger(db).hostel_statistics(hostel)

    assert stats["total_rooms"] == 2
    assert stats["total_capacity"] == 3
    assert stats["occupied"] == 1
    assert stats["available"] == 2
    assert stats["room_types"]["double"] == {"rooms": 1, "capacity": 2, "occupied": 1}
    assert stats["room_types"]["single"] == {"rooms": 1, "capacity": 1, "occupied": 0}


@pytest.mark.parametrize("field", ["capacity", "hostel_name", "number", "gender"])
def test_room_update_rejects_null_for_required_fields(field):
    with pytest.raises(SchemaValidationError, match="cannot be null"):
        RoomUpdate(**{field: None})


def test_hostel_update_rejects_null_block():
    with pytest.raises(SchemaValidationError, match="block cannot be null"):
        HostelUpdate(block=None)


def test_room_update_allows_null_for_optional_fields():
    update = RoomUpdate(fee_per_year=None, last_maintenance=None)

    assert update.model_dump(exclude_unset=True) == {"fee_per_year": None, "last_maintenance": None}


def test_gender_change_blocked_while_occupied(db, make_hostel, make_room, student):
    hostel = make_hostel()
    room = make_room(capacity=2)
    service = RoomService(db)
    service.allocate_room(student.id, room.id)

    with pytest.raises(GenderMismatchError):
        service.update_room(room.id, RoomUpdate(gender=Gender.FEMALE))

    db.refresh(room)
    assert room.gender == Gender.MALE
    assert [occupant.id for occupant in room.occupants] == [student.id]
    assert totals(db, hostel) == (1, 2)


def test_gender_change_allowed_for_empty_room(db, make_hostel, make_room):
    make_hostel()
    room = make_room()

    updated = RoomService(db).update_room(room.id, RoomUpdate(gender=Gender.FEMALE))

    assert updated.gender == Gender.FEMALE


def test_hostel_with_rooms_cannot_be_deleted(db, make_hostel, make_room):
    hostel = make_hostel()
    make_room()

    with pytest.raises(ConflictError):
        HostelService(db).delete_hostel(hostel.id)
    assert totals(db, hostel) == (1, 2)


def test_deleting_empty_hostel_detaches_its_people(db, make_hostel, make_room, make_user):
    hostel = make_hostel()
    room = make_room()
    warden = make_user(role=UserRole.WARDEN, assigned_hostel="Boys Hostel A", assigned_floor=1)
    other = make_user(assigned_hostel="Girls Hostel B")
    service = HostelService(db)
    RoomService(db).delete_room(room.id)
    hostel_id = hostel.id

    service.delete_hostel(hostel_id)

    with pytest.raises(ResourceNotFoundError):
        service.get_hostel(hostel_id)
    db.refresh(warden)
    db.refresh(other)
    assert (warden.assigned_hostel, warden.assigned_floor) == (None, None)
    assert other.assigned_hostel == "Girls Hostel B"

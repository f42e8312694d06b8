import pytest

from slots.models import Room, Slot
from slots.workflows import create_slot
from tests.conftest import OTHER_STAFF_ID, STAFF_ID, at, make_slot

pytestmark = pytest.mark.usefixtures('seed')


def messages_of(result):
    return [v.message for v in result.violations]


def test_create_slot_with_valid_parameters():
    result = create_slot('C', STAFF_ID, at(8))

    assert result.ok
    assert result.message == "Successfully created slot at room C at 01-01-2019 8:00"
    slot = Slot.objects.get(room_id='C', start_time=at(8))
    assert slot.student_id is None
    assert slot.staff_id == STAFF_ID


def test_create_slot_with_non_existent_room():
    result = create_slot('Z', STAFF_ID, at(8))

    assert result.violations == [('RoomId', "Room Z does not exist.")]
    assert not Slot.objects.filter(room_id='Z').exists()


def test_create_slot_over_maximum_room_booking():
    make_slot('A', 12)
    make_slot('A', 14)

    result = create_slot('A', STAFF_ID, at(9))

    assert f"Room A has reached a maximum booking of {Room.MAX_ROOM_BOOKING_PER_DAY} per day." in messages_of(result)
    assert not Slot.objects.filter(room_id='A', start_time=at(9)).exists()


def test_create_slot_with_staff_over_maximum_booking():
    make_slot('A', 12)
    make_slot('A', 14)
    make_slot('B', 10)
    make_slot('B', 9)

    result = create_slot('D', STAFF_ID, at(13))

    assert ('StartTime', "Staff e12345 has a maximum of 4 bookings at 01-01-2019.") in result.violations
    assert not Slot.objects.filter(room_id='D', start_time=at(13)).exists()


def test_create_slot_already_taken_by_other_staff():
    make_slot('A', 12, staff_id=OTHER_STAFF_ID)

    result = create_slot('A', STAFF_ID, at(12))

    assert "Staff e54321 has already taken slot at room A 01-01-2019 12:00." in messages_of(result)
    assert not Slot.objects.filter(room_id='A', start_time=at(12), staff_id=STAFF_ID).exists()


def test_create_slot_that_already_exists():
    make_slot('A', 12)

    result = create_slot('A', STAFF_ID, at(12))

    assert "Slot at room A 01-01-2019 12:00 already exists." in messages_of(result)
    assert Slot.objects.filter(room_id='A').count() == 1


def test_create_slot_when_staff_already_created_slot_at_that_time():
    make_slot('A', 13)

    result = create_slot('D', STAFF_ID, at(13))

    assert "You have already created a slot at room A 01-01-2019 13:00." in messages_of(result)
    assert not Slot.objects.filter(room_id='D', start_time=at(13)).exists()


def test_create_slot_collects_every_violation_in_order():
    make_slot('A', 12)
    make_slot('A', 14)
    make_slot('B', 10)
    make_slot('B', 9)

    result = create_slot('A', STAFF_ID, at(12))

    assert [v.field for v in result.violations] == ['RoomId', 'StartTime', 'RoomId', 'RoomId']
    assert messages_of(result) == [
        "Room A has reached a maximum booking of 2 per day.",
        "Staff e12345 has a maximum of 4 bookings at 01-01-2019.",
        "Slot at room A 01-01-2019 12:00 already exists.",
        "You have already created a slot at room A 01-01-2019 12:00.",
    ]


def test_create_slot_by_unknown_staff():
    result = create_slot('C', 'e99999', at(8))

    assert result.violations == [('StaffId', "Staff e99999 does not exist.")]
    assert not Slot.objects.exists()


def test_failed_create_is_repeatable_and_has_no_side_effects():
    make_slot('A', 12)
    make_slot('A', 14)
    before = list(Slot.objects.values_list('room_id', 'start_time', 'staff_id', 'student_id'))

    first = create_slot('A', STAFF_ID, at(9))
    second = create_slot('A', STAFF_ID, at(9))

    assert first.violations == second.violations
    assert list(Slot.objects.values_list('room_id', 'start_time', 'staff_id', 'student_id')) == before

from datetime import datetime

from slots import rules
from slots.rules import BookingSnapshot, SlotRecord, Violation


def at(hour, day=1):
    return datetime(2019, 1, day, hour, 0)


def snapshot(*slots, rooms=('A', 'B', 'C', 'D'), students=('s1234567', 's3604367')):
    return BookingSnapshot.build(room_ids=rooms, slots=slots, student_ids=students)


def test_room_exists():
    snap = snapshot()
    assert rules.room_exists(snap, 'A')
    assert not rules.room_exists(snap, 'Z')


def test_room_available_counts_only_same_room_and_day():
    snap = snapshot(
        SlotRecord('A', 'e12345', at(9)),
        SlotRecord('A', 'e54321', at(10, day=2)),
        SlotRecord('B', 'e12345', at(11)),
    )
    assert rules.room_available(snap, 'A', at(14))

    full = snapshot(SlotRecord('A', 'e12345', at(9)), SlotRecord('A', 'e54321', at(10)))
    assert not rules.room_available(full, 'A', at(14))
    assert rules.room_available(full, 'A', at(14, day=2))


def test_staff_daily_slot_count():
    snap = snapshot(
        SlotRecord('A', 'e12345', at(9)),
        SlotRecord('B', 'e12345', at(10)),
        SlotRecord('C', 'e54321', at(11)),
        SlotRecord('C', 'e12345', at(11, day=3)),
    )
    assert rules.get_staff_daily_slot_count(snap, 'e12345', at(15)) == 2
    assert rules.get_staff_daily_slot_count(snap, 'e54321', at(15)) == 1
    assert rules.get_staff_daily_slot_count(snap, 'e99999', at(15)) == 0


def test_get_already_taken_slot_ignores_own_slots():
    other = SlotRecord('A', 'e54321', at(12))
    snap = snapshot(other)
    assert rules.get_already_taken_slot(snap, 'A', 'e12345', at(12)) == other
    assert rules.get_already_taken_slot(snap, 'A', 'e54321', at(12)) is None
    assert rules.get_already_taken_slot(snap, 'B', 'e12345', at(12)) is None


def test_get_staff_slot_finds_any_room():
    own = SlotRecord('A', 'e12345', at(13))
    snap = snapshot(own)
    assert rules.get_staff_slot(snap, 'e12345', at(13)) == own
    assert rules.get_staff_slot(snap, 'e12345', at(14)) is None


def test_slot_lookups():
    booked = SlotRecord('A', 'e12345', at(13), student_id='s1234567')
    free = SlotRecord('B', 'e12345', at(14))
    snap = snapshot(booked, free)

    assert rules.get_slot(snap, 'A', at(13)) == booked
    assert rules.get_slot(snap, 'A', at(14)) is None
    assert rules.slot_exists(snap, 'B', at(14))
    assert rules.slot_booked_by_student(snap, 'A', at(13))
    assert not rules.slot_booked_by_student(snap, 'B', at(14))
    assert not rules.slot_booked_by_student(snap, 'C', at(14))


def test_student_has_booking_on_day():
    snap = snapshot(SlotRecord('B', 'e12345', at(13), student_id='s1234567'), SlotRecord('A', 'e12345', at(9)))
    assert rules.student_has_booking_on_day(snap, 's1234567', at(8))
    assert not rules.student_has_booking_on_day(snap, 's1234567', at(8, day=2))
    assert not rules.student_has_booking_on_day(snap, 's3604367', at(8))
    # an empty student id never matches unbooked slots
    assert not rules.student_has_booking_on_day(snap, None, at(9))


def test_checks_return_none_when_ok():
    snap = snapshot()
    assert rules.check_room_exists(snap, 'A') is None
    assert rules.check_room_capacity(snap, 'A', at(9)) is None
    assert rules.check_staff_daily_quota(snap, 'e12345', at(9)) is None
    assert rules.check_slot_not_exists(snap, 'A', at(9)) is None


def test_check_messages():
    snap = snapshot(
        SlotRecord('A', 'e54321', at(12)),
        SlotRecord('B', 'e12345', at(9), student_id='s3604367'),
    )

    assert rules.check_room_exists(snap, 'Z') == Violation('RoomId', "Room Z does not exist.")
    assert rules.check_slot_not_taken(snap, 'A', 'e12345', at(12)) == Violation(
        'RoomId', "Staff e54321 has already taken slot at room A 01-01-2019 12:00.")
    assert rules.check_staff_not_double_booked(snap, 'e12345', at(9)) == Violation(
        'RoomId', "You have already created a slot at room B 01-01-2019 9:00.")
    assert rules.check_not_booked_by_other(snap, 'B', at(9), 's1234567') == Violation(
        'StudentId', "Student s3604367 has already booked slot in room B at 01-01-2019 09:00")
    assert rules.check_not_booked_by_other(snap, 'B', at(9), 's3604367') is None
    assert rules.check_slot_not_booked(snap, 'B', at(9)) == Violation(
        'StudentId', "Cannot remove slot as a student has been booked into it.")
    assert rules.check_slot_owner(snap, 'A', at(12), 'e12345') == Violation(
        'StaffId', "Only staff e54321 who created this slot can remove it.")


def test_time_formats():
    assert rules.format_date(at(8)) == '01-01-2019'
    assert rules.format_short_time(at(8)) == '01-01-2019 8:00'
    assert rules.format_long_time(at(8)) == '01-01-2019 08:00'

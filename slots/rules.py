"""
Booking rules evaluated against a read-only snapshot of rooms, slots and students.

Nothing in this module talks to the database: the workflows load a
``BookingSnapshot`` first and every rule below only answers one question about it.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, NamedTuple, Optional, Tuple

from accounts.models import Account
from slots.models import Room


class Violation(NamedTuple):
    """A business rule failure keyed by the form field it belongs to."""
    field: str
    message: str


@dataclass(frozen=True)
class SlotRecord:
    room_id: str
    staff_id: str
    start_time: datetime
    student_id: Optional[str] = None

    @property
    def day(self) -> date:
        return self.start_time.date()

    @property
    def is_booked(self) -> bool:
        return bool(self.student_id)

    @classmethod
    def from_model(cls, slot) -> 'SlotRecord':
        return cls(
            room_id=slot.room_id,
            staff_id=slot.staff_id,
            start_time=slot.start_time,
            student_id=slot.student_id,
        )


@dataclass(frozen=True)
class BookingSnapshot:
    room_ids: frozenset = frozenset()
    slots: Tuple[SlotRecord, ...] = ()
    student_ids: frozenset = frozenset()

    @classmethod
    def build(cls, room_ids: Iterable[str] = (), slots: Iterable[SlotRecord] = (),
              student_ids: Iterable[str] = ()) -> 'BookingSnapshot':
        return cls(
            room_ids=frozenset(room_ids),
            slots=tuple(slots),
            student_ids=frozenset(student_ids),
        )


# ----------------------------------------------------------------------
# 1. Rooms
# ----------------------------------------------------------------------

def room_exists(snapshot: BookingSnapshot, room_id: str) -> bool:
    return room_id in snapshot.room_ids


def room_available(snapshot: BookingSnapshot, room_id: str, start_time: datetime,
                   max_per_day: int = Room.MAX_ROOM_BOOKING_PER_DAY) -> bool:
    """False once the room already holds ``max_per_day`` slots on that calendar day."""
    day = start_time.date()
    taken = sum(1 for s in snapshot.slots if s.room_id == room_id and s.day == day)
    return taken < max_per_day


# ----------------------------------------------------------------------
# 2. Staff
# ----------------------------------------------------------------------

def get_staff_daily_slot_count(snapshot: BookingSnapshot, staff_id: str, start_time: datetime) -> int:
    day = start_time.date()
    return sum(1 for s in snapshot.slots if s.staff_id == staff_id and s.day == day)


def get_already_taken_slot(snapshot: BookingSnapshot, room_id: str, staff_id: str,
                           start_time: datetime) -> Optional[SlotRecord]:
    """Slot at the same room and time that another staff member already took."""
    return next(
        (s for s in snapshot.slots
         if s.room_id == room_id and s.start_time == start_time and s.staff_id != staff_id),
        None,
    )


def get_staff_slot(snapshot: BookingSnapshot, staff_id: str, start_time: datetime) -> Optional[SlotRecord]:
    """Slot this staff member already created at exactly that time, in any room."""
    return next(
        (s for s in snapshot.slots if s.staff_id == staff_id and s.start_time == start_time),
        None,
    )


# ----------------------------------------------------------------------
# 3. Slots
# ----------------------------------------------------------------------

def get_slot(snapshot: BookingSnapshot, room_id: str, start_time: datetime) -> Optional[SlotRecord]:
    return next(
        (s for s in snapshot.slots if s.room_id == room_id and s.start_time == start_time),
        None,
    )


def slot_exists(snapshot: BookingSnapshot, room_id: str, start_time: datetime) -> bool:
    return get_slot(snapshot, room_id, start_time) is not None


def slot_booked_by_student(snapshot: BookingSnapshot, room_id: str, start_time: datetime) -> bool:
    slot = get_slot(snapshot, room_id, start_time)
    return slot is not None and slot.is_booked


# ----------------------------------------------------------------------
# 4. Students
# ----------------------------------------------------------------------

def student_exists(snapshot: BookingSnapshot, student_id: str) -> bool:
    return student_id in snapshot.student_ids


def student_has_booking_on_day(snapshot: BookingSnapshot, student_id: str, start_time: datetime) -> bool:
    day = start_time.date()
    return bool(student_id) and any(s.student_id == student_id and s.day == day for s in snapshot.slots)


# ----------------------------------------------------------------------
# 5. Checks (typed verdicts used by the workflows)
# ----------------------------------------------------------------------

DATE_FORMAT = '%d-%m-%Y'


def format_date(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)


def format_short_time(value: datetime) -> str:
    """dd-MM-yyyy H:mm (hour without leading zero)"""
    return f'{value:%d-%m-%Y} {value.hour}:{value:%M}'


def format_long_time(value: datetime) -> str:
    """dd-MM-yyyy HH:mm"""
    return value.strftime('%d-%m-%Y %H:%M')


def check_room_exists(snapshot, room_id) -> Optional[Violation]:
    if not room_exists(snapshot, room_id):
        return Violation('RoomId', f"Room {room_id} does not exist.")
    return None


def check_room_capacity(snapshot, room_id, start_time) -> Optional[Violation]:
    if not room_available(snapshot, room_id, start_time):
        return Violation(
            'RoomId',
            f"Room {room_id} has reached a maximum booking of {Room.MAX_ROOM_BOOKING_PER_DAY} per day.",
        )
    return None


def check_staff_daily_quota(snapshot, staff_id, start_time) -> Optional[Violation]:
    if get_staff_daily_slot_count(snapshot, staff_id, start_time) >= Account.MAX_BOOKING_PER_DAY:
        return Violation(
            'StartTime',
            f"Staff {staff_id} has a maximum of {Account.MAX_BOOKING_PER_DAY} bookings at {format_date(start_time)}.",
        )
    return None


def check_slot_not_taken(snapshot, room_id, staff_id, start_time) -> Optional[Violation]:
    taken = get_already_taken_slot(snapshot, room_id, staff_id, start_time)
    if taken is not None:
        return Violation(
            'RoomId',
            f"Staff {taken.staff_id} has already taken slot at room {room_id} {format_short_time(start_time)}.",
        )
    return None


def check_slot_not_exists(snapshot, room_id, start_time) -> Optional[Violation]:
    if slot_exists(snapshot, room_id, start_time):
        return Violation('RoomId', f"Slot at room {room_id} {format_short_time(start_time)} already exists.")
    return None


def check_staff_not_double_booked(snapshot, staff_id, start_time) -> Optional[Violation]:
    existing = get_staff_slot(snapshot, staff_id, start_time)
    if existing is not None:
        return Violation(
            'RoomId',
            f"You have already created a slot at room {existing.room_id} {format_short_time(existing.start_time)}.",
        )
    return None


def check_student_daily_quota(snapshot, student_id, start_time) -> Optional[Violation]:
    if student_has_booking_on_day(snapshot, student_id, start_time):
        return Violation(
            'StudentId',
            f"Student {student_id} has reached their maximum bookings for this day ({format_date(start_time)}).",
        )
    return None


def check_slot_exists_for_booking(snapshot, room_id, start_time) -> Optional[Violation]:
    if not slot_exists(snapshot, room_id, start_time):
        return Violation('StudentId', f"Slot does not exist in room {room_id} at {format_long_time(start_time)}")
    return None


def check_not_booked_by_other(snapshot, room_id, start_time, student_id) -> Optional[Violation]:
    slot = get_slot(snapshot, room_id, start_time)
    if slot is not None and slot.is_booked and slot.student_id != student_id:
        return Violation(
            'StudentId',
            f"Student {slot.student_id} has already booked slot in room {room_id} at {format_long_time(start_time)}",
        )
    return None


def check_student_exists(snapshot, student_id) -> Optional[Violation]:
    if not student_exists(snapshot, student_id):
        return Violation('StudentId', f"Student {student_id} does not exist.")
    return None


def check_slot_exists_for_cancel(snapshot, room_id, start_time) -> Optional[Violation]:
    if not slot_exists(snapshot, room_id, start_time):
        return Violation('StartTime', f"No slot exist in {room_id} at {format_long_time(start_time)}")
    return None


def check_slot_has_student(snapshot, room_id, start_time) -> Optional[Violation]:
    slot = get_slot(snapshot, room_id, start_time)
    if slot is not None and not slot.is_booked:
        return Violation('StudentId', "No students booked into this slot")
    return None


def check_same_student(snapshot, room_id, start_time, student_id) -> Optional[Violation]:
    slot = get_slot(snapshot, room_id, start_time)
    if slot is None or slot.student_id != student_id:
        return Violation('StudentId', "The student ID for this slot does not match, cannot cancel this booking.")
    return None


def check_slot_not_booked(snapshot, room_id, start_time) -> Optional[Violation]:
    if slot_booked_by_student(snapshot, room_id, start_time):
        return Violation('StudentId', "Cannot remove slot as a student has been booked into it.")
    return None


def check_slot_exists_for_removal(snapshot, room_id, start_time) -> Optional[Violation]:
    if not slot_exists(snapshot, room_id, start_time):
        return Violation('', f"Slot at room {room_id} {format_short_time(start_time)} does not exist.")
    return None


def check_slot_owner(snapshot, room_id, start_time, staff_id) -> Optional[Violation]:
    slot = get_slot(snapshot, room_id, start_time)
    if slot is not None and slot.staff_id != staff_id:
        return Violation('StaffId', f"Only staff {slot.staff_id} who created this slot can remove it.")
    return None

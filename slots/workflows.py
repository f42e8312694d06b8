"""
Create, book, cancel and remove workflows for slots.

Every workflow runs all of its checks against a snapshot, collects the
violations in order and only writes to the database when the list is empty.
The caller identity (staff or student id) is always passed in explicitly.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from django.db import IntegrityError, transaction
from django.db.models import F

from accounts.models import Account
from slots import rules
from slots.models import Room, Slot
from slots.rules import BookingSnapshot, SlotRecord, Violation

logger = logging.getLogger(__name__)


@dataclass
class WorkflowResult:
    slot: Optional[Slot] = None
    violations: List[Violation] = field(default_factory=list)
    message: str = ''

    @property
    def ok(self) -> bool:
        return not self.violations

    def errors_by_field(self) -> Dict[str, List[str]]:
        errors: Dict[str, List[str]] = {}
        for violation in self.violations:
            errors.setdefault(violation.field, []).append(violation.message)
        return errors


def load_snapshot(room_id: str, start_time: datetime, student_id: Optional[str] = None) -> BookingSnapshot:
    """Rooms, students and every slot on the same calendar day as ``start_time``."""
    day_slots = Slot.objects.filter(start_time__date=start_time.date())
    student_ids = []
    if student_id:
        student_ids = Account.students().filter(account_id=student_id).values_list('account_id', flat=True)
    return BookingSnapshot.build(
        room_ids=Room.objects.filter(room_id=room_id).values_list('room_id', flat=True),
        slots=(SlotRecord.from_model(s) for s in day_slots),
        student_ids=student_ids,
    )


def _collect(*verdicts) -> List[Violation]:
    return [v for v in verdicts if v is not None]


def _conflict(room_id, start_time) -> Violation:
    return Violation(
        'StartTime',
        f"Slot at room {room_id} {rules.format_short_time(start_time)} was modified by another request, please try again.",
    )


def _lock_slot(room_id, start_time) -> Optional[Slot]:
    return Slot.objects.select_for_update().filter(room_id=room_id, start_time=start_time).first()


def _reject(action, violations) -> WorkflowResult:
    logger.info("%s rejected with %d violation(s): %s", action, len(violations),
                '; '.join(v.message for v in violations))
    return WorkflowResult(violations=violations)


# ----------------------------------------------------------------------
# 1. Create (staff)
# ----------------------------------------------------------------------

def validate_create(snapshot: BookingSnapshot, room_id: str, staff_id: str, start_time: datetime) -> List[Violation]:
    room_violation = rules.check_room_exists(snapshot, room_id)
    return _collect(
        room_violation,
        None if room_violation else rules.check_room_capacity(snapshot, room_id, start_time),
        rules.check_staff_daily_quota(snapshot, staff_id, start_time),
        rules.check_slot_not_taken(snapshot, room_id, staff_id, start_time),
        rules.check_slot_not_exists(snapshot, room_id, start_time),
        rules.check_staff_not_double_booked(snapshot, staff_id, start_time),
    )


def create_slot(room_id: str, staff_id: str, start_time: datetime) -> WorkflowResult:
    with transaction.atomic():
        snapshot = load_snapshot(room_id, start_time)
        violations = validate_create(snapshot, room_id, staff_id, start_time)
        if not Account.staff().filter(account_id=staff_id).exists():
            violations.append(Violation('StaffId', f"Staff {staff_id} does not exist."))
        if violations:
            return _reject('Create', violations)

        try:
            # Savepoint so the unique constraint can fail without breaking the outer transaction
            with transaction.atomic():
                slot = Slot.objects.create(room_id=room_id, staff_id=staff_id, start_time=start_time)
        except IntegrityError:
            logger.warning("Create lost the race for room %s at %s", room_id, start_time)
            return WorkflowResult(violations=[
                Violation('RoomId', f"Slot at room {room_id} {rules.format_short_time(start_time)} already exists.")
            ])

    logger.info("Staff %s created slot %s", staff_id, slot)
    return WorkflowResult(
        slot=slot,
        message=f"Successfully created slot at room {room_id} at {rules.format_short_time(start_time)}",
    )


# ----------------------------------------------------------------------
# 2. Book (student)
# ----------------------------------------------------------------------

def validate_book(snapshot: BookingSnapshot, room_id: str, start_time: datetime, student_id: str) -> List[Violation]:
    violations = _collect(
        rules.check_student_daily_quota(snapshot, student_id, start_time),
        rules.check_room_exists(snapshot, room_id),
        rules.check_slot_exists_for_booking(snapshot, room_id, start_time),
        rules.check_not_booked_by_other(snapshot, room_id, start_time, student_id),
    )
    if not rules.student_exists(snapshot, student_id):
        violations.append(Violation('StudentId', f"Student {student_id} does not exist."))
    return violations


def book_slot(room_id: str, start_time: datetime, student_id: str) -> WorkflowResult:
    with transaction.atomic():
        locked = _lock_slot(room_id, start_time)
        snapshot = load_snapshot(room_id, start_time, student_id)
        violations = validate_book(snapshot, room_id, start_time, student_id)
        if not violations and locked is None:
            # the row appeared after the lock query, nothing is locked to write to
            violations = [_conflict(room_id, start_time)]
        if violations:
            return _reject('Book', violations)

        updated = Slot.objects.filter(pk=locked.pk, version=locked.version).update(
            student_id=student_id, version=F('version') + 1
        )
        if not updated:
            logger.warning("Book conflict on slot %s", locked)
            return WorkflowResult(violations=[_conflict(room_id, start_time)])
        locked.refresh_from_db()

    logger.info("Student %s booked slot %s", student_id, locked)
    return WorkflowResult(
        slot=locked,
        message=f"Successfully booked slot at room {room_id} at {rules.format_long_time(start_time)}",
    )


# ----------------------------------------------------------------------
# 3. Cancel (student)
# ----------------------------------------------------------------------

def validate_cancel(snapshot: BookingSnapshot, room_id: str, start_time: datetime, student_id: str) -> List[Violation]:
    return _collect(
        rules.check_room_exists(snapshot, room_id),
        rules.check_student_exists(snapshot, student_id),
        rules.check_slot_exists_for_cancel(snapshot, room_id, start_time),
        rules.check_slot_has_student(snapshot, room_id, start_time),
        rules.check_same_student(snapshot, room_id, start_time, student_id),
    )


def cancel_slot(room_id: str, start_time: datetime, student_id: str) -> WorkflowResult:
    with transaction.atomic():
        locked = _lock_slot(room_id, start_time)
        snapshot = load_snapshot(room_id, start_time, student_id)
        violations = validate_cancel(snapshot, room_id, start_time, student_id)
        if not violations and locked is None:
            # the row appeared after the lock query, nothing is locked to write to
            violations = [_conflict(room_id, start_time)]
        if violations:
            return _reject('Cancel', violations)

        updated = Slot.objects.filter(pk=locked.pk, version=locked.version).update(
            student_id=None, version=F('version') + 1
        )
        if not updated:
            logger.warning("Cancel conflict on slot %s", locked)
            return WorkflowResult(violations=[_conflict(room_id, start_time)])
        locked.refresh_from_db()

    logger.info("Student %s cancelled slot %s", student_id, locked)
    return WorkflowResult(
        slot=locked,
        message=f"Successfully cancelled booking at room {room_id} at {rules.format_long_time(start_time)}",
    )


# ----------------------------------------------------------------------
# 4. Remove (staff)
# ----------------------------------------------------------------------

def validate_remove(snapshot: BookingSnapshot, room_id: str, start_time: datetime,
                    staff_id: Optional[str] = None) -> List[Violation]:
    return _collect(
        rules.check_slot_not_booked(snapshot, room_id, start_time),
        rules.check_slot_exists_for_removal(snapshot, room_id, start_time),
        rules.check_slot_owner(snapshot, room_id, start_time, staff_id) if staff_id else None,
    )


def remove_slot(room_id: str, start_time: datetime, staff_id: Optional[str] = None) -> WorkflowResult:
    """Delete an unbooked slot. ``staff_id`` is the caller and must own the slot when given."""
    with transaction.atomic():
        locked = _lock_slot(room_id, start_time)
        snapshot = load_snapshot(room_id, start_time)
        violations = validate_remove(snapshot, room_id, start_time, staff_id)
        if not violations and locked is None:
            # the row appeared after the lock query, nothing is locked to write to
            violations = [_conflict(room_id, start_time)]
        if violations:
            return _reject('Remove', violations)

        deleted, _ = Slot.objects.filter(pk=locked.pk, version=locked.version).delete()
        if not deleted:
            logger.warning("Remove conflict on slot %s", locked)
            return WorkflowResult(violations=[_conflict(room_id, start_time)])

    logger.info("Slot %s removed by %s", locked, staff_id or 'api')
    return WorkflowResult(
        slot=locked,
        message=f"Successfully removed slot at room {room_id} at {rules.format_short_time(start_time)}",
    )

from django.db import models
from accounts.models import Account # Slots point to staff and student accounts

class Room(models.Model):
    # 1. Room entity: human assigned id ("A", "B", ...) used as the primary key
    room_id = models.CharField(max_length=10, primary_key=True)

    # Maximum number of slots a room can hold per day
    MAX_ROOM_BOOKING_PER_DAY = 2

    class Meta:
        db_table = 'slots_room'
        verbose_name = 'Room'
        verbose_name_plural = 'Rooms'
        ordering = ['room_id']

    def __str__(self):
        return self.room_id

class Slot(models.Model):
    # 2. Slot entity (id is automatic, the natural key is room + start_time)
    room = models.ForeignKey(
        Room,
        on_delete=models.CASCADE,
        db_column='room_id'
    )

    # FK to the staff account that created the slot
    staff = models.ForeignKey(
        Account,
        on_delete=models.CASCADE,
        db_column='staff_id',
        related_name='created_slots',
        limit_choices_to={'role': Account.STAFF}
    )

    # FK to the student account that booked the slot (empty while unbooked)
    student = models.ForeignKey(
        Account,
        on_delete=models.SET_NULL,
        db_column='student_id',
        related_name='booked_slots',
        limit_choices_to={'role': Account.STUDENT},
        null=True, blank=True
    )

    start_time = models.DateTimeField()

    # Bumped on every update, the commit step checks it to detect lost updates
    version = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'slots_slot'
        verbose_name = 'Slot'
        verbose_name_plural = 'Slots'
        ordering = ['start_time', 'room']
        constraints = [
            models.UniqueConstraint(fields=['room', 'start_time'], name='unique_room_start_time'),
        ]

    def __str__(self):
        return f'{self.room_id} {self.start_time:%d-%m-%Y %H:%M}'

    @property
    def is_booked(self):
        return self.student_id is not None

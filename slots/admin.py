from django.contrib import admin
from .models import Room, Slot

# ----------------------------------------------------------------------
# 1. Room administration
# ----------------------------------------------------------------------

@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ('room_id', 'slots_count')
    search_fields = ('room_id',)

    def slots_count(self, obj):
        return obj.slot_set.count()
    slots_count.short_description = 'Slots'


# ----------------------------------------------------------------------
# 2. Slot administration
# ----------------------------------------------------------------------

@admin.register(Slot)
class SlotAdmin(admin.ModelAdmin):
    list_display = (
        'room',
        'start_time',
        'staff_display',
        'student_display',
        'is_booked',
    )
    list_filter = ('room', 'start_time')
    search_fields = (
        'room__room_id',
        'staff__account_id',
        'student__account_id',
    )
    date_hierarchy = 'start_time'
    readonly_fields = ('version',)

    fieldsets = (
        (None, {
            'fields': ('room', 'start_time')
        }),
        ('Booking', {
            'fields': ('staff', 'student', 'version')
        }),
    )

    def staff_display(self, obj):
        """Staff member that created the slot."""
        return f"{obj.staff.account_id} ({obj.staff.full_name})"
    staff_display.short_description = 'Staff'

    def student_display(self, obj):
        """Student that booked the slot, if any."""
        if obj.student is None:
            return '-'
        return f"{obj.student.account_id} ({obj.student.full_name})"
    student_display.short_description = 'Student'

    @admin.display(boolean=True, description='Booked')
    def is_booked(self, obj):
        return obj.is_booked

from django import forms
from django.core.exceptions import ValidationError

from slots.models import Room

DATETIME_INPUT_FORMATS = ['%Y-%m-%dT%H:%M', '%Y-%m-%d %H:%M', '%Y-%m-%dT%H:%M:%S', '%Y-%m-%d %H:%M:%S']

# Form field names used for each violation key returned by the workflows
VIOLATION_FIELDS = {
    'RoomId': 'room_id',
    'StartTime': 'start_time',
    'StudentId': 'student_id',
    'StaffId': None,
    '': None,
}


class SlotKeyForm(forms.Form):
    """Room + start time, the natural key of a slot."""
    room_id = forms.CharField(
        max_length=10,
        label='Room',
        error_messages={'required': "The Room field is required."},
    )
    start_time = forms.DateTimeField(
        input_formats=DATETIME_INPUT_FORMATS,
        label='Start Time',
        error_messages={'required': "The Start Time field is required."},
    )

    def clean_room_id(self):
        return self.cleaned_data['room_id'].strip()

    def clean_start_time(self):
        start_time = self.cleaned_data['start_time']
        if start_time.minute or start_time.second or start_time.microsecond:
            raise ValidationError("Slots start on the hour.")
        return start_time

    def add_violations(self, violations):
        """Attach workflow violations to the form fields they belong to."""
        for violation in violations:
            field_name = VIOLATION_FIELDS.get(violation.field)
            if field_name is not None and field_name not in self.fields:
                field_name = None
            self.add_error(field_name, violation.message)


class CreateSlotForm(SlotKeyForm):
    pass


class BookSlotForm(SlotKeyForm):
    pass


class RemoveSlotForm(SlotKeyForm):
    pass


class CancelSlotForm(SlotKeyForm):
    student_id = forms.CharField(
        max_length=20,
        label='Student ID',
        error_messages={'required': "The Student ID field is required."},
    )


class CreateRoomForm(forms.ModelForm):
    class Meta:
        model = Room
        fields = ['room_id']
        error_messages = {
            'room_id': {'required': "The Name field is required."},
        }

    def clean_room_id(self):
        room_id = self.cleaned_data['room_id'].strip()
        if Room.objects.filter(room_id__iexact=room_id).exists():
            raise ValidationError(f"Room {room_id} already exists.")
        return room_id


class UploadSlotsForm(forms.Form):
    slots_file = forms.FileField(label='Slots file (.csv or .xlsx)')

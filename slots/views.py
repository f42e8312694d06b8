# slots/views.py
from datetime import date

from django.contrib import messages
from django.http import HttpResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from accounts.views import check_staff_auth, check_student_auth
from .exceptions import ExportError, UploadError
from .exports import export_slots_excel, export_slots_pdf
from .forms import BookSlotForm, CancelSlotForm, CreateRoomForm, CreateSlotForm, RemoveSlotForm, UploadSlotsForm
from .models import Room, Slot
from .uploads import upload_slots
from .workflows import book_slot, cancel_slot, create_slot, remove_slot


def _slots():
    return Slot.objects.select_related('room', 'staff', 'student')

# ----------------------------------------------------------------------
# 1. STAFF VIEWS
# ----------------------------------------------------------------------

def staff_index(request):
    staff_obj, response = check_staff_auth(request)
    if response:
        return response

    context = {
        'account': staff_obj,
        'slots': _slots(),
        'my_slots_count': Slot.objects.filter(staff=staff_obj).count(),
        'remove_form': RemoveSlotForm(),
    }
    return render(request, 'slots/staff_index.html', context)


def create(request):
    staff_obj, response = check_staff_auth(request)
    if response:
        return response

    form = CreateSlotForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        result = create_slot(
            form.cleaned_data['room_id'],
            staff_obj.account_id,
            form.cleaned_data['start_time'],
        )
        if result.ok:
            messages.success(request, result.message)
            return redirect('slots:staff_index')
        form.add_violations(result.violations)

    return render(request, 'slots/create.html', {
        'form': form,
        'slots': _slots(),
        'rooms': Room.objects.all(),
    })


@require_POST
def remove(request):
    staff_obj, response = check_staff_auth(request)
    if response:
        return response

    form = RemoveSlotForm(request.POST)
    if form.is_valid():
        result = remove_slot(
            form.cleaned_data['room_id'],
            form.cleaned_data['start_time'],
            staff_id=staff_obj.account_id,
        )
        if result.ok:
            messages.success(request, result.message)
            return redirect('slots:staff_index')
        form.add_violations(result.violations)

    return render(request, 'slots/remove.html', {'form': form})


def create_room(request):
    staff_obj, response = check_staff_auth(request)
    if response:
        return response

    form = CreateRoomForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        room = form.save()
        messages.success(request, f"Room {room.room_id} created.")
        return redirect('slots:create')

    return render(request, 'slots/create_room.html', {'form': form, 'rooms': Room.objects.all()})


def upload(request):
    staff_obj, response = check_staff_auth(request)
    if response:
        return response

    form = UploadSlotsForm(request.POST or None, request.FILES or None)
    if request.method == 'POST' and form.is_valid():
        try:
            created, errors = upload_slots(form.cleaned_data['slots_file'], staff_obj.account_id)
        except UploadError as e:
            messages.error(request, str(e))
            return render(request, 'slots/upload.html', {'form': form})

        if errors:
            messages.warning(
                request,
                f"Upload finished with {created} slot(s) created and {len(errors)} row(s) rejected. "
                + "Details: " + "; ".join(errors[:3]) + ("..." if len(errors) > 3 else ""),
            )
        else:
            messages.success(request, f"Upload finished, {created} slot(s) created.")
        return redirect('slots:staff_index')

    return render(request, 'slots/upload.html', {'form': form})


def export_excel(request):
    staff_obj, response = check_staff_auth(request)
    if response:
        return response

    content = export_slots_excel(_slots().filter(staff=staff_obj))
    return HttpResponse(
        content,
        content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        headers={'Content-Disposition': f'attachment; filename="slots_{staff_obj.account_id}.xlsx"'},
    )


def export_pdf(request):
    staff_obj, response = check_staff_auth(request)
    if response:
        return response

    try:
        content = export_slots_pdf(
            _slots().filter(staff=staff_obj),
            title=f"Slots created by {staff_obj.full_name} ({staff_obj.account_id})",
            generated_on=date.today(),
        )
    except ExportError as e:
        messages.error(request, str(e))
        return redirect('slots:staff_index')

    response = HttpResponse(content, content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="slots_{staff_obj.account_id}.pdf"'
    return response

# ----------------------------------------------------------------------
# 2. STUDENT VIEWS
# ----------------------------------------------------------------------

def student_index(request):
    student_obj, response = check_student_auth(request)
    if response:
        return response

    return render(request, 'slots/student_index.html', {
        'account': student_obj,
        'slots': _slots(),
        'my_bookings': _slots().filter(student=student_obj),
    })


def book(request):
    student_obj, response = check_student_auth(request)
    if response:
        return response

    form = BookSlotForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        # The student always comes from the session, never from the submitted data
        result = book_slot(
            form.cleaned_data['room_id'],
            form.cleaned_data['start_time'],
            student_obj.account_id,
        )
        if result.ok:
            messages.success(request, result.message)
            return redirect('slots:student_index')
        form.add_violations(result.violations)

    return render(request, 'slots/book.html', {
        'form': form,
        'slots': _slots().filter(student__isnull=True),
        'rooms': Room.objects.all(),
    })


def cancel(request):
    student_obj, response = check_student_auth(request)
    if response:
        return response

    form = CancelSlotForm(request.POST or None, initial={'student_id': student_obj.account_id})
    if request.method == 'POST' and form.is_valid():
        if form.cleaned_data['student_id'] != student_obj.account_id:
            form.add_error('student_id', "You can only cancel your own bookings.")
        else:
            result = cancel_slot(
                form.cleaned_data['room_id'],
                form.cleaned_data['start_time'],
                form.cleaned_data['student_id'],
            )
            if result.ok:
                messages.success(request, result.message)
                return redirect('slots:student_index')
            form.add_violations(result.violations)

    return render(request, 'slots/cancel.html', {
        'form': form,
        'my_bookings': _slots().filter(student=student_obj),
    })

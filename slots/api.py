"""
JSON API for slots, mounted under /api/slot/.

Reads list slots; PUT and DELETE run the same workflows as the web forms, so
the API cannot reach a state the interactive views forbid.
"""
import json
from datetime import datetime

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from accounts.models import Account
from .models import Room, Slot
from .workflows import book_slot, cancel_slot, remove_slot


def slot_to_json(slot):
    return {
        'RoomId': slot.room_id,
        'StartTime': slot.start_time.isoformat(),
        'StaffId': slot.staff_id,
        'StudentId': slot.student_id,
    }


def bad_request(errors):
    return JsonResponse({'errors': errors}, status=400)


def _slot_list(queryset):
    return JsonResponse([slot_to_json(s) for s in queryset], safe=False)


def _all_slots():
    return Slot.objects.select_related('room', 'staff', 'student')


@require_GET
def index(request):
    return _slot_list(_all_slots())


@require_GET
def student_index(request, student_id):
    if not Account.students().filter(account_id=student_id).exists():
        return bad_request({'StudentId': ["Student does not exist."]})
    return _slot_list(_all_slots().filter(student_id=student_id))


@require_GET
def staff_index(request, staff_id):
    if not Account.staff().filter(account_id=staff_id).exists():
        return bad_request({'StaffId': ["Staff does not exist."]})
    return _slot_list(_all_slots().filter(staff_id=staff_id))


def _parse_start_time(start_date, start_time):
    try:
        return datetime.strptime(f'{start_date} {start_time}', '%Y-%m-%d %H:%M')
    except ValueError:
        return None


@csrf_exempt
@require_http_methods(['PUT', 'DELETE'])
def slot_detail(request, room_id, start_date, start_time):
    slot_start = _parse_start_time(start_date, start_time)
    if slot_start is None:
        return bad_request({'StartTime': ["Invalid date or time, expected YYYY-MM-DD and HH:MM."]})

    if request.method == 'DELETE':
        return _delete(room_id, slot_start)
    return _put(request, room_id, slot_start)


def _put(request, room_id, slot_start):
    try:
        payload = json.loads(request.body or b'{}')
    except ValueError:
        return bad_request({'': ["Request body must be JSON."]})
    if not isinstance(payload, dict):
        return bad_request({'': ["Request body must be a JSON object."]})

    student_id = payload.get('StudentId') or None

    if student_id and not Account.students().filter(account_id=student_id).exists():
        return bad_request({'StudentId': ["Student does not exist."]})

    if not Room.objects.filter(room_id=room_id).exists():
        return bad_request({'RoomId': ["Room does not exist."]})

    slot = Slot.objects.filter(room_id=room_id, start_time=slot_start).first()
    if slot is None:
        return bad_request({'StartTime': ["Slot does not exist."]})

    if student_id:
        if slot.student_id == student_id:
            return JsonResponse({'ok': True})
        result = book_slot(room_id, slot_start, student_id)
    elif slot.student_id:
        result = cancel_slot(room_id, slot_start, slot.student_id)
    else:
        return JsonResponse({'ok': True})

    if not result.ok:
        return bad_request(result.errors_by_field())
    return JsonResponse({'ok': True})


def _delete(room_id, slot_start):
    if not Room.objects.filter(room_id=room_id).exists():
        return bad_request({'RoomId': ["Room does not exist."]})

    if not Slot.objects.filter(room_id=room_id, start_time=slot_start).exists():
        return bad_request({'StartTime': ["Slot does not exist."]})

    result = remove_slot(room_id, slot_start)
    if not result.ok:
        return bad_request(result.errors_by_field())
    return JsonResponse({'ok': True})

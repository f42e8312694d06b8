from django.urls import reverse

from accounts.models import Account
from slots.models import Slot
from tests.conftest import PASSWORD, STAFF_ID, STUDENT_ID, at, make_slot


def test_login_puts_account_in_session(client, seed):
    response = client.post(
        reverse('accounts:login', kwargs={'role': 'staff'}),
        {'email': 'e12345@rmit.edu.au', 'password': PASSWORD},
    )

    assert response.status_code == 302
    assert response.url == reverse('slots:staff_index')
    assert client.session['account_id'] == STAFF_ID
    assert client.session['account_role'] == Account.STAFF


def test_login_with_wrong_password(client, seed):
    response = client.post(
        reverse('accounts:login', kwargs={'role': 'staff'}),
        {'email': 'e12345@rmit.edu.au', 'password': 'nope'},
    )

    assert response.status_code == 200
    assert 'account_id' not in client.session


def test_staff_views_reject_students(student_client):
    response = student_client.get(reverse('slots:create'))

    assert response.status_code == 302
    assert response.url == reverse('accounts:role_selector')


def test_create_view_success(staff_client):
    response = staff_client.post(reverse('slots:create'), {'room_id': 'C', 'start_time': '2019-01-01 08:00'})

    assert response.status_code == 302
    assert response.url == reverse('slots:staff_index')
    assert Slot.objects.filter(room_id='C', start_time=at(8), staff_id=STAFF_ID).exists()


def test_create_view_shows_violations_on_fields(staff_client):
    response = staff_client.post(reverse('slots:create'), {'room_id': 'Z', 'start_time': '2019-01-01 08:00'})

    assert response.status_code == 200
    assert response.context['form'].errors['room_id'] == ["Room Z does not exist."]
    assert not Slot.objects.exists()


def test_create_view_rejects_times_off_the_hour(staff_client):
    response = staff_client.post(reverse('slots:create'), {'room_id': 'C', 'start_time': '2019-01-01 08:30'})

    assert response.status_code == 200
    assert response.context['form'].errors['start_time'] == ["Slots start on the hour."]


def test_remove_view(staff_client):
    make_slot('A', 9)

    response = staff_client.post(reverse('slots:remove'), {'room_id': 'A', 'start_time': '2019-01-01 09:00'})

    assert response.status_code == 302
    assert not Slot.objects.exists()


def test_book_view_uses_session_student(student_client):
    make_slot('A', 13)

    response = student_client.post(
        reverse('slots:book'),
        {'room_id': 'A', 'start_time': '2019-01-01 13:00', 'student_id': 's3604367'},
    )

    assert response.status_code == 302
    assert Slot.objects.get(room_id='A').student_id == STUDENT_ID


def test_book_view_daily_quota(student_client):
    make_slot('B', 13, student_id=STUDENT_ID)
    make_slot('A', 13)

    response = student_client.post(reverse('slots:book'), {'room_id': 'A', 'start_time': '2019-01-01 13:00'})

    assert response.status_code == 200
    assert "Student s1234567 has reached their maximum bookings for this day (01-01-2019)." \
        in response.context['form'].non_field_errors()
    assert Slot.objects.get(room_id='A').student_id is None


def test_cancel_view(student_client):
    make_slot('A', 13, student_id=STUDENT_ID)

    response = student_client.post(
        reverse('slots:cancel'),
        {'room_id': 'A', 'start_time': '2019-01-01 13:00', 'student_id': STUDENT_ID},
    )

    assert response.status_code == 302
    assert Slot.objects.get(room_id='A').student_id is None


def test_student_index_lists_bookings(student_client):
    make_slot('A', 13, student_id=STUDENT_ID)
    make_slot('B', 14)

    response = student_client.get(reverse('slots:student_index'))

    assert response.status_code == 200
    assert [s.room_id for s in response.context['my_bookings']] == ['A']

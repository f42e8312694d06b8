from datetime import datetime

import pytest

from accounts.models import Account
from slots.models import Room, Slot

STAFF_ID = 'e12345'
OTHER_STAFF_ID = 'e54321'
STUDENT_ID = 's1234567'
OTHER_STUDENT_ID = 's3604367'
PASSWORD = 'secret-pass'


def at(hour, day=1):
    return datetime(2019, 1, day, hour, 0, 0)


def make_slot(room_id, hour, staff_id=STAFF_ID, student_id=None, day=1):
    return Slot.objects.create(room_id=room_id, staff_id=staff_id, student_id=student_id, start_time=at(hour, day))


@pytest.fixture
def seed(db):
    for room_id in ['A', 'B', 'C', 'D']:
        Room.objects.create(room_id=room_id)

    accounts = [
        (STAFF_ID, 'Shawn', 'Taylor', 'e12345@rmit.edu.au', Account.STAFF),
        (OTHER_STAFF_ID, 'Bob', 'Doe', 'e54321@rmit.edu.au', Account.STAFF),
        (STUDENT_ID, 'Shawn', 'Taylor', 's1234567@student.rmit.edu.au', Account.STUDENT),
        (OTHER_STUDENT_ID, 'Johnny', 'Doe', 's3604367@student.rmit.edu.au', Account.STUDENT),
    ]
    for account_id, first_name, last_name, email, role in accounts:
        account = Account(account_id=account_id, first_name=first_name, last_name=last_name, email=email, role=role)
        account.set_password(PASSWORD)
        account.save()


def login_as(client, account_id, role):
    session = client.session
    session['account_id'] = account_id
    session['account_role'] = role
    session['is_authenticated'] = True
    session.save()
    return client


@pytest.fixture
def staff_client(client, seed):
    return login_as(client, STAFF_ID, Account.STAFF)


@pytest.fixture
def student_client(client, seed):
    return login_as(client, STUDENT_ID, Account.STUDENT)

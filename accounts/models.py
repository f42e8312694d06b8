# accounts/models.py
import re

from django.contrib.auth.hashers import check_password, make_password
from django.core.exceptions import ValidationError
from django.db import models

# =========================================================================================
# 1. ACCOUNT MODEL (one table for every role, the role is a tag instead of a subclass)
# =========================================================================================

STAFF_ID_PATTERN = re.compile(r'^e\d{5}$')
STUDENT_ID_PATTERN = re.compile(r'^s\d{7}$')


def validate_staff_id(value):
    if not value or not STAFF_ID_PATTERN.match(value):
        raise ValidationError(
            f"The staff ID {value} is invalid, it always starts with a letter ‘e’ followed by 5 numbers.",
            code='invalid_staff_id',
        )


def validate_student_id(value):
    if not value or not STUDENT_ID_PATTERN.match(value):
        raise ValidationError(
            f"The student ID {value} is invalid, it always starts with a letter ‘s’ followed by 7 numbers.",
            code='invalid_student_id',
        )


class Account(models.Model):
    STAFF = 'STAFF'
    STUDENT = 'STUDENT'
    ROLE_CHOICES = [
        (STAFF, 'Staff'),
        (STUDENT, 'Student'),
    ]

    # Maximum number of slots a staff member can create per day
    MAX_BOOKING_PER_DAY = 4

    STAFF_EMAIL_SUFFIX = 'rmit.edu.au'
    STUDENT_EMAIL_SUFFIX = 'student.rmit.edu.au'

    ID_VALIDATORS = {
        STAFF: validate_staff_id,
        STUDENT: validate_student_id,
    }

    # e12345 for staff, s1234567 for students
    account_id = models.CharField(max_length=20, primary_key=True)
    first_name = models.CharField(max_length=100, verbose_name='First Name')
    last_name = models.CharField(max_length=100, verbose_name='Last Name')
    email = models.EmailField(unique=True, blank=True, null=True)
    password = models.CharField(max_length=255, blank=True)
    is_active = models.BooleanField(default=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES)

    class Meta:
        db_table = 'accounts_account'
        verbose_name = 'Account'
        verbose_name_plural = 'Accounts'
        ordering = ['account_id']

    def __str__(self):
        return f'{self.account_id} - {self.full_name} ({self.role})'

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'.strip()

    @property
    def is_staff_member(self):
        return self.role == self.STAFF

    @property
    def is_student(self):
        return self.role == self.STUDENT

    def set_password(self, raw_password):
        self.password = make_password(raw_password)

    def check_password(self, raw_password):
        return bool(self.password) and check_password(raw_password, self.password)

    def clean(self):
        errors = {}

        if not (self.first_name or '').strip():
            errors['first_name'] = "The First Name field is required."
        if not (self.last_name or '').strip():
            errors['last_name'] = "The Last Name field is required."

        id_validator = self.ID_VALIDATORS.get(self.role)
        if id_validator is None:
            errors['role'] = f"Unknown role {self.role}."
        else:
            try:
                id_validator(self.account_id)
            except ValidationError as e:
                errors['account_id'] = e.messages

        if errors:
            raise ValidationError(errors)

    @classmethod
    def staff(cls):
        return cls.objects.filter(role=cls.STAFF)

    @classmethod
    def students(cls):
        return cls.objects.filter(role=cls.STUDENT)

from django import forms
from django.core.exceptions import ValidationError

from .models import Account


class RegisterAccountForm(forms.ModelForm):
    ROLE = None
    EMAIL_SUFFIX = None

    password = forms.CharField(widget=forms.PasswordInput, required=False)

    class Meta:
        model = Account
        fields = ['account_id', 'first_name', 'last_name', 'email', 'password']
        error_messages = {
            'first_name': {'required': "The First Name field is required."},
            'last_name': {'required': "The Last Name field is required."},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Model.clean() validates the id against the role, so it has to be known up front
        self.instance.role = self.ROLE

    def clean_account_id(self):
        account_id = self.cleaned_data['account_id'].strip()
        Account.ID_VALIDATORS[self.ROLE](account_id)
        if Account.objects.filter(account_id=account_id).exists():
            raise ValidationError(f"Account {account_id} already exists.")
        return account_id

    def clean_email(self):
        email = self.cleaned_data.get('email')
        if email and not email.lower().endswith('@' + self.EMAIL_SUFFIX):
            raise ValidationError(f"The email must end with @{self.EMAIL_SUFFIX}.")
        return email

    def save(self, commit=True):
        account = super().save(commit=False)
        raw_password = self.cleaned_data.get('password')
        if raw_password:
            account.set_password(raw_password)
        else:
            account.password = ''
        if commit:
            account.save()
        return account


class RegisterStaffForm(RegisterAccountForm):
    ROLE = Account.STAFF
    EMAIL_SUFFIX = Account.STAFF_EMAIL_SUFFIX


class RegisterStudentForm(RegisterAccountForm):
    ROLE = Account.STUDENT
    EMAIL_SUFFIX = Account.STUDENT_EMAIL_SUFFIX


class LoginForm(forms.Form):
    email = forms.EmailField()
    password = forms.CharField(widget=forms.PasswordInput)

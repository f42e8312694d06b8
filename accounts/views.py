# accounts/views.py
import logging

from django.contrib import messages
from django.shortcuts import redirect, render

from .forms import LoginForm, RegisterStaffForm, RegisterStudentForm
from .models import Account

logger = logging.getLogger(__name__)

INDEX_BY_ROLE = {
    Account.STAFF: 'slots:staff_index',
    Account.STUDENT: 'slots:student_index',
}

# ----------------------------------------------------------------------
# 0. SESSION HELPERS
# ----------------------------------------------------------------------

def get_session_account(request, role):
    """
    Resolves the logged in account for ``role`` from the session.
    Returns (account, None) or (None, redirect_response).
    """
    if not request.session.get('is_authenticated') or request.session.get('account_role') != role:
        messages.warning(request, "Access denied or wrong role.")
        return None, redirect('accounts:role_selector')

    account_id = request.session['account_id']
    try:
        account = Account.objects.get(account_id=account_id, role=role, is_active=True)
        return account, None
    except Account.DoesNotExist:
        messages.error(request, "Account data not found. You have been logged out.")
        return None, redirect('accounts:logout')


def check_staff_auth(request):
    return get_session_account(request, Account.STAFF)


def check_student_auth(request):
    return get_session_account(request, Account.STUDENT)

# ----------------------------------------------------------------------
# 1. AUTHENTICATION VIEWS
# ----------------------------------------------------------------------

def role_selector(request):
    """Landing page where the user picks a role."""
    if request.session.get('is_authenticated'):
        return redirect(INDEX_BY_ROLE[request.session['account_role']])

    return render(request, 'accounts/role_selector.html', {'roles': [r[0] for r in Account.ROLE_CHOICES]})


def login_account(request, role):
    role_upper = role.upper()
    if role_upper not in INDEX_BY_ROLE:
        messages.error(request, f"Unknown role {role}.")
        return redirect('accounts:role_selector')

    form = LoginForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        try:
            account = Account.objects.get(email=form.cleaned_data['email'], role=role_upper)

            if not account.is_active:
                messages.error(request, "This account is disabled.")
                return render(request, 'accounts/login.html', {'role': role_upper, 'form': form})

            if not account.check_password(form.cleaned_data['password']):
                messages.error(request, "Incorrect password.")
                return render(request, 'accounts/login.html', {'role': role_upper, 'form': form})

            request.session['account_id'] = account.account_id
            request.session['account_role'] = account.role
            request.session['is_authenticated'] = True
            logger.info("Account %s logged in as %s", account.account_id, account.role)

            return redirect(INDEX_BY_ROLE[account.role])

        except Account.DoesNotExist:
            messages.error(request, f"Invalid credentials for role {role_upper}.")

    return render(request, 'accounts/login.html', {'role': role_upper, 'form': form})


def logout_account(request):
    if 'account_id' in request.session:
        request.session.flush()
    messages.info(request, "Logged out.")
    return redirect('accounts:role_selector')

# ----------------------------------------------------------------------
# 2. REGISTRATION
# ----------------------------------------------------------------------

def _register(request, form_class, template):
    form = form_class(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        account = form.save()
        messages.success(request, f"Account {account.account_id} registered.")
        return redirect('accounts:login', role=account.role.lower())
    return render(request, template, {'form': form})


def register_staff(request):
    return _register(request, RegisterStaffForm, 'accounts/register.html')


def register_student(request):
    return _register(request, RegisterStudentForm, 'accounts/register.html')

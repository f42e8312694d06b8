# accounts/admin.py
from django.contrib import admin
from .models import Account

# -------------------------------------------------------------------------
# 1. ACCOUNT ADMINISTRATION (staff and students share the same table)
# -------------------------------------------------------------------------

@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ('account_id', 'first_name', 'last_name', 'email', 'role', 'is_active')
    list_filter = ('role', 'is_active')

    search_fields = ('account_id', 'first_name', 'last_name', 'email')

    fieldsets = (
        (None, {'fields': ('account_id', 'first_name', 'last_name', 'email')}),
        ('Account settings', {'fields': ('role', 'is_active')}),
    )

    def get_readonly_fields(self, request, obj=None):
        # The id is the staff/student number, it cannot change once created
        if obj is not None:
            return ('account_id', 'role')
        return ()

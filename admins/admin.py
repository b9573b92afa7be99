from django.contrib import admin

from .models import Admin


@admin.register(Admin)
class AdminAccountAdmin(admin.ModelAdmin):
    list_display = ('email', 'full_name', 'role', 'is_active', 'last_login', 'created_at')
    list_filter = ('role', 'is_active', 'created_at')
    search_fields = ('email', 'full_name')
    readonly_fields = ('last_login', 'created_at', 'updated_at')
    exclude = ('password', 'groups', 'user_permissions')

    def has_delete_permission(self, request, obj=None):
        # Accounts are deactivated, never removed
        return False

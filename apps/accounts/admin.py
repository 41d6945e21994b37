# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, AdminPermission


BADGE = (
    '<span style="background: {}; color: white; padding: 3px 8px; '
    'border-radius: 10px; font-size: 11px;">{}</span>'
)

ROLE_COLORS = {
    User.Role.ADMIN: '#4B5563',
    User.Role.RETAILER: '#2563EB',
    User.Role.AGENT: '#7C3AED',
    User.Role.TERMINAL: '#0D9488',
}


class AdminPermissionInline(admin.TabularInline):
    model = AdminPermission
    extra = 0
    fields = ['permission_key', 'created_at']
    readonly_fields = ['created_at']


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for back-office users.

    Lists every role; admin permissions are edited inline.
    """

    list_display = [
        'email',
        'full_name',
        'role_badge',
        'status_badge',
        'is_super_admin',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'status',
        'is_super_admin',
        'is_staff',
        'created_at',
    ]

    search_fields = [
        'email',
        'full_name',
        'phone',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'full_name', 'phone', 'password')
        }),
        ('Role', {
            'fields': ('role', 'status', 'is_super_admin'),
        }),
        ('Django access', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'full_name', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'created_at',
        'updated_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']
    inlines = [AdminPermissionInline]

    def role_badge(self, obj):
        """Display role as colored badge."""
        return format_html(BADGE, ROLE_COLORS.get(obj.role, '#999'), obj.get_role_display())
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    def status_badge(self, obj):
        """Display status as colored badge."""
        color = '#6B8E5E' if obj.status == User.Status.ACTIVE else '#B85C5C'
        return format_html(BADGE, color, obj.get_status_display())
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    actions = ['activate_users', 'deactivate_users']

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        count = queryset.update(status=User.Status.ACTIVE)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users (super admins are skipped)."""
        safe_queryset = queryset.filter(is_super_admin=False)
        count = safe_queryset.update(status=User.Status.INACTIVE)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} super admin(s).'
        self.message_user(request, msg)

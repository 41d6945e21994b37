from django.contrib import admin
from django.utils.html import format_html

from .models import Retailer, RetailerStatus, Terminal

STATUS_COLORS = {
    RetailerStatus.ACTIVE: '#6B8E5E',
    RetailerStatus.SUSPENDED: '#D4A574',
    RetailerStatus.INACTIVE: '#B85C5C',
}


class TerminalInline(admin.TabularInline):
    model = Terminal
    extra = 0
    fields = ['name', 'short_code', 'status', 'serial_number', 'last_active']
    readonly_fields = ['short_code', 'last_active']


@admin.register(Retailer)
class RetailerAdmin(admin.ModelAdmin):
    list_display = [
        'name',
        'short_code',
        'agent',
        'commission_group',
        'balance',
        'credit_limit',
        'commission_balance',
        'status_badge',
    ]
    list_filter = ['status', 'commission_group']
    search_fields = ['name', 'short_code', 'contact_name', 'contact_email']
    ordering = ['name']
    list_select_related = ['agent', 'commission_group']
    readonly_fields = ['short_code', 'created_at', 'updated_at']
    raw_id_fields = ['user', 'agent']
    inlines = [TerminalInline]

    fieldsets = (
        (None, {
            'fields': ('name', 'short_code', 'user', 'status')
        }),
        ('Contact', {
            'fields': (
                'contact_name', 'contact_email', 'contact_phone', 'location',
                'secondary_contact_name', 'secondary_contact_phone',
            )
        }),
        ('Commission', {
            'fields': ('agent', 'commission_group')
        }),
        ('Balances', {
            'fields': ('balance', 'credit_limit', 'credit_used', 'commission_balance')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def status_badge(self, obj):
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            STATUS_COLORS.get(obj.status, '#999'),
            obj.get_status_display(),
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    actions = ['suspend_retailers']

    @admin.action(description='Suspend selected retailers')
    def suspend_retailers(self, request, queryset):
        count = queryset.update(status=RetailerStatus.SUSPENDED)
        self.message_user(request, f'Suspended {count} retailer(s).')


@admin.register(Terminal)
class TerminalAdmin(admin.ModelAdmin):
    list_display = ['name', 'short_code', 'retailer', 'status', 'last_active']
    list_filter = ['status']
    search_fields = ['name', 'short_code', 'serial_number', 'imei_number']
    list_select_related = ['retailer']
    raw_id_fields = ['retailer', 'user']
    readonly_fields = ['short_code', 'last_active', 'created_at']

from django.contrib import admin
from django.utils.html import format_html

from .models import VoucherType, VoucherInventory, VoucherStatus


@admin.register(VoucherType)
class VoucherTypeAdmin(admin.ModelAdmin):
    list_display = [
        'name',
        'network_provider',
        'category',
        'sub_category',
        'supplier_commission_pct',
        'is_active',
    ]
    list_filter = ['is_active', 'network_provider', 'category', 'sub_category']
    search_fields = ['name']
    ordering = ['name']


STATUS_COLORS = {
    VoucherStatus.AVAILABLE: '#6B8E5E',
    VoucherStatus.SOLD: '#2563EB',
    VoucherStatus.DISABLED: '#B85C5C',
}


@admin.register(VoucherInventory)
class VoucherInventoryAdmin(admin.ModelAdmin):
    list_display = [
        'voucher_type',
        'amount',
        'serial_number',
        'expiry_date',
        'status_badge',
        'created_at',
    ]
    list_filter = ['status', 'voucher_type']
    search_fields = ['serial_number', 'pin']
    ordering = ['-created_at']
    date_hierarchy = 'created_at'
    list_select_related = ['voucher_type']
    readonly_fields = ['created_at', 'updated_at', 'uploaded_by']

    def status_badge(self, obj):
        """Display status as colored badge."""
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            STATUS_COLORS.get(obj.status, '#999'),
            obj.get_status_display(),
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    actions = ['disable_vouchers']

    @admin.action(description='Disable selected vouchers')
    def disable_vouchers(self, request, queryset):
        """Disable selected vouchers (sold vouchers are skipped)."""
        count = queryset.exclude(status=VoucherStatus.SOLD).update(status=VoucherStatus.DISABLED)
        self.message_user(request, f'Disabled {count} voucher(s).')

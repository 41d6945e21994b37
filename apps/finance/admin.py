from django.contrib import admin
from django.utils.html import format_html

from .models import (
    CreditLimitAdjustment,
    DepositAdjustmentType,
    DepositFeeConfiguration,
    RetailerDeposit,
)


@admin.register(DepositFeeConfiguration)
class DepositFeeConfigurationAdmin(admin.ModelAdmin):
    list_display = ['deposit_method', 'fee_type', 'fee_value', 'is_active', 'updated_at']
    list_filter = ['fee_type', 'is_active']
    ordering = ['deposit_method']


class _ReadOnlyAuditAdmin(admin.ModelAdmin):
    """Audit rows are written by the services only."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(RetailerDeposit)
class RetailerDepositAdmin(_ReadOnlyAuditAdmin):
    list_display = [
        'retailer',
        'type_badge',
        'deposit_method',
        'amount_deposited',
        'fee_amount',
        'net_amount',
        'balance_after',
        'processed_by',
        'created_at',
    ]
    list_filter = ['adjustment_type', 'deposit_method']
    search_fields = ['retailer__name', 'retailer__short_code', 'notes']
    list_select_related = ['retailer', 'processed_by']
    date_hierarchy = 'created_at'

    def type_badge(self, obj):
        color = '#6B8E5E' if obj.adjustment_type == DepositAdjustmentType.DEPOSIT else '#B85C5C'
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            color,
            obj.get_adjustment_type_display(),
        )
    type_badge.short_description = 'Type'
    type_badge.admin_order_field = 'adjustment_type'


@admin.register(CreditLimitAdjustment)
class CreditLimitAdjustmentAdmin(_ReadOnlyAuditAdmin):
    list_display = [
        'retailer',
        'adjustment_type',
        'amount',
        'credit_limit_before',
        'credit_limit_after',
        'processed_by',
        'created_at',
    ]
    list_filter = ['adjustment_type']
    search_fields = ['retailer__name', 'retailer__short_code', 'notes']
    list_select_related = ['retailer', 'processed_by']
    date_hierarchy = 'created_at'

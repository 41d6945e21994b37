from django.contrib import admin
from django.utils.html import format_html

from .models import CommissionGroup, CommissionGroupRate, VoucherCommissionOverride


class CommissionGroupRateInline(admin.TabularInline):
    model = CommissionGroupRate
    extra = 0
    fields = ['voucher_type', 'supplier_pct', 'retailer_pct', 'agent_pct']
    autocomplete_fields = ['voucher_type']


@admin.register(CommissionGroup)
class CommissionGroupAdmin(admin.ModelAdmin):
    list_display = ['name', 'active_badge', 'rate_count', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name', 'description']
    ordering = ['-created_at']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [CommissionGroupRateInline]

    def active_badge(self, obj):
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            '#6B8E5E' if obj.is_active else '#999',
            'Active' if obj.is_active else 'Archived',
        )
    active_badge.short_description = 'Status'
    active_badge.admin_order_field = 'is_active'

    def rate_count(self, obj):
        return obj.rates.count()
    rate_count.short_description = 'Rates'

    actions = ['archive_groups']

    @admin.action(description='Archive selected groups')
    def archive_groups(self, request, queryset):
        count = queryset.update(is_active=False)
        self.message_user(request, f'Archived {count} group(s).')


@admin.register(VoucherCommissionOverride)
class VoucherCommissionOverrideAdmin(admin.ModelAdmin):
    list_display = [
        'voucher_type',
        'amount',
        'scope',
        'commission_type',
        'supplier_pct',
        'retailer_pct',
        'agent_pct',
    ]
    list_filter = ['commission_type', 'commission_group', 'voucher_type']
    list_select_related = ['voucher_type', 'commission_group']
    ordering = ['voucher_type__name', 'amount']

    def scope(self, obj):
        return obj.commission_group.name if obj.commission_group_id else 'Global'
    scope.short_description = 'Group'

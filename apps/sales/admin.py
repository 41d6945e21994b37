from django.contrib import admin

from .models import Sale


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = [
        'ref_number',
        'terminal',
        'sale_amount',
        'supplier_commission',
        'retailer_commission',
        'agent_commission',
        'profit',
        'created_at',
    ]
    search_fields = ['ref_number', 'terminal__name', 'terminal__short_code']
    list_select_related = ['terminal']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    readonly_fields = [
        'terminal', 'voucher_inventory', 'sale_amount', 'supplier_commission',
        'retailer_commission', 'agent_commission', 'profit', 'ref_number',
        'batch_id', 'created_at',
    ]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

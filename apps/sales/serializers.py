"""
Serializers for the sales app.

Input serializers validate sale requests and report query parameters;
response serializers document the report payloads.
"""

from rest_framework import serializers

from apps.vouchers.models import VoucherType

from .models import Sale


# =============================================================================
# Input Serializers
# =============================================================================

class SaleCreateSerializer(serializers.Serializer):
    voucher_type_id = serializers.PrimaryKeyRelatedField(
        queryset=VoucherType.objects.filter(is_active=True)
    )
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=1)
    quantity = serializers.IntegerField(min_value=1, max_value=100, default=1)


class DateRangeQuerySerializer(serializers.Serializer):
    """Inclusive report date range; both bounds are optional."""

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError({
                'end_date': 'End date must be on or after start date'
            })
        return attrs


class ExportFormatQuerySerializer(serializers.Serializer):
    format = serializers.ChoiceField(choices=['csv', 'xlsx'], required=False, default='csv')


class DashboardQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)


# =============================================================================
# Response Serializers
# =============================================================================

class SaleSerializer(serializers.ModelSerializer):
    voucher_type = serializers.CharField(source='voucher_inventory.voucher_type.name', read_only=True)
    pin = serializers.CharField(source='voucher_inventory.pin', read_only=True)
    serial_number = serializers.CharField(source='voucher_inventory.serial_number', read_only=True)
    expiry_date = serializers.DateField(source='voucher_inventory.expiry_date', read_only=True)
    terminal_name = serializers.CharField(source='terminal.name', read_only=True)

    class Meta:
        model = Sale
        fields = [
            'id',
            'ref_number',
            'batch_id',
            'terminal',
            'terminal_name',
            'voucher_type',
            'sale_amount',
            'pin',
            'serial_number',
            'expiry_date',
            'retailer_commission',
            'created_at',
        ]
        read_only_fields = fields


class SalesReportRowSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    created_at = serializers.DateTimeField()
    terminal_name = serializers.CharField()
    terminal_short_code = serializers.CharField()
    retailer_name = serializers.CharField()
    retailer_short_code = serializers.CharField()
    agent_name = serializers.CharField(allow_blank=True)
    commission_group_name = serializers.CharField(allow_blank=True)
    commission_group_id = serializers.CharField(allow_blank=True)
    voucher_type = serializers.CharField()
    supplier_commission_pct = serializers.DecimalField(max_digits=5, decimal_places=2)
    supplier_commission = serializers.DecimalField(max_digits=14, decimal_places=2)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    retailer_commission = serializers.DecimalField(max_digits=14, decimal_places=2)
    agent_commission = serializers.DecimalField(max_digits=14, decimal_places=2)
    profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    ref_number = serializers.CharField()
    quantity = serializers.IntegerField()
    sale_ids = serializers.ListField(child=serializers.UUIDField())


class EarningsSummarySerializer(serializers.Serializer):
    voucher_type = serializers.CharField()
    total_sales = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    retailer_commission = serializers.DecimalField(max_digits=14, decimal_places=2)
    agent_commission = serializers.DecimalField(max_digits=14, decimal_places=2)
    platform_commission = serializers.DecimalField(max_digits=14, decimal_places=2)


class InventoryReportSerializer(serializers.Serializer):
    voucher_type = serializers.CharField()
    available = serializers.IntegerField()
    sold = serializers.IntegerField()
    disabled = serializers.IntegerField()


class _PeriodTotalsSerializer(serializers.Serializer):
    sales_count = serializers.IntegerField()
    sales_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    platform_commission = serializers.DecimalField(max_digits=14, decimal_places=2)


class _RetailerCountsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    active = serializers.IntegerField()


class _DailySalesSerializer(serializers.Serializer):
    day = serializers.DateField()
    sales_count = serializers.IntegerField()
    sales_amount = serializers.DecimalField(max_digits=14, decimal_places=2)


class DashboardSerializer(serializers.Serializer):
    date = serializers.DateField()
    retailers = _RetailerCountsSerializer()
    today = _PeriodTotalsSerializer()
    last_30_days = _PeriodTotalsSerializer()
    daily_sales = _DailySalesSerializer(many=True)
